"""Credit score rating bands"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class ScoreBand:
    """Rating band with its display range and colours"""

    min_score: int
    max_score: int
    rating: str
    text_color: str
    bar_color: str


# Ordered from best to worst; lower bounds are inclusive
SCORE_BANDS: List[ScoreBand] = [
    ScoreBand(750, 850, "Excellent", "text-green-600", "bg-green-500"),
    ScoreBand(700, 749, "Good", "text-blue-600", "bg-blue-500"),
    ScoreBand(650, 699, "Fair", "text-yellow-600", "bg-yellow-500"),
    ScoreBand(600, 649, "Poor", "text-orange-600", "bg-orange-500"),
    ScoreBand(300, 599, "Very Poor", "text-red-600", "bg-red-500"),
]


def score_band(score: int) -> ScoreBand:
    """Find the band a score falls in; anything under 600 is Very Poor"""
    for band in SCORE_BANDS[:-1]:
        if score >= band.min_score:
            return band
    return SCORE_BANDS[-1]


def credit_rating(score: int) -> str:
    return score_band(score).rating


def credit_color(score: int) -> str:
    return score_band(score).text_color
