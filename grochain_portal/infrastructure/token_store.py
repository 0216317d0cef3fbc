"""File-backed persistence for auth tokens"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from grochain_portal.config import settings


class TokenStore:
    """Keeps the token pair and cached user between runs"""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or settings.token_file)

    def load(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            # A truncated write leaves nothing worth restoring
            return None

    def save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data), encoding="utf-8")
        os.replace(tmp, self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
