"""Domain-specific exceptions"""

from typing import Dict, Optional


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ApiTransportError(DomainException):
    """GroChain backend is unreachable or timed out"""

    pass


class ApiResponseError(DomainException):
    """Backend answered with an error status or an unsuccessful envelope"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(DomainException):
    """Client-side form validation failed"""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in errors.items()))
        self.errors = errors


class NotAuthenticatedError(DomainException):
    """Operation requires a signed-in user"""

    pass
