"""State and result types for the implicit grant flow"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class TokenState:
    """Holder for the access token received from the redirect callback

    Attributes:
        access_token: Most recently received access token, None until a
            callback carrying one has been handled
    """
    access_token: Optional[str] = None

    def has_token(self) -> bool:
        return bool(self.access_token)


@dataclass
class ProfileResult:
    """Outcome of a single profile request

    Attributes:
        profile: Parsed JSON object from the profile endpoint (success only)
        error: Human readable failure reason (failure only)
        status_code: HTTP status of the response, None if no response arrived
    """
    profile: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.profile is not None and self.error is None

    @classmethod
    def success(cls, profile: Dict[str, Any], status_code: int) -> "ProfileResult":
        return cls(profile=profile, status_code=status_code)

    @classmethod
    def failure(cls, reason: str, status_code: Optional[int] = None) -> "ProfileResult":
        return cls(error=reason, status_code=status_code)
