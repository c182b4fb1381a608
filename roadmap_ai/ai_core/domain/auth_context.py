from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class AuthContext:
    """
    Authenticated caller of a request.

    Built per request by the DRF authentication classes and exposed as
    `request.user`; nothing keeps it beyond the request.
    """

    uid: str
    email: str = ""
    display_name: str = ""
    photo_url: str = ""

    @property
    def is_authenticated(self) -> bool:
        return bool(self.uid)

    @property
    def pk(self) -> str:
        # DRF UserRateThrottle keys on request.user.pk
        return self.uid

    def to_session(self) -> Dict[str, Any]:
        return {
            "uid": self.uid,
            "email": self.email,
            "display_name": self.display_name,
            "photo_url": self.photo_url,
        }

    @classmethod
    def from_session(cls, data: Dict[str, Any]) -> "AuthContext":
        return cls(
            uid=str(data.get("uid") or ""),
            email=str(data.get("email") or ""),
            display_name=str(data.get("display_name") or ""),
            photo_url=str(data.get("photo_url") or ""),
        )

    def public_dict(self) -> Dict[str, str]:
        return {"uid": self.uid, "email": self.email, "displayName": self.display_name}
