from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Back-office account (director, admin, front-desk staff). Kiosk users are employees, not users."""

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    is_active: bool = True
