"""Constants package for the SEO Meta Auditor."""

from .auth import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, NONCE_LIFETIME_SECONDS, SECRET_KEY
from .roles import ALL_CAPABILITIES, Capability, RoleEnum, RoleName

__all__ = [
    # Role constants
    "RoleName",
    "RoleEnum",
    "Capability",
    "ALL_CAPABILITIES",
    # Auth constants
    "SECRET_KEY",
    "ALGORITHM",
    "ACCESS_TOKEN_EXPIRE_MINUTES",
    "NONCE_LIFETIME_SECONDS",
]
