"""
Security Utilities

Action nonces for privileged links and path validation for files written
on behalf of the host.
"""

import logging
import secrets
import time
from pathlib import Path
from typing import Any

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from meta_auditor.constants import NONCE_LIFETIME_SECONDS

logger = logging.getLogger(__name__)


class NonceManager:
    """
    Signed, single-use tokens bound to an action and a user.

    - The action name salts the signature, so a token for one action is
      rejected by every other action
    - The user id is part of the signed payload
    - Tokens expire after ``lifetime`` seconds
    - A token is consumed by its first successful verification
    """

    def __init__(self, secret_key: str, lifetime: int = NONCE_LIFETIME_SECONDS):
        self.serializer = URLSafeTimedSerializer(secret_key)
        self.lifetime = lifetime
        self._consumed: dict[str, float] = {}

    def create(self, action: str, user_id: Any) -> str:
        """Generate a new nonce for ``action`` on behalf of ``user_id``."""
        payload = {"uid": user_id, "rnd": secrets.token_urlsafe(16)}
        return self.serializer.dumps(payload, salt=action)

    def verify(self, token: str | None, action: str, user_id: Any) -> bool:
        """Validate and consume a nonce. Never raises."""
        self._prune_consumed()
        if not token or token in self._consumed:
            return False

        try:
            payload = self.serializer.loads(token, salt=action, max_age=self.lifetime)
        except SignatureExpired:
            logger.debug(f"Expired nonce for action '{action}'")
            return False
        except BadSignature:
            logger.debug(f"Bad nonce signature for action '{action}'")
            return False

        if not isinstance(payload, dict) or payload.get("uid") != user_id:
            return False

        self._consumed[token] = time.time()
        return True

    def _prune_consumed(self) -> None:
        # Past the lifetime a token fails its signature check anyway
        cutoff = time.time() - self.lifetime - 1
        self._consumed = {t: used for t, used in self._consumed.items() if used > cutoff}


def validate_file_path(file_path: str | Path, base_dir: Path) -> Path:
    """
    Validate that a file path is within the allowed base directory.

    Prevents path traversal by ensuring the resolved path stays within the
    base directory.

    Args:
        file_path: Path to validate, relative paths are taken from base_dir
        base_dir: Base directory that file must be within

    Returns:
        Resolved Path object

    Raises:
        ValueError: If path is outside base directory

    Example:
        >>> from pathlib import Path
        >>> base = Path("/srv/plugins/wp-all-import")
        >>> validate_file_path("readme.txt", base)  # OK
        >>> validate_file_path("../../etc/passwd", base)  # Raises ValueError
    """
    base_resolved = base_dir.resolve()
    resolved_path = (base_resolved / Path(file_path)).resolve()

    try:
        resolved_path.relative_to(base_resolved)
    except ValueError as err:
        logger.warning(
            f"Path traversal attempt detected: {file_path} (resolved: {resolved_path}) "
            f"is outside base directory {base_resolved}"
        )
        raise ValueError(f"Path '{file_path}' escapes {base_resolved}") from err

    return resolved_path
