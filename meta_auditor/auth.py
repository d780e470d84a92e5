from datetime import datetime, timedelta
from jose import JWTError, jwt, ExpiredSignatureError
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from typing import Callable, Optional
from meta_auditor.constants import ALL_CAPABILITIES, Capability
from meta_auditor.database import get_db
from meta_auditor.exceptions import AuthenticationError, AuthorizationError
from meta_auditor.models.user import User
from meta_auditor.permissions_config.permissions import get_role_permissions
from .constants import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
import logging

# Initialize logging
logger = logging.getLogger(__name__)

# Cookie set by the host's login flow
ACCESS_TOKEN_COOKIE = "access_token"


# Function to create an access token with an expiration time
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})

    if "sub" not in to_encode:
        raise ValueError("Missing 'sub' claim (email or username) in token data.")

    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


# Function to decode an access token
def decode_access_token(token: str) -> str:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        logger.warning("Token expired")
        raise AuthenticationError("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT decoding failed: {str(e)}")
        raise AuthenticationError("Invalid token")

    email: str = payload.get("sub")
    if email is None:
        logger.warning("Token is missing 'sub' claim")
        raise AuthenticationError("Token does not contain 'sub' field.")
    return email


def _token_from_request(request: Request) -> Optional[str]:
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[len("Bearer "):]
    return None


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    token = _token_from_request(request)
    if not token:
        logger.warning("No access token on request")
        raise AuthenticationError("Could not validate credentials")

    email = decode_access_token(token)

    result = await db.execute(select(User).options(selectinload(User.role)).where(User.email == email))
    user = result.scalars().first()
    if user is None:
        logger.warning(f"User with email '{email}' not found.")
        raise AuthenticationError("Could not validate credentials")

    request.state.user = user
    return user


def has_capability(user: User, capability: Capability | str) -> bool:
    """
    Check whether a user's role grants a capability.

    Capabilities stored on the role row are combined with the built-in
    role table; "*" grants everything.
    """
    capability = capability.value if isinstance(capability, Capability) else capability
    if not user.role:
        return False

    granted = set(user.role.permissions or [])
    granted.update(get_role_permissions(user.role.name))

    if ALL_CAPABILITIES in granted or capability in granted:
        logger.debug(f"Capability '{capability}' granted for role '{user.role.name}'")
        return True
    return False


# Dependency factory ensuring the current user holds a capability
def require_capability(capability: Capability) -> Callable[..., User]:
    async def _current_user_with_capability(
        user: User = Depends(get_current_user),
    ) -> User:
        if not has_capability(user, capability):
            logger.warning(
                f"Permission denied for role '{user.role.name if user.role else 'None'}'. "
                f"Required: '{capability.value}'."
            )
            raise AuthorizationError(required_permission=capability.value)
        return user

    return _current_user_with_capability
