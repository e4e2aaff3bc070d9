"""
Session token service and request guards
"""
import jwt
from datetime import datetime, timedelta
from fastapi import Depends, Request, Response
from typing import Optional
from .config import settings
from .exceptions import ForbiddenError, InvalidTokenError, UnauthenticatedError
from .logger import logger
from .schemas import TokenIdentity, normalize_email

SECRET_KEY = settings.JWT_SECRET_KEY
ALGORITHM = settings.JWT_ALGORITHM
ACCESS_TOKEN_EXPIRE_DAYS = settings.JWT_ACCESS_TOKEN_EXPIRE_DAYS
AUTH_COOKIE_NAME = settings.AUTH_COOKIE_NAME

def create_access_token(email: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed session token bound to an email"""
    now = datetime.utcnow()
    expire = now + (expires_delta if expires_delta is not None else timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS))
    to_encode = {
        "email": email,
        "exp": expire,
        "iat": now
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

def decode_access_token(token: str) -> TokenIdentity:
    """
    Verify a session token and return the identity it carries.

    Bad signatures, malformed tokens, expired tokens and tokens without an
    email claim all raise the same InvalidTokenError.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.PyJWTError as e:
        raise InvalidTokenError(str(e)) from e

    email = payload.get("email")
    if not isinstance(email, str) or not email:
        raise InvalidTokenError("Token carries no email claim")
    return TokenIdentity(email=normalize_email(email))

def _cookie_policy() -> dict:
    if settings.is_production:
        return {"httponly": True, "secure": True, "samesite": "none"}
    return {"httponly": True, "secure": False, "samesite": "strict"}

def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        AUTH_COOKIE_NAME,
        token,
        max_age=ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        **_cookie_policy(),
    )

def clear_auth_cookie(response: Response) -> None:
    # Overwrites the cookie with max-age=0; the token itself stays valid until it expires
    response.delete_cookie(AUTH_COOKIE_NAME, **_cookie_policy())

async def get_current_identity(request: Request) -> TokenIdentity:
    """
    Dependency that verifies the session cookie and attaches the identity
    to request.state.identity
    """
    token = request.cookies.get(AUTH_COOKIE_NAME)
    if not token:
        raise UnauthenticatedError()

    try:
        identity = decode_access_token(token)
    except InvalidTokenError as e:
        logger.info(f"Rejected session token: {e}", extra={"request_path": request.url.path})
        raise UnauthenticatedError()

    request.state.identity = identity
    return identity

def owner_matches(identity: TokenIdentity, owner_email: Optional[str]) -> bool:
    return owner_email is not None and identity.email == owner_email

def ensure_owner(identity: TokenIdentity, owner_email: Optional[str]) -> None:
    if not owner_matches(identity, owner_email):
        logger.warning(
            "Ownership mismatch",
            extra={"token_email": identity.email, "owner_email": owner_email},
        )
        raise ForbiddenError()

async def require_path_owner(
    email: str,
    identity: TokenIdentity = Depends(get_current_identity)
) -> TokenIdentity:
    """
    Dependency for routes scoped by an {email} path parameter.

    The path email is normalized like stored emails, so the returned
    identity's email is the value to filter rows by.
    """
    ensure_owner(identity, normalize_email(email))
    return identity
