"""Security utilities for JWT authentication and password hashing."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError
from passlib.context import CryptContext

from blog_backend.config import settings
from blog_backend.core.exceptions import InternalError, InvalidTokenError


# Password hashing context
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# JWT settings
ALGORITHM = "HS256"


def get_password_hash(password: str) -> str:
    """Hash a password using PBKDF2."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Return False if the hash scheme is unsupported
        return False


def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """Create a JWT access token.
    
    Args:
        data: Dictionary containing token claims (e.g., {'sub': '1', 'email': ...})
        expires_delta: Custom expiration time. If None, uses
            ``settings.ACCESS_TOKEN_EXPIRE_MINUTES``
    
    Returns:
        Encoded JWT token
    
    Raises:
        InternalError: If SECRET_KEY is not configured
    """
    if not settings.SECRET_KEY:
        raise InternalError("SECRET_KEY environment variable is not set")
    
    to_encode = data.copy()
    
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def create_user_token(user: Any) -> str:
    """Issue a token carrying the public identity claims of ``user``."""
    return create_access_token(
        {
            "sub": str(user.id),
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role.value if hasattr(user.role, "value") else user.role,
        }
    )


def decode_token(token: str) -> Dict[str, Any]:
    """Decode and verify a JWT token.
    
    Raises:
        InvalidTokenError: If token is malformed, badly signed or expired
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError as e:
        raise InvalidTokenError("Expired token") from e
    except JWTError as e:
        raise InvalidTokenError() from e
