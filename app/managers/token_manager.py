"""Token manager for issuing and verifying JWT access tokens."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from jose import JWTError, jwt

from app.configs import settings
from app.schemas.auth import TokenData


def _secret() -> str:
    return settings.SECRET_KEY.get_secret_value()


def create_access_token(
    user_id: UUID,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a new access token carrying the subject id and role.

    Args:
        user_id: User's UUID
        role: User's role at issuance time
        expires_delta: Optional expiration time delta (defaults to 24 hours)

    Returns:
        str: Encoded JWT access token
    """
    now = datetime.now(UTC)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(user_id),
        "role": role,
        "jti": str(uuid4()),
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": "access",
    }

    return jwt.encode(to_encode, _secret(), algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> TokenData | None:
    """
    Decode and validate an access token.

    Args:
        token: JWT token string

    Returns:
        TokenData | None: Decoded token data or None if invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            _secret(),
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError:
        return None

    subject: str | None = payload.get("sub")
    role: str | None = payload.get("role")
    jti: str | None = payload.get("jti")
    token_type: str | None = payload.get("type")

    if not subject or not role or not jti or token_type != "access":
        return None

    try:
        user_id = UUID(subject)
    except ValueError:
        return None

    return TokenData(user_id=user_id, role=role, jti=jti, token_type=token_type)


def get_token_expiry(token: str) -> datetime | None:
    """
    Extract expiration time from a token without audience/issuer checks.

    Args:
        token: JWT token string

    Returns:
        datetime | None: Token expiration time or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            _secret(),
            algorithms=[settings.ALGORITHM],
            options={"verify_aud": False, "verify_iss": False},
        )
    except JWTError:
        return None
    exp = payload.get("exp")
    return datetime.fromtimestamp(exp, tz=UTC) if exp else None
