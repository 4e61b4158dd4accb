"""Bearer token helpers shared with the authentication service."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from teamboard.config import get_settings

ALGORITHM = "HS256"
DEFAULT_TOKEN_LIFETIME = timedelta(hours=12)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (expires_delta or DEFAULT_TOKEN_LIFETIME)
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc
