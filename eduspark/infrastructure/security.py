from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from ..config import settings


def issue_token(identity: dict, expires_delta: timedelta | None = None) -> str:
    if not identity.get("email"):
        raise ValueError("identity must include an email")
    payload = dict(identity)
    exp = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=settings.TOKEN_EXPIRE_HOURS))
    payload["exp"] = exp
    return jwt.encode(payload, settings.ACCESS_TOKEN_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Return the identity carried by the token or raise JWTError."""
    payload = jwt.decode(token, settings.ACCESS_TOKEN_SECRET, algorithms=[settings.JWT_ALGORITHM])
    if not payload.get("email"):
        raise JWTError("No email in token")
    payload.pop("exp", None)
    return payload
