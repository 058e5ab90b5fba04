from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from ...domain.entities import Role
from ...infrastructure.db import Store, get_store
from ...infrastructure.security import decode_token

bearer = HTTPBearer(auto_error=False)

UNAUTHORIZED = "unauthorized access"
FORBIDDEN = "forbidden access"


def verify_token(creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> dict:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED)
    try:
        return decode_token(creds.credentials)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED)


def get_role(email: str, store: Store) -> str:
    # read fresh on every request so promotions apply without a new token
    user = store.users.find_one({"email": email}, {"role": 1})
    if not user:
        return Role.UNKNOWN.value
    return user.get("role", Role.UNKNOWN.value)


def _require_role(role: Role):
    def dependency(claims: dict = Depends(verify_token), store: Store = Depends(get_store)) -> dict:
        if get_role(claims["email"], store) != role.value:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN)
        return claims
    return dependency


verify_admin = _require_role(Role.ADMIN)
verify_teacher = _require_role(Role.TEACHER)


def require_self(email: str, claims: dict = Depends(verify_token)) -> dict:
    """Only the owner of the `email` path parameter may proceed."""
    if claims["email"] != email:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN)
    return claims
