from fastapi import APIRouter, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ....config import settings
from ....infrastructure.security import issue_token
from ..schemas import Identity, TokenResp

router = APIRouter(tags=["auth"])
limiter = Limiter(key_func=get_remote_address)


@router.post("/jwt", response_model=TokenResp)
@limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute")
def create_token(request: Request, identity: Identity):
    token = issue_token(identity.model_dump(mode="json"))
    return TokenResp(token=token)
