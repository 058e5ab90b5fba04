import re

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ....application.use_cases.create_user import CreateUser
from ....domain.entities import Role
from ....infrastructure.cache import delete_cache_pattern
from ....infrastructure.db import Store, get_store, serialize, update_result
from ....infrastructure.repositories import UserRepository
from ..authz import get_role, require_self, verify_admin
from ..pagination import Pagination
from ..schemas import CountResp, InsertResp, RoleResp, UpdateResp, UserCreate

router = APIRouter(tags=["users"])


def _search_query(search: str | None) -> dict:
    if not search:
        return {}
    return {"email": {"$regex": re.escape(search), "$options": "i"}}


@router.get("/users", dependencies=[Depends(verify_admin)])
def list_users(search: str | None = None,
               pagination: Pagination = Depends(),
               store: Store = Depends(get_store)):
    cursor = pagination.apply(store.users.find(_search_query(search)))
    return serialize(list(cursor))


@router.get("/users_count", response_model=CountResp, dependencies=[Depends(verify_admin)])
def users_count(search: str | None = None, store: Store = Depends(get_store)):
    return CountResp(count=store.users.count_documents(_search_query(search)))


@router.get("/users/role/{email}", response_model=RoleResp, dependencies=[Depends(require_self)])
def user_role(email: str, store: Store = Depends(get_store)):
    return RoleResp(role=get_role(email, store))


@router.get("/users/{email}", dependencies=[Depends(require_self)])
def get_user(email: str, store: Store = Depends(get_store)):
    return serialize(store.users.find_one({"email": email}))


@router.post("/users", response_model=InsertResp)
def create_user(payload: UserCreate, store: Store = Depends(get_store)):
    uc = CreateUser(repo=UserRepository(store))
    try:
        inserted_id = uc.execute(payload.model_dump(mode="json", exclude_none=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if inserted_id is None:
        return InsertResp(message="user already exists", insertedId=None)
    delete_cache_pattern("reports:*")
    return InsertResp(insertedId=str(inserted_id))


@router.patch("/users/{email}", response_model=UpdateResp, dependencies=[Depends(verify_admin)])
def make_admin(email: str, store: Store = Depends(get_store)):
    result = store.users.update_one({"email": email}, {"$set": {"role": Role.ADMIN.value}})
    if not result.matched_count:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "user not found")
    return update_result(result)
