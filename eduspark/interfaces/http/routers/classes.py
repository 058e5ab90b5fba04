from fastapi import APIRouter, Depends, HTTPException, status

from ....domain.entities import ClassStatus, Role
from ....infrastructure.cache import delete_cache_pattern
from ....infrastructure.db import (
    Store, get_store, serialize, to_object_id, insert_result, update_result, delete_result,
)
from ..authz import FORBIDDEN, get_role, require_self, verify_admin, verify_teacher, verify_token
from ..pagination import Pagination
from ..schemas import ClassCreate, ClassUpdate, CountResp, DeleteResp, InsertResp, UpdateResp

router = APIRouter(tags=["classes"])

APPROVED = {"status": ClassStatus.APPROVED.value}


def _get_or_404(store: Store, class_id: str, query: dict | None = None) -> dict:
    row = store.classes.find_one({"_id": to_object_id(class_id), **(query or {})})
    if not row:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "class not found")
    return row


def _check_can_edit(row: dict, claims: dict, store: Store, changes_status: bool) -> None:
    role = get_role(claims["email"], store)
    if role == Role.ADMIN.value:
        return
    if changes_status or role != Role.TEACHER.value or row.get("email") != claims["email"]:
        raise HTTPException(status.HTTP_403_FORBIDDEN, FORBIDDEN)


@router.get("/classes", dependencies=[Depends(verify_admin)])
def list_classes(pagination: Pagination = Depends(), store: Store = Depends(get_store)):
    return serialize(list(pagination.apply(store.classes.find())))


@router.get("/classes_count", response_model=CountResp)
def classes_count(store: Store = Depends(get_store)):
    return CountResp(count=store.classes.count_documents(APPROVED))


@router.get("/approved_classes")
def approved_classes(pagination: Pagination = Depends(), store: Store = Depends(get_store)):
    return serialize(list(pagination.apply(store.classes.find(APPROVED))))


@router.get("/single_class/{class_id}")
def single_class(class_id: str, store: Store = Depends(get_store)):
    return serialize(_get_or_404(store, class_id))


@router.get("/classes/{class_id}", dependencies=[Depends(verify_token)])
def get_class(class_id: str, store: Store = Depends(get_store)):
    return serialize(_get_or_404(store, class_id))


@router.get("/teacher_classes/{email}", dependencies=[Depends(verify_teacher), Depends(require_self)])
def teacher_classes(email: str, pagination: Pagination = Depends(), store: Store = Depends(get_store)):
    return serialize(list(pagination.apply(store.classes.find({"email": email}))))


@router.post("/classes", response_model=InsertResp, status_code=status.HTTP_201_CREATED)
def create_class(payload: ClassCreate,
                 claims: dict = Depends(verify_teacher),
                 store: Store = Depends(get_store)):
    doc = payload.model_dump(mode="json", exclude_none=True)
    doc.update(email=claims["email"], status=ClassStatus.PENDING.value, totalEnrollment=0)
    result = store.classes.insert_one(doc)
    delete_cache_pattern("reports:*")
    return insert_result(result)


@router.patch("/classes/{class_id}", response_model=UpdateResp)
def update_class(class_id: str,
                 payload: ClassUpdate,
                 claims: dict = Depends(verify_token),
                 store: Store = Depends(get_store)):
    row = _get_or_404(store, class_id)
    changes = payload.model_dump(mode="json", exclude_none=True)
    # owner and counter are maintained by the server
    for field in ("_id", "email", "totalEnrollment"):
        changes.pop(field, None)
    _check_can_edit(row, claims, store, changes_status="status" in changes)
    if not changes:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "nothing to update")
    result = store.classes.update_one({"_id": row["_id"]}, {"$set": changes})
    delete_cache_pattern("reports:*")
    return update_result(result)


@router.delete("/classes/{class_id}", response_model=DeleteResp)
def delete_class(class_id: str,
                 claims: dict = Depends(verify_token),
                 store: Store = Depends(get_store)):
    row = _get_or_404(store, class_id)
    _check_can_edit(row, claims, store, changes_status=False)
    result = store.classes.delete_one({"_id": row["_id"]})
    delete_cache_pattern("reports:*")
    return delete_result(result)
