from fastapi import APIRouter, Depends, HTTPException, status

from ....application.use_cases.enroll_student import EnrollStudent
from ....domain.errors import NotFound
from ....infrastructure.cache import delete_cache_pattern
from ....infrastructure.db import Store, get_store, serialize, to_object_id
from ....infrastructure.repositories import ClassRepository, EnrollmentRepository
from ..authz import FORBIDDEN, require_self, verify_admin, verify_token
from ..pagination import Pagination
from ..schemas import EnrollmentCreate, InsertResp

router = APIRouter(tags=["enrollments"])


def _class_ids(store: Store, email: str) -> list[str]:
    rows = store.enrolled_classes.find({"enrolledEmail": email}, {"enrolledClassId": 1})
    return [row["enrolledClassId"] for row in rows]


@router.get("/enrolled_classes", dependencies=[Depends(verify_admin)])
def list_enrollments(pagination: Pagination = Depends(), store: Store = Depends(get_store)):
    return serialize(list(pagination.apply(store.enrolled_classes.find())))


@router.post("/enrolled_classes", response_model=InsertResp)
def enroll(payload: EnrollmentCreate,
           claims: dict = Depends(verify_token),
           store: Store = Depends(get_store)):
    if payload.enrolledEmail != claims["email"]:
        raise HTTPException(status.HTTP_403_FORBIDDEN, FORBIDDEN)
    extra = payload.model_dump(mode="json", exclude_none=True, exclude={"enrolledEmail", "enrolledClassId"})
    extra.pop("_id", None)
    uc = EnrollStudent(classes=ClassRepository(store), enrollments=EnrollmentRepository(store))
    try:
        inserted_id = uc.execute(claims["email"], to_object_id(payload.enrolledClassId), extra)
    except NotFound as e:
        raise HTTPException(status.HTTP_404_NOT_FOUND, str(e))
    if inserted_id is None:
        return InsertResp(message="already enrolled", insertedId=None)
    delete_cache_pattern("reports:*")
    return InsertResp(insertedId=str(inserted_id))


@router.get("/enrolled_classes_ids/{email}", dependencies=[Depends(require_self)])
def enrolled_class_ids(email: str, store: Store = Depends(get_store)) -> list[str]:
    return _class_ids(store, email)


@router.get("/my_enrolled_classes/{email}", dependencies=[Depends(require_self)])
def my_enrolled_classes(email: str, pagination: Pagination = Depends(), store: Store = Depends(get_store)):
    ids = [to_object_id(class_id) for class_id in _class_ids(store, email)]
    cursor = store.classes.find({"_id": {"$in": ids}})
    return serialize(list(pagination.apply(cursor)))
