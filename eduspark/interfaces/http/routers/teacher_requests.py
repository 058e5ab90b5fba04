from fastapi import APIRouter, Depends, HTTPException, status

from ....application.use_cases.approve_teacher_request import ApproveTeacherRequest
from ....domain.errors import NotFound
from ....infrastructure.db import Store, get_store, serialize, to_object_id, update_result
from ....infrastructure.metrics import teacher_promotions_total
from ....infrastructure.repositories import TeacherRequestRepository, UserRepository
from ..authz import require_self, verify_admin, verify_token
from ..pagination import Pagination
from ..schemas import CountResp, TeacherRequestCreate, TeacherRequestUpdate, UpdateResp

router = APIRouter(tags=["teacher requests"])


@router.get("/teacher_requests", dependencies=[Depends(verify_admin)])
def list_requests(pagination: Pagination = Depends(), store: Store = Depends(get_store)):
    return serialize(list(pagination.apply(store.teacher_requests.find())))


@router.get("/teacher_requests_count", response_model=CountResp, dependencies=[Depends(verify_admin)])
def requests_count(store: Store = Depends(get_store)):
    return CountResp(count=store.teacher_requests.count_documents({}))


@router.get("/teacher_requests/{email}", dependencies=[Depends(require_self)])
def my_request(email: str, store: Store = Depends(get_store)):
    return serialize(store.teacher_requests.find_one({"email": email}))


@router.post("/teacher_requests", response_model=UpdateResp)
def submit_request(payload: TeacherRequestCreate,
                   claims: dict = Depends(verify_token),
                   store: Store = Depends(get_store)):
    fields = payload.model_dump(mode="json", exclude_none=True)
    fields.pop("_id", None)
    result = TeacherRequestRepository(store).submit(claims["email"], fields)
    return update_result(result)


@router.patch("/teacher_requests/{request_id}", response_model=UpdateResp, dependencies=[Depends(verify_admin)])
def update_request(request_id: str, payload: TeacherRequestUpdate, store: Store = Depends(get_store)):
    uc = ApproveTeacherRequest(requests=TeacherRequestRepository(store), users=UserRepository(store))
    try:
        result = uc.execute(to_object_id(request_id), payload.status)
    except NotFound as e:
        raise HTTPException(status.HTTP_404_NOT_FOUND, str(e))
    except Exception:
        if payload.status == "approved":
            teacher_promotions_total.labels(outcome="failed").inc()
        raise
    if payload.status == "approved":
        teacher_promotions_total.labels(outcome="approved").inc()
    return update_result(result)
