from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from ....infrastructure.db import Store, get_store, serialize, to_object_id, insert_result, update_result
from ..authz import verify_teacher, verify_token
from ..pagination import Pagination
from ..schemas import AssignmentCreate, CountResp, InsertResp, UpdateResp

router = APIRouter(tags=["assignments"], dependencies=[Depends(verify_token)])


@router.get("/assignments")
def list_assignments(classId: str | None = None,
                     pagination: Pagination = Depends(),
                     store: Store = Depends(get_store)):
    query = {"classId": classId} if classId else {}
    return serialize(list(pagination.apply(store.assignments.find(query))))


@router.get("/assignments/{class_id}")
def class_assignments(class_id: str, pagination: Pagination = Depends(), store: Store = Depends(get_store)):
    return serialize(list(pagination.apply(store.assignments.find({"classId": class_id}))))


@router.get("/assignments_count/{class_id}", response_model=CountResp)
def assignments_count(class_id: str, store: Store = Depends(get_store)):
    return CountResp(count=store.assignments.count_documents({"classId": class_id}))


@router.post("/assignments", response_model=InsertResp, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(verify_teacher)])
def create_assignment(payload: AssignmentCreate, store: Store = Depends(get_store)):
    if not store.classes.find_one({"_id": to_object_id(payload.classId)}, {"_id": 1}):
        raise HTTPException(status.HTTP_404_NOT_FOUND, "class not found")
    doc = payload.model_dump(exclude_none=True)
    doc.update(submittedEmails=[], total_submitted=0)
    return insert_result(store.assignments.insert_one(doc))


@router.patch("/assignments/{assignment_id}", response_model=UpdateResp)
def submit_assignment(assignment_id: str,
                      claims: dict = Depends(verify_token),
                      store: Store = Depends(get_store)):
    oid = to_object_id(assignment_id)
    if not store.assignments.find_one({"_id": oid}, {"_id": 1}):
        raise HTTPException(status.HTTP_404_NOT_FOUND, "assignment not found")
    email = claims["email"]
    submission = {"email": email, "date": datetime.now(timezone.utc).replace(tzinfo=None)}
    # the $ne guard keeps total_submitted equal to len(submittedEmails)
    result = store.assignments.update_one(
        {"_id": oid, "submittedEmails.email": {"$ne": email}},
        {"$push": {"submittedEmails": submission}, "$inc": {"total_submitted": 1}},
    )
    return update_result(result)
