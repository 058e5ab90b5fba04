from fastapi import APIRouter, Depends, status

from ....infrastructure.db import Store, get_store, serialize, insert_result
from ..authz import verify_token
from ..schemas import FeedbackCreate, InsertResp

router = APIRouter(tags=["content"])


@router.get("/feedbacks")
def list_feedbacks(store: Store = Depends(get_store)):
    return serialize(list(store.feedbacks.find()))


@router.post("/feedbacks", response_model=InsertResp, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(verify_token)])
def create_feedback(payload: FeedbackCreate, store: Store = Depends(get_store)):
    doc = payload.model_dump(mode="json", exclude_none=True)
    doc.pop("_id", None)
    return insert_result(store.feedbacks.insert_one(doc))


@router.get("/feedback/{class_id}", dependencies=[Depends(verify_token)])
def class_feedback(class_id: str, store: Store = Depends(get_store)):
    return serialize(list(store.feedbacks.find({"classId": class_id})))


@router.get("/articles")
def list_articles(store: Store = Depends(get_store)):
    return serialize(list(store.articles.find()))
