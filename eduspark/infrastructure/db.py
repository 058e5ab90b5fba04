from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, Request, status
from pymongo import ASCENDING, MongoClient
from pymongo.server_api import ServerApi
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from ..config import settings


class Store:
    """Shared handle on the EduSpark database and its collections.

    One instance is created per process at startup and handed to request
    handlers through ``get_store``; the underlying client does its own
    connection pooling.
    """

    def __init__(self, client: MongoClient, db_name: str):
        self.client = client
        self.db = client[db_name]
        self.users = self.db["users"]
        self.classes = self.db["classes"]
        self.teacher_requests = self.db["teacherRequests"]
        self.enrolled_classes = self.db["enrolledClasses"]
        self.assignments = self.db["assignments"]
        self.feedbacks = self.db["feedbacks"]
        self.articles = self.db["eduArticles"]

    @classmethod
    def from_settings(cls) -> "Store":
        client = MongoClient(
            settings.mongodb_uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
        )
        return cls(client, settings.DB_NAME)

    def ping(self) -> None:
        self.client.admin.command("ping")

    def ensure_indexes(self) -> None:
        self.users.create_index([("email", ASCENDING)], unique=True)
        self.enrolled_classes.create_index(
            [("enrolledEmail", ASCENDING), ("enrolledClassId", ASCENDING)], unique=True
        )
        self.teacher_requests.create_index([("email", ASCENDING)], unique=True)
        self.classes.create_index([("status", ASCENDING)])
        self.assignments.create_index([("classId", ASCENDING)])

    def close(self) -> None:
        self.client.close()


def get_store(request: Request) -> Store:
    return request.app.state.store


def to_object_id(value: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid id")


def serialize(value: Any) -> Any:
    """Replace ObjectIds with their hex form so documents render as JSON."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize(v) for v in value]
    return value


def insert_result(result: InsertOneResult) -> dict:
    return {"acknowledged": result.acknowledged, "insertedId": str(result.inserted_id)}


def update_result(result: UpdateResult) -> dict:
    upserted = result.upserted_id
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
        "upsertedId": str(upserted) if upserted is not None else None,
    }


def delete_result(result: DeleteResult) -> dict:
    return {"acknowledged": result.acknowledged, "deletedCount": result.deleted_count}
