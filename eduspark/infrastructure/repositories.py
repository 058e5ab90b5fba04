from typing import Any

from bson import ObjectId
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from ..domain.entities import User, RequestStatus
from ..application.use_cases.create_user import IUserRepository
from ..application.use_cases.approve_teacher_request import ITeacherRequestRepository
from ..application.use_cases.enroll_student import IEnrollmentRepository, IClassRepository
from .db import Store


def to_domain(doc: dict) -> User:
    return User(email=doc["email"], role=doc.get("role", "student"), name=doc.get("name"))


class UserRepository(IUserRepository):
    def __init__(self, store: Store): self.users: Collection = store.users

    def get_by_email(self, email: str) -> User | None:
        doc = self.users.find_one({"email": email})
        return to_domain(doc) if doc else None

    def create(self, doc: dict) -> ObjectId:
        return self.users.insert_one(doc).inserted_id

    def set_role(self, email: str, role: str) -> int:
        result = self.users.update_one({"email": email}, {"$set": {"role": role}})
        return result.matched_count


class TeacherRequestRepository(ITeacherRequestRepository):
    def __init__(self, store: Store): self.requests: Collection = store.teacher_requests

    def get(self, request_id: ObjectId) -> dict | None:
        return self.requests.find_one({"_id": request_id})

    def set_status(self, request_id: ObjectId, status: str):
        return self.requests.update_one({"_id": request_id}, {"$set": {"status": status}})

    def submit(self, email: str, fields: dict[str, Any]):
        # one request per email; resubmitting puts it back in the queue
        doc = {**fields, "email": email, "status": RequestStatus.PENDING.value}
        try:
            return self.requests.update_one({"email": email}, {"$set": doc}, upsert=True)
        except DuplicateKeyError:
            # lost an upsert race on the unique email index; the document exists now
            return self.requests.update_one({"email": email}, {"$set": doc}, upsert=True)


class ClassRepository(IClassRepository):
    def __init__(self, store: Store): self.classes: Collection = store.classes

    def get(self, class_id: ObjectId) -> dict | None:
        return self.classes.find_one({"_id": class_id})

    def increment_enrollment(self, class_id: ObjectId) -> None:
        self.classes.update_one({"_id": class_id}, {"$inc": {"totalEnrollment": 1}})


class EnrollmentRepository(IEnrollmentRepository):
    def __init__(self, store: Store): self.enrollments: Collection = store.enrolled_classes

    def exists(self, email: str, class_id: str) -> bool:
        return self.enrollments.find_one({"enrolledEmail": email, "enrolledClassId": class_id}) is not None

    def create(self, doc: dict) -> ObjectId:
        return self.enrollments.insert_one(doc).inserted_id
