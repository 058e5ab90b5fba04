from datetime import datetime, timezone

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from ...domain.entities import ClassStatus
from ...domain.errors import NotFound


class IClassRepository:
    def get(self, class_id: ObjectId) -> dict | None: ...
    def increment_enrollment(self, class_id: ObjectId) -> None: ...


class IEnrollmentRepository:
    def exists(self, email: str, class_id: str) -> bool: ...
    def create(self, doc: dict) -> ObjectId: ...


class EnrollStudent:
    """Record an enrollment and bump the class counter exactly once."""

    def __init__(self, classes: IClassRepository, enrollments: IEnrollmentRepository):
        self.classes = classes
        self.enrollments = enrollments

    def execute(self, email: str, class_id: ObjectId, extra: dict | None = None) -> ObjectId | None:
        klass = self.classes.get(class_id)
        if klass is None or klass.get("status") != ClassStatus.APPROVED.value:
            raise NotFound("class not found")
        key = str(class_id)
        if self.enrollments.exists(email, key):
            return None
        doc = {
            **(extra or {}),
            "enrolledEmail": email,
            "enrolledClassId": key,
            "date": datetime.now(timezone.utc).replace(tzinfo=None),
        }
        try:
            inserted_id = self.enrollments.create(doc)
        except DuplicateKeyError:
            return None
        self.classes.increment_enrollment(class_id)
        return inserted_id
