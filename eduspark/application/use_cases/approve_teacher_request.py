import structlog
from bson import ObjectId

from ...domain.entities import RequestStatus, Role
from ...domain.errors import NotFound
from .create_user import IUserRepository

logger = structlog.get_logger()


class ITeacherRequestRepository:
    def get(self, request_id: ObjectId) -> dict | None: ...
    def set_status(self, request_id: ObjectId, status: str): ...


class ApproveTeacherRequest:
    """Move a teacher request to a new status.

    Approval promotes the requesting user first and only then marks the
    request approved, so an approved request always has a teacher behind
    it. If marking the request fails the user's previous role is restored
    and the error is re-raised; both writes are idempotent, so the whole
    operation can simply be retried.
    """

    def __init__(self, requests: ITeacherRequestRepository, users: IUserRepository):
        self.requests = requests
        self.users = users

    def execute(self, request_id: ObjectId, status: str):
        request = self.requests.get(request_id)
        if request is None:
            raise NotFound("teacher request not found")
        if status != RequestStatus.APPROVED.value:
            return self.requests.set_status(request_id, status)

        email = request["email"]
        previous = self.users.get_by_email(email)
        if previous is None or not self.users.set_role(email, Role.TEACHER.value):
            raise NotFound("user not found")

        try:
            result = self.requests.set_status(request_id, status)
        except Exception:
            logger.error("teacher_request_approval_failed", request_id=str(request_id), email=email)
            if previous.role != Role.TEACHER.value:
                self.users.set_role(email, previous.role)
            raise
        logger.info("teacher_promoted", request_id=str(request_id), email=email)
        return result
