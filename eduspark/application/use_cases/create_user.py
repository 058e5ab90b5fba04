from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from ...domain.entities import User, Role


class IUserRepository:
    def get_by_email(self, email: str) -> User | None: ...
    def create(self, doc: dict) -> ObjectId: ...
    def set_role(self, email: str, role: str) -> int: ...


class CreateUser:
    """Insert a user on first sign-in; later sign-ins are a no-op."""

    def __init__(self, repo: IUserRepository):
        self.repo = repo

    def execute(self, profile: dict) -> ObjectId | None:
        email = profile.get("email")
        if not email or "@" not in email:
            raise ValueError("Invalid email")
        if self.repo.get_by_email(email):
            return None
        doc = {**profile, "role": Role.STUDENT.value}
        doc.pop("_id", None)
        try:
            return self.repo.create(doc)
        except DuplicateKeyError:
            # a concurrent sign-in inserted it first
            return None
