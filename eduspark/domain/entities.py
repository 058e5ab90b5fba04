from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    UNKNOWN = "unknown"
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class ClassStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class User:
    email: str
    role: str = Role.STUDENT.value
    name: str | None = None
