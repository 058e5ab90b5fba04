"""Request and response bodies.

Documents keep whatever descriptive fields the client sends
(`extra="allow"`); only the fields the API relies on are declared.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Identity(BaseModel):
    model_config = ConfigDict(extra="allow")
    email: EmailStr


class TokenResp(BaseModel):
    token: str


class UserCreate(BaseModel):
    model_config = ConfigDict(extra="allow")
    email: EmailStr
    name: str | None = None
    photo: str | None = None


class RoleResp(BaseModel):
    role: str


class CountResp(BaseModel):
    count: int


class InsertResp(BaseModel):
    acknowledged: bool = True
    insertedId: str | None
    message: str | None = None


class UpdateResp(BaseModel):
    acknowledged: bool
    matchedCount: int
    modifiedCount: int
    upsertedId: str | None = None


class DeleteResp(BaseModel):
    acknowledged: bool
    deletedCount: int


class ClassCreate(BaseModel):
    model_config = ConfigDict(extra="allow")
    title: str
    price: float = Field(0, ge=0)
    description: str | None = None
    image: str | None = None
    name: str | None = None


class ClassUpdate(BaseModel):
    model_config = ConfigDict(extra="allow")
    title: str | None = None
    price: float | None = Field(None, ge=0)
    description: str | None = None
    image: str | None = None
    status: Literal["pending", "approved", "rejected"] | None = None


class SiteStats(BaseModel):
    totalUsers: int
    totalClasses: int
    totalEnrollment: int


class ClassTotals(BaseModel):
    totalEnrollment: int
    totalAssignments: int
    totalSubmissions: int


class TeacherRequestCreate(BaseModel):
    model_config = ConfigDict(extra="allow")
    name: str | None = None
    title: str | None = None
    experience: str | None = None
    category: str | None = None
    image: str | None = None


class TeacherRequestUpdate(BaseModel):
    status: Literal["pending", "approved", "rejected"]


class AssignmentCreate(BaseModel):
    model_config = ConfigDict(extra="allow")
    classId: str
    title: str
    deadline: datetime | None = None
    description: str | None = None


class EnrollmentCreate(BaseModel):
    model_config = ConfigDict(extra="allow")
    enrolledEmail: EmailStr
    enrolledClassId: str
    transactionId: str | None = None
    price: float | None = None


class FeedbackCreate(BaseModel):
    model_config = ConfigDict(extra="allow")
    classId: str
    rating: float = Field(..., ge=0, le=5)
    description: str
    name: str | None = None
    image: str | None = None


class PaymentIntentReq(BaseModel):
    price: float = Field(..., gt=0)


class PaymentIntentResp(BaseModel):
    clientSecret: str
