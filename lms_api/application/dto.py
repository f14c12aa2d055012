from dataclasses import dataclass, field
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


@dataclass
class RegisterUserInput:
    username: str
    email: str
    password: str
    full_name: str | None = None
    date_of_birth: date | None = None
    role_ids: list[int] | None = field(default=None)


# Read models below are what the cache stores, as JSON.

class OutModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class RoleOut(OutModel):
    id: int
    name: str
    description: str | None = None


class UserOut(OutModel):
    id: int
    username: str
    email: str
    full_name: str | None = None
    date_of_birth: date | None = None
    roles: list[RoleOut] = []
    created_at: datetime
    updated_at: datetime


class UserRoleOut(OutModel):
    user_id: int
    role_id: int
    role: RoleOut


class CourseOut(OutModel):
    id: int
    title: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class ModuleOut(OutModel):
    id: int
    course_id: int
    title: str
    content: str | None = None
    created_at: datetime
    updated_at: datetime


class LessonOut(OutModel):
    id: int
    module_id: int
    title: str
    content: str | None = None
    created_at: datetime
    updated_at: datetime


class AssessmentOut(OutModel):
    id: int
    course_id: int
    title: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class QuestionOut(OutModel):
    id: int
    assessment_id: int
    content: str
    created_at: datetime
    updated_at: datetime


class AnswerOut(OutModel):
    id: int
    question_id: int
    content: str
    is_correct: bool
    created_at: datetime
    updated_at: datetime


class MessageOut(OutModel):
    id: int
    sender_id: int
    receiver_id: int
    content: str
    sent_at: datetime


class NotificationOut(OutModel):
    id: int
    user_id: int
    content: str
    is_read: bool
    created_at: datetime


class AnnouncementOut(OutModel):
    id: int
    title: str
    content: str
    created_by: int
    course_id: int | None = None
    created_at: datetime
    updated_at: datetime


class DiscussionForumOut(OutModel):
    id: int
    title: str
    description: str | None = None
    created_by: int
    course_id: int | None = None
    created_at: datetime
    updated_at: datetime


class ForumPostOut(OutModel):
    id: int
    forum_id: int
    content: str
    created_by: int
    parent_post_id: int | None = None
    created_at: datetime
    updated_at: datetime
