from datetime import date

from pydantic import BaseModel, ConfigDict, EmailStr, Field

# --- users and auth

class LoginReq(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

class TokenResp(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    token: str = Field(serialization_alias="Token")

class RegisterReq(BaseModel):
    username: str = Field(min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8)
    full_name: str | None = None
    date_of_birth: date | None = None
    role_ids: list[int] | None = None

class UserUpdate(BaseModel):
    username: str | None = Field(default=None, min_length=3, max_length=100)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=8)
    full_name: str | None = None
    date_of_birth: date | None = None

class AssignRolesReq(BaseModel):
    role_ids: list[int] = Field(min_length=1)

# --- roles

class RoleCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    description: str | None = None

class RoleUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = None

class UserRoleCreate(BaseModel):
    user_id: int
    role_id: int

# --- course content

class CourseCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None

class CourseUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None

class ModuleCreate(BaseModel):
    course_id: int
    title: str = Field(min_length=1, max_length=200)
    content: str | None = None

class ModuleUpdate(BaseModel):
    course_id: int | None = None
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = None

class LessonCreate(BaseModel):
    module_id: int
    title: str = Field(min_length=1, max_length=200)
    content: str | None = None

class LessonUpdate(BaseModel):
    module_id: int | None = None
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = None

class AssessmentCreate(BaseModel):
    course_id: int
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None

class AssessmentUpdate(BaseModel):
    course_id: int | None = None
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None

class QuestionCreate(BaseModel):
    assessment_id: int
    content: str = Field(min_length=1)

class QuestionUpdate(BaseModel):
    assessment_id: int | None = None
    content: str | None = Field(default=None, min_length=1)

class AnswerCreate(BaseModel):
    question_id: int
    content: str = Field(min_length=1)
    is_correct: bool = False

class AnswerUpdate(BaseModel):
    question_id: int | None = None
    content: str | None = Field(default=None, min_length=1)
    is_correct: bool | None = None

class AnnouncementCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    course_id: int | None = None

class AnnouncementUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    course_id: int | None = None

class DiscussionForumCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    course_id: int | None = None

class DiscussionForumUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    course_id: int | None = None

class ForumPostCreate(BaseModel):
    forum_id: int
    content: str = Field(min_length=1)
    parent_post_id: int | None = None

class ForumPostUpdate(BaseModel):
    content: str | None = Field(default=None, min_length=1)

# --- messaging

class MessageCreate(BaseModel):
    receiver_id: int
    content: str = Field(min_length=1)

class NotificationCreate(BaseModel):
    user_id: int
    content: str = Field(min_length=1)
