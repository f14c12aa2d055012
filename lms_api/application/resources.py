from ..infrastructure.models import (
    AnnouncementORM,
    AnswerORM,
    AssessmentORM,
    CourseORM,
    DiscussionForumORM,
    ForumPostORM,
    LessonORM,
    MessageORM,
    ModuleORM,
    NotificationORM,
    QuestionORM,
    RoleORM,
)
from .cache_keys import view_key
from .dto import (
    AnnouncementOut,
    AnswerOut,
    AssessmentOut,
    CourseOut,
    DiscussionForumOut,
    ForumPostOut,
    LessonOut,
    MessageOut,
    ModuleOut,
    NotificationOut,
    QuestionOut,
    RoleOut,
)
from .services import Resource


def message_views(row: MessageORM) -> list[str]:
    return [
        view_key("Message", "User", row.sender_id),
        view_key("Message", "User", row.receiver_id),
    ]


def notification_views(row: NotificationORM) -> list[str]:
    return [view_key("Notification", "User", row.user_id)]


COURSES = Resource("Course", CourseORM, CourseOut, cascades=(
    "Module", "Lesson", "Assessment", "Question", "Answer", "Announcement", "DiscussionForum", "ForumPost",
))
MODULES = Resource("Module", ModuleORM, ModuleOut, cascades=("Lesson",))
LESSONS = Resource("Lesson", LessonORM, LessonOut)
ASSESSMENTS = Resource("Assessment", AssessmentORM, AssessmentOut, cascades=("Question", "Answer"))
QUESTIONS = Resource("Question", QuestionORM, QuestionOut, cascades=("Answer",))
ANSWERS = Resource("Answer", AnswerORM, AnswerOut)
ANNOUNCEMENTS = Resource("Announcement", AnnouncementORM, AnnouncementOut)
FORUMS = Resource("DiscussionForum", DiscussionForumORM, DiscussionForumOut, cascades=("ForumPost",))
FORUM_POSTS = Resource("ForumPost", ForumPostORM, ForumPostOut)
MESSAGES = Resource("Message", MessageORM, MessageOut, views=message_views)
NOTIFICATIONS = Resource("Notification", NotificationORM, NotificationOut, views=notification_views)
# user records and memberships embed the role name
ROLES = Resource("Role", RoleORM, RoleOut, on_change=("User_*", "UserRole_*"))
