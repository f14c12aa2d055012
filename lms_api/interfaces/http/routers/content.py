from ....application import resources
from .. import schemas
from .crud import crud_router

courses = crud_router("/api/courses", "courses", resources.COURSES, "courses",
                      schemas.CourseCreate, schemas.CourseUpdate)
modules = crud_router("/api/modules", "modules", resources.MODULES, "modules",
                      schemas.ModuleCreate, schemas.ModuleUpdate)
lessons = crud_router("/api/lessons", "lessons", resources.LESSONS, "lessons",
                      schemas.LessonCreate, schemas.LessonUpdate)
assessments = crud_router("/api/assessments", "assessments", resources.ASSESSMENTS, "assessments",
                          schemas.AssessmentCreate, schemas.AssessmentUpdate)
questions = crud_router("/api/questions", "questions", resources.QUESTIONS, "questions",
                        schemas.QuestionCreate, schemas.QuestionUpdate)
answers = crud_router("/api/answers", "answers", resources.ANSWERS, "answers",
                      schemas.AnswerCreate, schemas.AnswerUpdate)
announcements = crud_router("/api/announcements", "announcements", resources.ANNOUNCEMENTS, "announcements",
                            schemas.AnnouncementCreate, schemas.AnnouncementUpdate, owner_field="created_by")
forums = crud_router("/api/discussion-forums", "discussion-forums", resources.FORUMS, "forums",
                     schemas.DiscussionForumCreate, schemas.DiscussionForumUpdate, owner_field="created_by")
forum_posts = crud_router("/api/forum-posts", "forum-posts", resources.FORUM_POSTS, "forum_posts",
                          schemas.ForumPostCreate, schemas.ForumPostUpdate, owner_field="created_by")

routers = [courses, modules, lessons, assessments, questions, answers, announcements, forums, forum_posts]
