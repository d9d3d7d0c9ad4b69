"""
Home page data: the course overview and, for students, the quizzes open
in the first few courses. Per-course quiz lists are fetched concurrently
through a request-scoped :class:`ViewTaskGroup`.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from coursehub_web.core.error_handlers import ApiError
from coursehub_web.models import Course, Quiz, Role, Session
from coursehub_web.modules.courses.services.course_service import CourseService
from coursehub_web.modules.quizzes.services.quiz_service import QuizService
from coursehub_web.utils.view_tasks import ViewTaskGroup

logger = logging.getLogger(__name__)

WELCOME_TEXT = {
    Role.STUDENT: "Pick up where you left off and try the quizzes open in your courses.",
    Role.TEACHER: "Manage your courses and build quizzes for your students.",
    Role.ADMIN: "You can manage every course and quiz on the platform.",
}


@dataclass
class QuickAction:
    label: str
    endpoint: str


@dataclass
class HomeData:
    courses: List[Course] = field(default_factory=list)
    active_quizzes: List[Quiz] = field(default_factory=list)
    courses_failed: bool = False


def quick_actions(session: Session) -> List[QuickAction]:
    actions = [QuickAction('Browse courses', 'courses.list_courses')]
    role = session.role
    if role in (Role.TEACHER, Role.ADMIN):
        actions.append(QuickAction('New course', 'courses.create_course'))
        actions.append(QuickAction('My courses', 'courses.my_courses'))
        actions.append(QuickAction('My quizzes', 'quizzes.my_quizzes'))
    if role in (Role.STUDENT, Role.ADMIN):
        actions.append(QuickAction('My results', 'quizzes.my_attempts'))
    return actions


def load_home_data(session: Session, courses: CourseService, quizzes: QuizService,
                   tasks: ViewTaskGroup, course_limit: int = 6,
                   quiz_course_limit: int = 3, quiz_limit: int = 6) -> HomeData:
    """
    Collect what the home page shows.

    Course listing failures leave the list empty. A course whose quizzes
    cannot be loaded is skipped; a rejected credential still propagates.
    """
    data = HomeData()
    try:
        all_courses = courses.list_courses()
    except ApiError as e:
        logger.warning("Home page could not load courses: %s", e.message)
        data.courses_failed = True
        return data

    data.courses = all_courses[:course_limit]
    if session.role is not Role.STUDENT:
        return data

    pending = [
        (course, tasks.submit(('course-quizzes', course.id), quizzes.list_by_course, course.id))
        for course in all_courses[:quiz_course_limit]
    ]
    for course, fetch in pending:
        try:
            fetch.deliver_to(lambda found: data.active_quizzes.extend(q for q in found if q.is_active))
        except ApiError as e:
            logger.info("Skipping quizzes of course %s: %s", course.id, e.message)

    data.active_quizzes = data.active_quizzes[:quiz_limit]
    return data
