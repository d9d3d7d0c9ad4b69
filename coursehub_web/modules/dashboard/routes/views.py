from flask import current_app, flash, render_template

from coursehub_web.modules.access_control.decorators import protected_view
from coursehub_web.modules.auth.interface import get_api_client, get_session_store
from coursehub_web.modules.courses.services.course_service import CourseService
from coursehub_web.modules.quizzes.services.quiz_service import QuizService
from coursehub_web.utils.view_tasks import view_tasks
from .. import dashboard_bp
from ..services.home_service import WELCOME_TEXT, load_home_data, quick_actions


@dashboard_bp.route('/')
@protected_view()
def home():
    session = get_session_store().current()
    # Services are built here; worker threads get a fresh ``g``.
    client = get_api_client()
    config = current_app.config

    with view_tasks(config.get('VIEW_TASK_WORKERS', 4)) as tasks:
        data = load_home_data(
            session,
            CourseService(client),
            QuizService(client),
            tasks,
            course_limit=config.get('HOME_COURSE_LIMIT', 6),
            quiz_course_limit=config.get('HOME_QUIZ_COURSE_LIMIT', 3),
            quiz_limit=config.get('HOME_QUIZ_LIMIT', 6),
        )

    if data.courses_failed:
        flash('Could not load courses.', 'danger')

    return render_template(
        'dashboard/home.html',
        welcome_text=WELCOME_TEXT[session.role],
        actions=quick_actions(session),
        courses=data.courses,
        active_quizzes=data.active_quizzes,
    )
