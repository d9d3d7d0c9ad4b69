from flask import current_app, flash, redirect, render_template, request, url_for

from coursehub_web.core.error_handlers import ApiError
from coursehub_web.models import Role
from coursehub_web.modules.access_control.decorators import ensure_allowed, protected_view
from coursehub_web.modules.access_control.logics.policies import can_create_course, can_manage_course
from coursehub_web.modules.auth.interface import get_api_client, get_session_store
from coursehub_web.modules.quizzes.services.quiz_service import QuizService
from .. import courses_bp as blueprint
from ..forms import CourseForm, SearchForm
from ..services.course_service import CourseService, filter_courses


def _course_service() -> CourseService:
    return CourseService(get_api_client())


@blueprint.route('/courses')
@protected_view()
def list_courses():
    form = SearchForm(request.args)
    courses = []
    try:
        courses = _course_service().list_courses()
    except ApiError as e:
        current_app.logger.warning(f"Could not load courses: {e.message}")
        flash('Could not load courses.', 'danger')

    session = get_session_store().current()
    return render_template(
        'courses/list.html',
        form=form,
        courses=filter_courses(courses, form.q.data),
        total=len(courses),
        can_create=can_create_course(session),
        can_manage=lambda course: can_manage_course(session, course),
        page_title='Courses',
    )


@blueprint.route('/courses/search')
@protected_view()
def search_courses():
    form = SearchForm(request.args)
    query = (form.q.data or '').strip()
    if not query:
        return redirect(url_for('courses.list_courses'))

    courses = []
    try:
        courses = _course_service().search_courses(query)
    except ApiError as e:
        flash(e.message, 'danger')

    session = get_session_store().current()
    return render_template(
        'courses/list.html',
        form=form,
        courses=courses,
        total=len(courses),
        can_create=can_create_course(session),
        can_manage=lambda course: can_manage_course(session, course),
        page_title=f'Search results for "{query}"',
    )


@blueprint.route('/courses/<int:course_id>')
@protected_view()
def course_detail(course_id):
    course, quizzes = None, []
    try:
        course = _course_service().get_course(course_id)
        quizzes = QuizService(get_api_client()).list_by_course(course_id)
    except ApiError as e:
        current_app.logger.info(f"Course {course_id} failed to load: {e.message}")
        flash('Could not load the course.', 'danger')

    session = get_session_store().current()
    return render_template(
        'courses/detail.html',
        course=course,
        quizzes=quizzes,
        can_manage=can_manage_course(session, course),
        is_student=session.role is Role.STUDENT,
    )


@blueprint.route('/courses/create', methods=['GET', 'POST'])
@protected_view(Role.TEACHER, Role.ADMIN)
def create_course():
    form = CourseForm()
    if form.validate_on_submit():
        try:
            course = _course_service().create_course(form.to_request())
        except ApiError as e:
            flash(e.message or 'Could not save the course.', 'danger')
        else:
            flash(f'Course "{course.title}" created.', 'success')
            return redirect(url_for('courses.list_courses'))

    return render_template('courses/form.html', form=form, course=None, title='New course')


@blueprint.route('/courses/<int:course_id>/edit', methods=['GET', 'POST'])
@protected_view(Role.TEACHER, Role.ADMIN)
def edit_course(course_id):
    service = _course_service()
    try:
        course = service.get_course(course_id)
    except ApiError as e:
        flash(e.message if not e.is_not_found else 'Course not found.', 'danger')
        return redirect(url_for('courses.list_courses'))

    ensure_allowed(can_manage_course(get_session_store().current(), course))

    form = CourseForm(obj=course)
    if form.validate_on_submit():
        try:
            service.update_course(course_id, form.to_request())
        except ApiError as e:
            flash(e.message or 'Could not save the course.', 'danger')
        else:
            flash('Course updated.', 'success')
            return redirect(url_for('courses.list_courses'))

    return render_template('courses/form.html', form=form, course=course, title='Edit course')


@blueprint.route('/courses/<int:course_id>/delete', methods=['POST'])
@protected_view(Role.TEACHER, Role.ADMIN)
def delete_course(course_id):
    service = _course_service()
    try:
        course = service.get_course(course_id)
        ensure_allowed(can_manage_course(get_session_store().current(), course))
        service.delete_course(course_id)
    except ApiError as e:
        flash(e.message or 'Could not delete the course.', 'danger')
        return redirect(url_for('courses.course_detail', course_id=course_id))

    flash('Course deleted.', 'success')
    return redirect(url_for('courses.list_courses'))


@blueprint.route('/my-courses')
@protected_view(Role.TEACHER, Role.ADMIN)
def my_courses():
    courses = []
    try:
        courses = _course_service().my_courses()
    except ApiError as e:
        current_app.logger.warning(f"Could not load own courses: {e.message}")
        flash('Could not load your courses.', 'danger')

    return render_template('courses/my_courses.html', courses=courses)
