from flask import current_app, flash, redirect, render_template, url_for

from coursehub_web.core.error_handlers import ApiError
from coursehub_web.models import Role
from coursehub_web.modules.access_control.decorators import ensure_allowed, protected_view
from coursehub_web.modules.access_control.logics.policies import (
    can_manage_course,
    can_manage_quiz,
    can_take_quiz,
)
from coursehub_web.modules.auth.interface import get_api_client, get_session_store
from coursehub_web.modules.courses.services.course_service import CourseService
from .. import quizzes_bp as blueprint
from ..forms import DeleteForm, QuizForm, StartAttemptForm, quiz_form_data
from ..services.quiz_service import QuizService


def _quiz_service() -> QuizService:
    return QuizService(get_api_client())


def _load_quiz_or_redirect(quiz_id):
    """Fetch a quiz; on failure flash the reason and return a redirect instead."""
    try:
        return _quiz_service().get_quiz(quiz_id), None
    except ApiError as e:
        flash('Quiz not found.' if e.is_not_found else e.message, 'danger')
        return None, redirect(url_for('courses.list_courses'))


@blueprint.route('/quizzes/<int:quiz_id>')
@protected_view()
def quiz_detail(quiz_id):
    quiz = None
    try:
        quiz = _quiz_service().get_quiz(quiz_id)
    except ApiError as e:
        current_app.logger.info(f"Quiz {quiz_id} failed to load: {e.message}")
        flash('Could not load the quiz.', 'danger')

    session = get_session_store().current()
    can_manage = can_manage_quiz(session, quiz)
    return render_template(
        'quizzes/detail.html',
        quiz=quiz,
        can_manage=can_manage,
        can_take=can_take_quiz(session, quiz),
        show_correct=can_manage,
        start_form=StartAttemptForm(),
        delete_form=DeleteForm(),
    )


@blueprint.route('/courses/<int:course_id>/quizzes/create', methods=['GET', 'POST'])
@protected_view(Role.TEACHER, Role.ADMIN)
def create_quiz(course_id):
    try:
        course = CourseService(get_api_client()).get_course(course_id)
    except ApiError as e:
        flash('Course not found.' if e.is_not_found else e.message, 'danger')
        return redirect(url_for('courses.list_courses'))

    ensure_allowed(can_manage_course(get_session_store().current(), course))

    form = QuizForm()
    if form.add_question.data:
        form.questions.append_entry()
    elif form.validate_on_submit():
        try:
            quiz = _quiz_service().create_quiz(form.to_request(course_id))
        except ApiError as e:
            flash(e.message or 'Could not save the quiz.', 'danger')
        else:
            flash(f'Quiz "{quiz.title}" created.', 'success')
            return redirect(url_for('quizzes.quiz_detail', quiz_id=quiz.id))

    return render_template('quizzes/form.html', form=form, course=course, quiz=None, title='New quiz')


@blueprint.route('/quizzes/<int:quiz_id>/edit', methods=['GET', 'POST'])
@protected_view(Role.TEACHER, Role.ADMIN)
def edit_quiz(quiz_id):
    quiz, failure = _load_quiz_or_redirect(quiz_id)
    if failure:
        return failure

    ensure_allowed(can_manage_quiz(get_session_store().current(), quiz))

    form = QuizForm(data=quiz_form_data(quiz))
    if form.add_question.data:
        form.questions.append_entry()
    elif form.validate_on_submit():
        try:
            _quiz_service().update_quiz(quiz_id, form.to_request(quiz.course.id))
        except ApiError as e:
            flash(e.message or 'Could not save the quiz.', 'danger')
        else:
            flash('Quiz updated.', 'success')
            return redirect(url_for('quizzes.quiz_detail', quiz_id=quiz_id))

    return render_template('quizzes/form.html', form=form, course=quiz.course, quiz=quiz, title='Edit quiz')


@blueprint.route('/quizzes/<int:quiz_id>/delete', methods=['POST'])
@protected_view(Role.TEACHER, Role.ADMIN)
def delete_quiz(quiz_id):
    quiz, failure = _load_quiz_or_redirect(quiz_id)
    if failure:
        return failure

    ensure_allowed(can_manage_quiz(get_session_store().current(), quiz))

    try:
        _quiz_service().delete_quiz(quiz_id)
    except ApiError as e:
        flash(e.message or 'Could not delete the quiz.', 'danger')
        return redirect(url_for('quizzes.quiz_detail', quiz_id=quiz_id))

    flash('Quiz deleted.', 'success')
    return redirect(url_for('courses.course_detail', course_id=quiz.course.id))


@blueprint.route('/my-quizzes')
@protected_view(Role.TEACHER, Role.ADMIN)
def my_quizzes():
    quizzes = []
    try:
        quizzes = _quiz_service().my_quizzes()
    except ApiError as e:
        current_app.logger.warning(f"Could not load own quizzes: {e.message}")
        flash('Could not load your quizzes.', 'danger')

    return render_template('quizzes/my_quizzes.html', quizzes=quizzes)
