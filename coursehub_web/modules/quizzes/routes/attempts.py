from flask import current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user

from coursehub_web.core.error_handlers import ApiError
from coursehub_web.models import Role
from coursehub_web.modules.access_control.decorators import ensure_allowed, protected_view
from coursehub_web.modules.access_control.logics.policies import can_manage_quiz, can_take_quiz
from coursehub_web.modules.auth.interface import get_api_client, get_session_store
from .. import quizzes_bp as blueprint
from ..forms import AttemptForm
from ..logics.submission import build_submission, field_name, text_field_name, unanswered_questions
from ..services.quiz_service import QuizService


def _quiz_service() -> QuizService:
    return QuizService(get_api_client())


@blueprint.route('/quizzes/<int:quiz_id>/start', methods=['POST'])
@protected_view(Role.STUDENT, Role.ADMIN)
def start_attempt(quiz_id):
    service = _quiz_service()
    try:
        quiz = service.get_quiz(quiz_id)
        ensure_allowed(can_take_quiz(get_session_store().current(), quiz))
        attempt = service.start_attempt(quiz_id)
    except ApiError as e:
        flash(e.message or 'Could not start the quiz.', 'danger')
        return redirect(url_for('quizzes.quiz_detail', quiz_id=quiz_id))

    current_app.logger.info(f"Attempt {attempt.id} started on quiz {quiz_id}")
    return redirect(url_for('quizzes.attempt_detail', attempt_id=attempt.id))


@blueprint.route('/quiz-attempts/<int:attempt_id>')
@protected_view()
def attempt_detail(attempt_id):
    try:
        attempt = _quiz_service().get_attempt(attempt_id)
    except ApiError as e:
        flash('Attempt not found.' if e.is_not_found else e.message, 'danger')
        return redirect(url_for('dashboard.home'))

    is_own = attempt.student is not None and attempt.student.id == current_user.id
    return render_template(
        'quizzes/attempt.html',
        attempt=attempt,
        quiz=attempt.quiz,
        form=AttemptForm(),
        can_answer=is_own and not attempt.is_completed,
        field_name=field_name,
        text_field_name=text_field_name,
    )


@blueprint.route('/quiz-attempts/<int:attempt_id>/submit', methods=['POST'])
@protected_view(Role.STUDENT, Role.ADMIN)
def submit_attempt(attempt_id):
    service = _quiz_service()
    form = AttemptForm()
    if not form.validate_on_submit():
        flash('Your answers could not be read. Please try again.', 'danger')
        return redirect(url_for('quizzes.attempt_detail', attempt_id=attempt_id))

    try:
        attempt = service.get_attempt(attempt_id)
        ensure_allowed(attempt.student is not None and attempt.student.id == current_user.id)
        if attempt.is_completed:
            flash('This attempt has already been submitted.', 'info')
            return redirect(url_for('quizzes.attempt_detail', attempt_id=attempt_id))

        submission = build_submission(attempt.quiz, request.form)
        result = service.submit(submission)
    except ApiError as e:
        flash(e.message or 'Could not submit your answers.', 'danger')
        return redirect(url_for('quizzes.attempt_detail', attempt_id=attempt_id))

    skipped = unanswered_questions(submission)
    if skipped:
        flash(f'{skipped} question(s) were left unanswered.', 'warning')
    flash('Answers submitted.', 'success')
    return redirect(url_for('quizzes.attempt_detail', attempt_id=result.id))


@blueprint.route('/my-attempts')
@protected_view(Role.STUDENT, Role.ADMIN)
def my_attempts():
    attempts = []
    try:
        attempts = _quiz_service().my_attempts()
    except ApiError as e:
        current_app.logger.warning(f"Could not load attempts: {e.message}")
        flash('Could not load your results.', 'danger')
    return render_template('quizzes/attempts.html', attempts=attempts, quiz=None, title='My results')


@blueprint.route('/quizzes/<int:quiz_id>/attempts')
@protected_view(Role.TEACHER, Role.ADMIN)
def quiz_attempts(quiz_id):
    service = _quiz_service()
    try:
        quiz = service.get_quiz(quiz_id)
        ensure_allowed(can_manage_quiz(get_session_store().current(), quiz))
        attempts = service.quiz_attempts(quiz_id)
    except ApiError as e:
        flash(e.message or 'Could not load attempts.', 'danger')
        return redirect(url_for('quizzes.quiz_detail', quiz_id=quiz_id))
    return render_template('quizzes/attempts.html', attempts=attempts, quiz=quiz, title=f'Attempts: {quiz.title}')
