from urllib.parse import urlparse

from flask import current_app, flash, redirect, render_template, request, url_for

from coursehub_web.core.error_handlers import ApiError
from coursehub_web.models import LoginRequest, RegisterRequest, Role
from coursehub_web.modules.access_control.decorators import protected_view
from .. import auth_bp as blueprint
from ..forms import LoginForm, RegistrationForm
from ..interface import get_api_client, get_session_store
from ..services.auth_service import AuthService
from ..services.user_service import UserService


def _safe_next(default_endpoint='dashboard.home'):
    """Return the remembered target when it is a local path, else the home page."""
    next_page = request.args.get('next')
    if not next_page or urlparse(next_page).netloc != '' or urlparse(next_page).scheme != '' \
            or not next_page.startswith('/'):
        return url_for(default_endpoint)
    return next_page


@blueprint.route('/login', methods=['GET', 'POST'])
def login():
    if get_session_store().current().is_authenticated:
        return redirect(url_for('dashboard.home'))

    form = LoginForm()
    if form.validate_on_submit():
        try:
            AuthService(get_api_client()).login(
                LoginRequest(email=form.email.data.strip(), password=form.password.data)
            )
        except ApiError as e:
            flash(e.message, 'danger')
            return render_template('auth/login.html', form=form)

        flash('Signed in successfully!', 'success')
        return redirect(_safe_next())

    return render_template('auth/login.html', form=form)


@blueprint.route('/register', methods=['GET', 'POST'])
def register():
    if get_session_store().current().is_authenticated:
        return redirect(url_for('dashboard.home'))

    form = RegistrationForm()
    if form.validate_on_submit():
        try:
            AuthService(get_api_client()).register(
                RegisterRequest(
                    first_name=form.first_name.data.strip(),
                    last_name=form.last_name.data.strip(),
                    email=form.email.data.strip(),
                    password=form.password.data,
                    role=Role(form.role.data),
                )
            )
        except ApiError as e:
            flash(e.message or 'Registration failed.', 'danger')
            return render_template('auth/register.html', form=form)

        flash('Welcome aboard! Your account has been created.', 'success')
        return redirect(url_for('dashboard.home'))

    return render_template('auth/register.html', form=form)


@blueprint.route('/logout', methods=['GET', 'POST'])
def logout():
    AuthService(get_api_client()).logout()
    flash('You have been signed out.', 'info')
    return redirect(url_for('auth.login'))


@blueprint.route('/profile')
@protected_view()
def profile():
    """Refresh the signed-in identity from the API."""
    store = get_session_store()
    stored = store.identity
    try:
        fresh = UserService(get_api_client()).get_current_user()
    except ApiError as e:
        flash(e.message, 'danger')
        fresh = stored

    if fresh.role != stored.role:
        # Roles never change inside a session.
        current_app.logger.info("Role of user %s changed, requiring a new sign-in.", stored.id)
        store.clear(reason='role_changed')
        flash('Your role has changed. Please sign in again.', 'warning')
        return redirect(url_for('auth.login'))

    return render_template('auth/profile.html', user=fresh)


@blueprint.route('/users/<int:user_id>')
@protected_view()
def user_detail(user_id):
    try:
        user = UserService(get_api_client()).get_user(user_id)
    except ApiError as e:
        flash(e.message, 'danger')
        return redirect(url_for('courses.list_courses'))
    return render_template('auth/profile.html', user=user)
