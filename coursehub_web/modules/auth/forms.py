# File: coursehub_web/modules/auth/forms.py
# Login and registration forms; validation errors are shown inline per field.

from flask_wtf import FlaskForm
from wtforms import PasswordField, SelectField, StringField, SubmitField
from wtforms.validators import DataRequired, Email, Length

from coursehub_web.models import Role

MIN_PASSWORD_LENGTH = 6


class LoginForm(FlaskForm):
    """
    Login form.
    """
    email = StringField('Email', validators=[
        DataRequired(message="Email is required."),
        Email(message="Enter a valid email address."),
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message="Password is required."),
        Length(min=MIN_PASSWORD_LENGTH, message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters."),
    ])
    submit = SubmitField('Sign in')


class RegistrationForm(FlaskForm):
    """
    Registration form. The chosen role is sent to the API as-is.
    """
    first_name = StringField('First name', validators=[DataRequired(message="First name is required.")])
    last_name = StringField('Last name', validators=[DataRequired(message="Last name is required.")])
    email = StringField('Email', validators=[
        DataRequired(message="Email is required."),
        Email(message="Enter a valid email address."),
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message="Password is required."),
        Length(min=MIN_PASSWORD_LENGTH, message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters."),
    ])
    role = SelectField(
        'Role',
        choices=[(role.value, role.label) for role in Role],
        default=Role.STUDENT.value,
        validators=[DataRequired(message="Choose a role.")],
    )
    submit = SubmitField('Create account')
