# File: coursehub_web/modules/courses/forms.py
from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Length

from coursehub_web.models import CourseRequest


class CourseForm(FlaskForm):
    """Create or edit a course."""
    title = StringField('Title', validators=[
        DataRequired(message="Course title is required."),
        Length(min=3, message="Title must be at least 3 characters."),
    ])
    description = TextAreaField('Description', validators=[
        DataRequired(message="Course description is required."),
        Length(min=10, message="Description must be at least 10 characters."),
    ])
    submit = SubmitField('Save')

    def to_request(self) -> CourseRequest:
        return CourseRequest(title=self.title.data.strip(), description=self.description.data.strip())


class SearchForm(FlaskForm):
    class Meta:
        csrf = False

    q = StringField('Search')
