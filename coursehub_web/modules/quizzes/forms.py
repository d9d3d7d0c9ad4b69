# File: coursehub_web/modules/quizzes/forms.py
# Quiz editor (nested questions and answer options) and the attempt form.

from flask_wtf import FlaskForm
from wtforms import (
    BooleanField,
    FieldList,
    Form,
    FormField,
    IntegerField,
    SelectField,
    StringField,
    SubmitField,
    TextAreaField,
)
from wtforms.validators import DataRequired, Length, NumberRange, Optional, ValidationError

from coursehub_web.models import (
    AnswerOptionRequest,
    QuestionRequest,
    QuestionType,
    Quiz,
    QuizRequest,
)

OPTION_SLOTS = 4


class AnswerOptionForm(Form):
    text = StringField('Option', validators=[Optional()])
    is_correct = BooleanField('Correct')


class QuestionForm(Form):
    text = TextAreaField('Question', validators=[DataRequired(message="Question text is required.")])
    type = SelectField(
        'Type',
        choices=[(question_type.value, question_type.label) for question_type in QuestionType],
        default=QuestionType.SINGLE_CHOICE.value,
    )
    points = IntegerField('Points', default=1, validators=[
        DataRequired(message="Points are required."),
        NumberRange(min=1, message="A question is worth at least 1 point."),
    ])
    answer_options = FieldList(FormField(AnswerOptionForm), min_entries=OPTION_SLOTS)

    def filled_options(self):
        return [entry for entry in self.answer_options if (entry.form.text.data or '').strip()]

    def validate_answer_options(self, field):
        try:
            question_type = QuestionType(self.type.data)
        except ValueError:
            # reported by the type field itself
            return
        if not question_type.has_options:
            return

        options = self.filled_options()
        correct = [entry for entry in options if entry.form.is_correct.data]
        if len(options) < 2:
            raise ValidationError("Provide at least two answer options.")
        if not correct:
            raise ValidationError("Mark at least one option as correct.")
        if question_type is not QuestionType.MULTIPLE_CHOICE and len(correct) > 1:
            raise ValidationError("Only one option can be correct for this question type.")

    def to_request(self) -> QuestionRequest:
        question_type = QuestionType(self.type.data)
        options = []
        if question_type.has_options:
            options = [
                AnswerOptionRequest(text=entry.form.text.data.strip(), is_correct=bool(entry.form.is_correct.data))
                for entry in self.filled_options()
            ]
        return QuestionRequest(
            text=self.text.data.strip(),
            type=question_type,
            points=self.points.data,
            answer_options=options,
        )


class QuizForm(FlaskForm):
    """Create or edit a quiz together with its questions."""
    title = StringField('Title', validators=[
        DataRequired(message="Quiz title is required."),
        Length(min=3, message="Title must be at least 3 characters."),
    ])
    description = TextAreaField('Description', validators=[Optional()])
    is_active = BooleanField('Active', default=True)
    max_attempts = IntegerField('Max attempts', validators=[
        Optional(), NumberRange(min=1, message="Allow at least one attempt.")
    ])
    time_limit_minutes = IntegerField('Time limit (minutes)', validators=[
        Optional(), NumberRange(min=1, message="The time limit must be at least one minute.")
    ])
    questions = FieldList(FormField(QuestionForm), min_entries=1)
    add_question = SubmitField('Add question')
    submit = SubmitField('Save quiz')

    def to_request(self, course_id: int) -> QuizRequest:
        return QuizRequest(
            title=self.title.data.strip(),
            description=(self.description.data or '').strip(),
            course_id=course_id,
            is_active=bool(self.is_active.data),
            max_attempts=self.max_attempts.data,
            time_limit_minutes=self.time_limit_minutes.data,
            questions=[entry.form.to_request() for entry in self.questions],
        )


def quiz_form_data(quiz: Quiz) -> dict:
    """Initial form data for editing ``quiz``."""
    questions = []
    for question in quiz.questions:
        options = [
            {'text': option.text, 'is_correct': bool(option.is_correct)}
            for option in question.answer_options
        ]
        options += [{'text': '', 'is_correct': False}] * max(0, OPTION_SLOTS - len(options))
        questions.append({
            'text': question.text,
            'type': question.type.value,
            'points': question.points,
            'answer_options': options,
        })
    return {
        'title': quiz.title,
        'description': quiz.description,
        'is_active': quiz.is_active,
        'max_attempts': quiz.max_attempts,
        'time_limit_minutes': quiz.time_limit_minutes,
        'questions': questions,
    }


class StartAttemptForm(FlaskForm):
    submit = SubmitField('Take quiz')


class AttemptForm(FlaskForm):
    """Answers are read from ``q-<question id>`` fields; this form only carries CSRF."""
    submit = SubmitField('Submit answers')


class DeleteForm(FlaskForm):
    submit = SubmitField('Delete')
