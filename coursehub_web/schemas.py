"""Marshmallow schemas translating between the API's camelCase JSON and
the dataclasses in :mod:`coursehub_web.models`."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, post_load

from .models import (
    AnswerOption,
    AuthResponse,
    Course,
    Identity,
    Question,
    QuestionType,
    Quiz,
    QuizAttempt,
    Role,
    StudentAnswer,
)


class _ApiSchema(Schema):
    class Meta:
        unknown = EXCLUDE


class IdentitySchema(_ApiSchema):
    id = fields.Int(required=True)
    first_name = fields.Str(required=True, data_key="firstName")
    last_name = fields.Str(required=True, data_key="lastName")
    email = fields.Str(required=True)
    role = fields.Enum(Role, required=True)
    created_at = fields.DateTime(allow_none=True, load_default=None, data_key="createdAt")
    updated_at = fields.DateTime(allow_none=True, load_default=None, data_key="updatedAt")

    @post_load
    def make_identity(self, data, **kwargs):
        return Identity(**data)


class CourseSchema(_ApiSchema):
    id = fields.Int(required=True)
    title = fields.Str(required=True)
    description = fields.Str(load_default="", allow_none=True)
    teacher = fields.Nested(IdentitySchema, allow_none=True, load_default=None)
    created_at = fields.DateTime(allow_none=True, load_default=None, data_key="createdAt")
    updated_at = fields.DateTime(allow_none=True, load_default=None, data_key="updatedAt")

    @post_load
    def make_course(self, data, **kwargs):
        data["description"] = data.get("description") or ""
        return Course(**data)


class AnswerOptionSchema(_ApiSchema):
    id = fields.Int(required=True)
    text = fields.Str(required=True)
    is_correct = fields.Bool(allow_none=True, load_default=None, data_key="isCorrect")

    @post_load
    def make_option(self, data, **kwargs):
        return AnswerOption(**data)


class QuestionSchema(_ApiSchema):
    id = fields.Int(required=True)
    text = fields.Str(required=True)
    type = fields.Enum(QuestionType, required=True)
    points = fields.Int(load_default=1)
    answer_options = fields.List(
        fields.Nested(AnswerOptionSchema), load_default=list, data_key="answerOptions"
    )

    @post_load
    def make_question(self, data, **kwargs):
        return Question(**data)


class QuizSchema(_ApiSchema):
    id = fields.Int(required=True)
    title = fields.Str(required=True)
    description = fields.Str(load_default="", allow_none=True)
    course = fields.Nested(CourseSchema, allow_none=True, load_default=None)
    is_active = fields.Bool(load_default=False, data_key="isActive")
    max_attempts = fields.Int(allow_none=True, load_default=None, data_key="maxAttempts")
    time_limit_minutes = fields.Int(allow_none=True, load_default=None, data_key="timeLimitMinutes")
    questions = fields.List(fields.Nested(QuestionSchema), load_default=list, allow_none=True)
    created_at = fields.DateTime(allow_none=True, load_default=None, data_key="createdAt")
    updated_at = fields.DateTime(allow_none=True, load_default=None, data_key="updatedAt")

    @post_load
    def make_quiz(self, data, **kwargs):
        data["description"] = data.get("description") or ""
        data["questions"] = data.get("questions") or []
        return Quiz(**data)


class StudentAnswerSchema(_ApiSchema):
    id = fields.Int(required=True)
    question = fields.Nested(QuestionSchema, required=True)
    selected_options = fields.List(
        fields.Nested(AnswerOptionSchema), load_default=list, data_key="selectedOptions"
    )
    text_answer = fields.Str(allow_none=True, load_default=None, data_key="textAnswer")

    @post_load
    def make_answer(self, data, **kwargs):
        return StudentAnswer(**data)


class QuizAttemptSchema(_ApiSchema):
    id = fields.Int(required=True)
    quiz = fields.Nested(QuizSchema, required=True)
    student = fields.Nested(IdentitySchema, allow_none=True, load_default=None)
    start_time = fields.DateTime(allow_none=True, load_default=None, data_key="startTime")
    end_time = fields.DateTime(allow_none=True, load_default=None, data_key="endTime")
    score = fields.Float(allow_none=True, load_default=None)
    max_score = fields.Float(load_default=0, data_key="maxScore")
    is_completed = fields.Bool(load_default=False, data_key="isCompleted")
    student_answers = fields.List(
        fields.Nested(StudentAnswerSchema), load_default=list, data_key="studentAnswers"
    )

    @post_load
    def make_attempt(self, data, **kwargs):
        return QuizAttempt(**data)


class AuthResponseSchema(_ApiSchema):
    access_token = fields.Str(required=True, data_key="accessToken")
    token_type = fields.Str(load_default="Bearer", data_key="tokenType")
    user = fields.Nested(IdentitySchema, required=True)

    @post_load
    def make_auth_response(self, data, **kwargs):
        return AuthResponse(**data)


# --- Outgoing payloads (dump only) ---


class LoginRequestSchema(Schema):
    email = fields.Str()
    password = fields.Str()


class RegisterRequestSchema(Schema):
    first_name = fields.Str(data_key="firstName")
    last_name = fields.Str(data_key="lastName")
    email = fields.Str()
    password = fields.Str()
    role = fields.Enum(Role)


class CourseRequestSchema(Schema):
    title = fields.Str()
    description = fields.Str()


class AnswerOptionRequestSchema(Schema):
    text = fields.Str()
    is_correct = fields.Bool(data_key="isCorrect")


class QuestionRequestSchema(Schema):
    text = fields.Str()
    type = fields.Enum(QuestionType)
    points = fields.Int()
    answer_options = fields.List(fields.Nested(AnswerOptionRequestSchema), data_key="answerOptions")


class QuizRequestSchema(Schema):
    title = fields.Str()
    description = fields.Str()
    course_id = fields.Int(data_key="courseId")
    is_active = fields.Bool(data_key="isActive")
    max_attempts = fields.Int(allow_none=True, data_key="maxAttempts")
    time_limit_minutes = fields.Int(allow_none=True, data_key="timeLimitMinutes")
    questions = fields.List(fields.Nested(QuestionRequestSchema))


class StudentAnswerRequestSchema(Schema):
    question_id = fields.Int(data_key="questionId")
    selected_option_ids = fields.List(fields.Int(), data_key="selectedOptionIds")
    text_answer = fields.Str(allow_none=True, data_key="textAnswer")


class QuizSubmissionRequestSchema(Schema):
    quiz_id = fields.Int(data_key="quizId")
    answers = fields.List(fields.Nested(StudentAnswerRequestSchema))


identity_schema = IdentitySchema()
course_schema = CourseSchema()
courses_schema = CourseSchema(many=True)
quiz_schema = QuizSchema()
quizzes_schema = QuizSchema(many=True)
attempt_schema = QuizAttemptSchema()
attempts_schema = QuizAttemptSchema(many=True)
auth_response_schema = AuthResponseSchema()
