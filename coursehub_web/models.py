"""Domain objects mirrored from the remote CourseHub API.

The web front-end never persists these; they are read-through copies of what
the API returned on the last fetch.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from flask_login import UserMixin


class Role(str, enum.Enum):
    STUDENT = "STUDENT"
    TEACHER = "TEACHER"
    ADMIN = "ADMIN"

    @property
    def label(self) -> str:
        return ROLE_LABELS[self]


ROLE_LABELS = {
    Role.STUDENT: "Student",
    Role.TEACHER: "Teacher",
    Role.ADMIN: "Administrator",
}


class QuestionType(str, enum.Enum):
    SINGLE_CHOICE = "SINGLE_CHOICE"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    TRUE_FALSE = "TRUE_FALSE"
    TEXT = "TEXT"

    @property
    def label(self) -> str:
        return QUESTION_TYPE_LABELS[self]

    @property
    def has_options(self) -> bool:
        return self is not QuestionType.TEXT


QUESTION_TYPE_LABELS = {
    QuestionType.SINGLE_CHOICE: "Single choice",
    QuestionType.MULTIPLE_CHOICE: "Multiple choice",
    QuestionType.TRUE_FALSE: "True / False",
    QuestionType.TEXT: "Text answer",
}


@dataclass(frozen=True)
class Identity(UserMixin):
    """An authenticated user as issued by the API.

    Frozen: a role change requires a fresh login.
    """

    id: int
    first_name: str
    last_name: str
    email: str
    role: Role
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Session:
    """Current identity plus bearer credential, or nothing at all."""

    identity: Optional[Identity] = None
    credential: Optional[str] = None

    def __post_init__(self):
        if (self.identity is None) != (not self.credential):
            raise ValueError("A session needs both an identity and a credential, or neither.")

    @classmethod
    def empty(cls) -> "Session":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    @property
    def role(self) -> Optional[Role]:
        return self.identity.role if self.identity else None


@dataclass(frozen=True)
class Course:
    id: int
    title: str
    description: str = ""
    teacher: Optional[Identity] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def was_updated(self) -> bool:
        return bool(self.updated_at and self.created_at and self.updated_at != self.created_at)


@dataclass(frozen=True)
class AnswerOption:
    id: int
    text: str
    # Only populated for viewers allowed to edit the quiz.
    is_correct: Optional[bool] = None


@dataclass(frozen=True)
class Question:
    id: int
    text: str
    type: QuestionType
    points: int = 1
    answer_options: List[AnswerOption] = field(default_factory=list)


@dataclass(frozen=True)
class Quiz:
    id: int
    title: str
    description: str = ""
    course: Optional[Course] = None
    is_active: bool = False
    max_attempts: Optional[int] = None
    time_limit_minutes: Optional[int] = None
    questions: List[Question] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def owner(self) -> Optional[Identity]:
        return self.course.teacher if self.course else None

    @property
    def total_points(self) -> int:
        return sum(question.points for question in self.questions)


@dataclass(frozen=True)
class StudentAnswer:
    id: int
    question: Question
    selected_options: List[AnswerOption] = field(default_factory=list)
    text_answer: Optional[str] = None


@dataclass(frozen=True)
class QuizAttempt:
    id: int
    quiz: Quiz
    student: Optional[Identity] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    score: Optional[float] = None
    max_score: float = 0
    is_completed: bool = False
    student_answers: List[StudentAnswer] = field(default_factory=list)

    @property
    def percentage(self) -> Optional[float]:
        if self.score is None or not self.max_score:
            return None
        return round(self.score * 100.0 / self.max_score, 1)


# --- Request payloads ---


@dataclass
class LoginRequest:
    email: str
    password: str


@dataclass
class RegisterRequest:
    first_name: str
    last_name: str
    email: str
    password: str
    role: Role


@dataclass
class AuthResponse:
    access_token: str
    user: Identity
    token_type: str = "Bearer"


@dataclass
class CourseRequest:
    title: str
    description: str


@dataclass
class AnswerOptionRequest:
    text: str
    is_correct: bool = False


@dataclass
class QuestionRequest:
    text: str
    type: QuestionType
    points: int = 1
    answer_options: List[AnswerOptionRequest] = field(default_factory=list)


@dataclass
class QuizRequest:
    title: str
    description: str
    course_id: int
    is_active: bool = True
    max_attempts: Optional[int] = None
    time_limit_minutes: Optional[int] = None
    questions: List[QuestionRequest] = field(default_factory=list)


@dataclass
class StudentAnswerRequest:
    question_id: int
    selected_option_ids: List[int] = field(default_factory=list)
    text_answer: Optional[str] = None


@dataclass
class QuizSubmissionRequest:
    quiz_id: int
    answers: List[StudentAnswerRequest] = field(default_factory=list)
