"""
Quiz Service - quizzes and quiz attempts through the remote API.

Grading and attempt limits are enforced by the API; this layer only moves
payloads in and out.
"""
from typing import List

from coursehub_web.models import Quiz, QuizAttempt, QuizRequest, QuizSubmissionRequest
from coursehub_web.schemas import (
    QuizRequestSchema,
    QuizSubmissionRequestSchema,
    attempt_schema,
    attempts_schema,
    quiz_schema,
    quizzes_schema,
)
from coursehub_web.services.api_client import ApiClient, load_payload


class QuizService:

    def __init__(self, client: ApiClient):
        self.client = client

    # --- Quizzes ---

    def list_by_course(self, course_id: int) -> List[Quiz]:
        return load_payload(quizzes_schema, self.client.get(f'/quizzes/course/{course_id}') or [])

    def get_quiz(self, quiz_id: int) -> Quiz:
        return load_payload(quiz_schema, self.client.get(f'/quizzes/{quiz_id}'))

    def create_quiz(self, data: QuizRequest) -> Quiz:
        payload = self.client.post('/quizzes', json=QuizRequestSchema().dump(data))
        return load_payload(quiz_schema, payload)

    def update_quiz(self, quiz_id: int, data: QuizRequest) -> Quiz:
        payload = self.client.put(f'/quizzes/{quiz_id}', json=QuizRequestSchema().dump(data))
        return load_payload(quiz_schema, payload)

    def delete_quiz(self, quiz_id: int) -> None:
        self.client.delete(f'/quizzes/{quiz_id}')

    def my_quizzes(self) -> List[Quiz]:
        return load_payload(quizzes_schema, self.client.get('/quizzes/my') or [])

    # --- Attempts ---

    def start_attempt(self, quiz_id: int) -> QuizAttempt:
        return load_payload(attempt_schema, self.client.post(f'/quizzes/{quiz_id}/start'))

    def submit(self, submission: QuizSubmissionRequest) -> QuizAttempt:
        payload = self.client.post('/quizzes/submit', json=QuizSubmissionRequestSchema().dump(submission))
        return load_payload(attempt_schema, payload)

    def my_attempts(self) -> List[QuizAttempt]:
        return load_payload(attempts_schema, self.client.get('/quizzes/attempts/my') or [])

    def quiz_attempts(self, quiz_id: int) -> List[QuizAttempt]:
        return load_payload(attempts_schema, self.client.get(f'/quizzes/{quiz_id}/attempts') or [])

    def get_attempt(self, attempt_id: int) -> QuizAttempt:
        return load_payload(attempt_schema, self.client.get(f'/quizzes/attempts/{attempt_id}'))
