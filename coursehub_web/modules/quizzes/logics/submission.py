"""Builds a quiz submission from posted form fields.

Field naming: ``q-<question id>`` holds the selected option id(s) for
choice questions, ``q-<question id>-text`` the free-text answer.
"""
from typing import List

from coursehub_web.models import QuestionType, Quiz, QuizSubmissionRequest, StudentAnswerRequest


def field_name(question_id: int) -> str:
    return f"q-{question_id}"


def text_field_name(question_id: int) -> str:
    return f"q-{question_id}-text"


def build_submission(quiz: Quiz, formdata) -> QuizSubmissionRequest:
    """Collect one answer per question. Option ids not belonging to the question are dropped."""
    answers: List[StudentAnswerRequest] = []
    for question in quiz.questions:
        if question.type is QuestionType.TEXT:
            text = (formdata.get(text_field_name(question.id)) or '').strip()
            answers.append(StudentAnswerRequest(question_id=question.id, text_answer=text or None))
            continue

        valid_ids = {option.id for option in question.answer_options}
        selected = []
        for raw in formdata.getlist(field_name(question.id)):
            try:
                option_id = int(raw)
            except (TypeError, ValueError):
                continue
            if option_id in valid_ids and option_id not in selected:
                selected.append(option_id)

        if question.type is not QuestionType.MULTIPLE_CHOICE:
            selected = selected[:1]
        answers.append(StudentAnswerRequest(question_id=question.id, selected_option_ids=selected))

    return QuizSubmissionRequest(quiz_id=quiz.id, answers=answers)


def unanswered_questions(submission: QuizSubmissionRequest) -> int:
    return sum(1 for answer in submission.answers if not answer.selected_option_ids and not answer.text_answer)
