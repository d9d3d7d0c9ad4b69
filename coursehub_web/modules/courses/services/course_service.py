"""
Course Service - course catalog and CRUD through the remote API.
"""
from typing import List, Optional, Sequence

from coursehub_web.models import Course, CourseRequest
from coursehub_web.schemas import CourseRequestSchema, course_schema, courses_schema
from coursehub_web.services.api_client import ApiClient, load_payload


class CourseService:

    def __init__(self, client: ApiClient):
        self.client = client

    def list_courses(self) -> List[Course]:
        return load_payload(courses_schema, self.client.get('/courses') or [])

    def get_course(self, course_id: int) -> Course:
        return load_payload(course_schema, self.client.get(f'/courses/{course_id}'))

    def create_course(self, data: CourseRequest) -> Course:
        payload = self.client.post('/courses', json=CourseRequestSchema().dump(data))
        return load_payload(course_schema, payload)

    def update_course(self, course_id: int, data: CourseRequest) -> Course:
        payload = self.client.put(f'/courses/{course_id}', json=CourseRequestSchema().dump(data))
        return load_payload(course_schema, payload)

    def delete_course(self, course_id: int) -> None:
        self.client.delete(f'/courses/{course_id}')

    def my_courses(self) -> List[Course]:
        return load_payload(courses_schema, self.client.get('/courses/my') or [])

    def search_courses(self, query: str) -> List[Course]:
        # requests URL-encodes the query
        payload = self.client.get('/courses/search', params={'q': query})
        return load_payload(courses_schema, payload or [])


def filter_courses(courses: Sequence[Course], query: Optional[str]) -> List[Course]:
    """Case-insensitive match on title, description or teacher name."""
    needle = (query or '').strip().lower()
    if not needle:
        return list(courses)

    def matches(course: Course) -> bool:
        haystacks = [course.title, course.description]
        if course.teacher:
            haystacks.append(course.teacher.full_name)
        return any(needle in (text or '').lower() for text in haystacks)

    return [course for course in courses if matches(course)]
