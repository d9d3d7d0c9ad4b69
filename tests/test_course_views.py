from urllib.parse import urlparse

from coursehub_web.models import Course, Identity, Role
from coursehub_web.modules.courses.services.course_service import filter_courses

from payloads import course_payload, quiz_payload


def teacher(user_id, first='Tom', last='Teacher'):
    return Identity(id=user_id, first_name=first, last_name=last, email=f'{user_id}@example.com', role=Role.TEACHER)


def test_filter_courses_matches_title_description_and_teacher():
    courses = [
        Course(id=1, title='Intro to Python', description='Loops', teacher=teacher(2, 'Guido', 'Rossum')),
        Course(id=2, title='Statistics', description='Averages and PYTHONIC plots', teacher=teacher(3)),
        Course(id=3, title='History', description='Kings', teacher=teacher(4, 'Mary', 'Beard')),
        Course(id=4, title='Art', description='Colour'),
    ]

    assert [c.id for c in filter_courses(courses, 'python')] == [1, 2]
    assert [c.id for c in filter_courses(courses, '  beard ')] == [3]
    assert filter_courses(courses, '') == courses
    assert filter_courses(courses, None) == courses
    assert filter_courses(courses, 'chemistry') == []


def test_list_filters_locally(login_as, api):
    api.add('GET', '/courses', [
        course_payload(1, 'Algebra Basics'),
        course_payload(2, 'World History', description='Empires and wars over time.'),
    ])

    response = login_as(Role.STUDENT).get('/courses?q=history')

    assert response.status_code == 200
    assert b'World History' in response.data
    assert b'Algebra Basics' not in response.data
    assert b'Showing 1 of 2' in response.data


def test_search_goes_to_the_api(login_as, api):
    api.add('GET', '/courses/search', [course_payload(3, 'Data Science')])

    response = login_as(Role.STUDENT).get('/courses/search?q=data+%26+science')

    assert response.status_code == 200
    assert b'Data Science' in response.data
    assert api.called('GET', '/courses/search')[0].params == {'q': 'data & science'}


def test_list_survives_api_failure(login_as, api):
    api.add('GET', '/courses', {'message': 'boom'}, status=500)

    response = login_as(Role.STUDENT).get('/courses')

    assert response.status_code == 200
    assert b'Could not load courses.' in response.data


def test_course_detail_hides_inactive_quizzes_from_students(login_as, api):
    api.add('GET', '/courses/10', course_payload(10))
    api.add('GET', '/quizzes/course/10', [
        quiz_payload(100, title='Open quiz'),
        quiz_payload(101, title='Draft quiz', is_active=False),
    ])

    response = login_as(Role.STUDENT).get('/courses/10')

    assert b'Open quiz' in response.data
    assert b'Draft quiz' not in response.data
    assert b'Delete' not in response.data


def test_course_detail_owner_sees_everything(login_as, api):
    api.add('GET', '/courses/10', course_payload(10, teacher_id=2))
    api.add('GET', '/quizzes/course/10', [quiz_payload(101, title='Draft quiz', is_active=False)])

    response = login_as(Role.TEACHER, user_id=2).get('/courses/10')

    assert b'Draft quiz' in response.data
    assert b'New quiz' in response.data


def test_teacher_creates_course(login_as, api):
    api.add('POST', '/courses', course_payload(11, 'Geometry'), status=201)

    response = login_as(Role.TEACHER, user_id=2).post('/courses/create', data={
        'title': '  Geometry ',
        'description': 'Shapes, angles and proofs.',
    })

    assert response.status_code == 302
    call = api.called('POST', '/courses')[0]
    assert call.json == {'title': 'Geometry', 'description': 'Shapes, angles and proofs.'}
    assert call.headers['Authorization'] == 'Bearer token-2'


def test_course_form_validation(login_as, api):
    response = login_as(Role.TEACHER, user_id=2).post('/courses/create', data={'title': 'Ge', 'description': 'short'})

    assert response.status_code == 200
    assert b'Title must be at least 3 characters.' in response.data
    assert api.calls == []


def test_create_course_api_error_is_shown(login_as, api):
    api.add('POST', '/courses', {'message': 'Title already taken'}, status=409)

    response = login_as(Role.TEACHER, user_id=2).post('/courses/create', data={
        'title': 'Geometry',
        'description': 'Shapes, angles and proofs.',
    })

    assert response.status_code == 200
    assert b'Title already taken' in response.data


def test_admin_edits_any_course(login_as, api):
    api.add('GET', '/courses/10', course_payload(10, teacher_id=2))
    api.add('PUT', '/courses/10', course_payload(10, 'Algebra II'))

    response = login_as(Role.ADMIN, user_id=9).post('/courses/10/edit', data={
        'title': 'Algebra II',
        'description': 'More numbers and letters.',
    })

    assert response.status_code == 302
    assert api.called('PUT', '/courses/10')[0].json['title'] == 'Algebra II'


def test_edit_form_prefilled(login_as, api):
    api.add('GET', '/courses/10', course_payload(10, 'Algebra Basics', teacher_id=2))

    response = login_as(Role.TEACHER, user_id=2).get('/courses/10/edit')

    assert response.status_code == 200
    assert b'value="Algebra Basics"' in response.data


def test_missing_course_on_edit(login_as, api):
    response = login_as(Role.TEACHER, user_id=2).get('/courses/404/edit')

    assert response.status_code == 302
    assert urlparse(response.headers['Location']).path == '/courses'


def test_delete_by_other_teacher_is_forbidden(login_as, api):
    api.add('GET', '/courses/10', course_payload(10, teacher_id=2))

    response = login_as(Role.TEACHER, user_id=3).post('/courses/10/delete')

    assert urlparse(response.headers['Location']).path == '/unauthorized'
    assert api.called('DELETE', '/courses/10') == []


def test_owner_deletes_course(login_as, api):
    api.add('GET', '/courses/10', course_payload(10, teacher_id=2))
    api.add('DELETE', '/courses/10', None, status=204)

    response = login_as(Role.TEACHER, user_id=2).post('/courses/10/delete')

    assert urlparse(response.headers['Location']).path == '/courses'
    assert len(api.called('DELETE', '/courses/10')) == 1


def test_my_courses_is_staff_only(login_as, api):
    api.add('GET', '/courses/my', [course_payload(10)])

    assert login_as(Role.STUDENT).get('/my-courses').status_code == 302
    response = login_as(Role.TEACHER, user_id=2).get('/my-courses')
    assert response.status_code == 200
    assert b'Algebra Basics' in response.data
