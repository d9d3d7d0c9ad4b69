import json

from coursehub_web.models import Role
from coursehub_web.modules.auth.services.session_store import TOKEN_KEY, USER_KEY

from payloads import course_payload, user_payload


def auth_body(user_id=1, role='STUDENT'):
    return {'accessToken': f'jwt-{user_id}', 'tokenType': 'Bearer', 'user': user_payload(user_id, role)}


def test_login_page_renders(client):
    response = client.get('/auth/login')
    assert response.status_code == 200
    assert b'Sign in' in response.data


def test_login_establishes_session_and_returns_to_target(client, api):
    api.add('POST', '/auth/login', auth_body(1))

    response = client.post(
        '/auth/login?next=/courses%3Fq%3Dalgebra',
        data={'email': 'ada@example.com', 'password': 'secret1'},
    )

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/courses?q=algebra')
    assert api.calls[0].json == {'email': 'ada@example.com', 'password': 'secret1'}
    assert 'Authorization' not in api.calls[0].headers
    with client.session_transaction() as session:
        assert session[TOKEN_KEY] == 'jwt-1'
        assert json.loads(session[USER_KEY])['id'] == 1


def test_login_ignores_external_next(client, api):
    api.add('POST', '/auth/login', auth_body(1))

    response = client.post(
        '/auth/login?next=https://evil.example.com/',
        data={'email': 'ada@example.com', 'password': 'secret1'},
    )

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/')
    assert 'evil' not in response.headers['Location']


def test_failed_login_shows_api_message(client, api):
    api.add('POST', '/auth/login', {'message': 'Invalid email or password'}, status=401)

    response = client.post('/auth/login', data={'email': 'ada@example.com', 'password': 'wrong-pass'})

    assert response.status_code == 200
    assert b'Invalid email or password' in response.data
    with client.session_transaction() as session:
        assert TOKEN_KEY not in session


def test_login_validation_errors_skip_the_api(client, api):
    response = client.post('/auth/login', data={'email': 'not-an-email', 'password': '123'})

    assert response.status_code == 200
    assert b'Enter a valid email address.' in response.data
    assert api.calls == []


def test_register_signs_in(client, api):
    api.add('POST', '/auth/register', auth_body(5, 'TEACHER'))

    response = client.post('/auth/register', data={
        'first_name': 'Tom',
        'last_name': 'Teacher',
        'email': 'tom@example.com',
        'password': 'secret1',
        'role': 'TEACHER',
    })

    assert response.status_code == 302
    assert api.calls[0].json == {
        'firstName': 'Tom',
        'lastName': 'Teacher',
        'email': 'tom@example.com',
        'password': 'secret1',
        'role': 'TEACHER',
    }
    with client.session_transaction() as session:
        assert json.loads(session[USER_KEY])['role'] == 'TEACHER'


def test_signed_in_users_skip_login(login_as):
    response = login_as(Role.STUDENT).get('/auth/login')
    assert response.status_code == 302


def test_logout_clears_session(login_as):
    client = login_as(Role.STUDENT)

    response = client.post('/auth/logout')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/auth/login')
    with client.session_transaction() as session:
        assert TOKEN_KEY not in session and USER_KEY not in session

    # protected pages now bounce to login
    assert client.get('/my-attempts').status_code == 302


def test_rejected_credential_forces_login(login_as, api):
    api.add('GET', '/courses', {'message': 'expired'}, status=401)
    client = login_as(Role.STUDENT)

    response = client.get('/courses')

    assert response.status_code == 302
    assert '/auth/login' in response.headers['Location']
    with client.session_transaction() as session:
        assert TOKEN_KEY not in session


def test_corrupt_cookie_is_treated_as_signed_out(client):
    with client.session_transaction() as session:
        session[TOKEN_KEY] = 'jwt'
        session[USER_KEY] = '{broken'

    response = client.get('/courses')

    assert response.status_code == 302
    assert '/auth/login' in response.headers['Location']
    with client.session_transaction() as session:
        assert USER_KEY not in session


def test_profile_refreshes_identity(login_as, api):
    api.add('GET', '/users/me', user_payload(1, 'STUDENT', first_name='Ada', last_name='King'))

    response = login_as(Role.STUDENT).get('/auth/profile')

    assert response.status_code == 200
    assert b'Ada King' in response.data
    assert api.calls[0].headers['Authorization'] == 'Bearer token-1'


def test_profile_role_change_requires_new_login(login_as, api):
    api.add('GET', '/users/me', user_payload(1, 'TEACHER'))
    client = login_as(Role.STUDENT)

    response = client.get('/auth/profile')

    assert response.status_code == 302
    with client.session_transaction() as session:
        assert TOKEN_KEY not in session


def test_home_for_teacher(login_as, api):
    api.add('GET', '/courses', [course_payload(10, teacher_id=2)])

    response = login_as(Role.TEACHER, user_id=2, first_name='Tom').get('/')

    assert response.status_code == 200
    assert b'Welcome, Tom!' in response.data
    assert b'New course' in response.data
    assert api.called('GET', '/quizzes/course/10') == []


def test_switching_accounts_on_one_client(login_as):
    client = login_as(Role.STUDENT)
    assert client.get('/unauthorized').status_code == 403

    response = login_as(Role.TEACHER, user_id=2).get('/api/access/me')

    assert response.status_code == 200
    assert response.json['role'] == 'TEACHER'
    assert response.json['userId'] == 2
    assert response.json['capabilities']['canCreateCourse'] is True


def test_sign_out_is_seen_by_the_next_request(login_as):
    client = login_as(Role.TEACHER, user_id=2)
    assert client.get('/api/access/me').status_code == 200

    client.post('/auth/logout')
    response = client.get('/api/access/me')

    assert response.status_code == 401


def test_navbar_shows_signed_in_user(login_as):
    response = login_as(Role.TEACHER, user_id=2, first_name='Grace', last_name='Hopper').get('/unauthorized')

    assert b'Signed in as Grace Hopper (Teacher).' in response.data
    assert b'Sign out' in response.data


def test_navbar_for_anonymous_visitor(client):
    response = client.get('/auth/login')

    assert b'Register' in response.data
    assert b'Sign out' not in response.data
