"""JSON bodies shaped like the CourseHub API's responses."""


def user_payload(user_id=1, role='STUDENT', first_name='Ada', last_name='Lovelace', email=None):
    return {
        'id': user_id,
        'firstName': first_name,
        'lastName': last_name,
        'email': email or f'user{user_id}@example.com',
        'role': role,
        'createdAt': '2024-01-10T09:00:00',
        'updatedAt': '2024-01-10T09:00:00',
    }


def course_payload(course_id=10, title='Algebra Basics', teacher_id=2, description='Numbers and letters together.'):
    return {
        'id': course_id,
        'title': title,
        'description': description,
        'teacher': user_payload(teacher_id, 'TEACHER', 'Tom', 'Teacher'),
        'createdAt': '2024-02-01T10:00:00',
        'updatedAt': '2024-02-01T10:00:00',
        'enrollmentCount': 3,
    }


def quiz_payload(quiz_id=100, course_id=10, teacher_id=2, is_active=True, title='Chapter 1 quiz'):
    return {
        'id': quiz_id,
        'title': title,
        'description': 'Warm-up questions',
        'course': course_payload(course_id, teacher_id=teacher_id),
        'isActive': is_active,
        'maxAttempts': 3,
        'timeLimitMinutes': 15,
        'questions': [
            {
                'id': 1,
                'text': 'What is 2 + 2?',
                'type': 'SINGLE_CHOICE',
                'points': 2,
                'answerOptions': [
                    {'id': 11, 'text': '3', 'isCorrect': False},
                    {'id': 12, 'text': '4', 'isCorrect': True},
                ],
            },
            {
                'id': 2,
                'text': 'Pick the even numbers',
                'type': 'MULTIPLE_CHOICE',
                'points': 3,
                'answerOptions': [
                    {'id': 21, 'text': '2'},
                    {'id': 22, 'text': '5'},
                    {'id': 23, 'text': '8'},
                ],
            },
            {
                'id': 3,
                'text': 'Explain what a variable is',
                'type': 'TEXT',
                'points': 5,
                'answerOptions': [],
            },
        ],
    }


def attempt_payload(attempt_id=500, quiz_id=100, student_id=1, completed=False, score=None):
    return {
        'id': attempt_id,
        'quiz': quiz_payload(quiz_id),
        'student': user_payload(student_id),
        'startTime': '2024-03-01T12:00:00',
        'endTime': '2024-03-01T12:10:00' if completed else None,
        'score': score,
        'maxScore': 10,
        'isCompleted': completed,
        'studentAnswers': [],
    }
