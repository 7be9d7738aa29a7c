from unittest.mock import patch

from django.core.exceptions import ValidationError as DjangoValidationError
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from account.models import User
from content.models import Course, Lecture
from core.exceptions import AlreadyAttempted, NotFound, ValidationError
from quizzes.models import LectureQuiz, QuizAttempt, QuizQuestion, calculate_percentage
from quizzes.serializers import QuizSubmitSerializer
from quizzes.services import MAX_TIME_TAKEN_SECONDS, QuizService, grade_answers


class QuizTestBase(TestCase):
    """
    Общие фикстуры: студент, курс, лекция с тестом из 2 вопросов.
    """

    def setUp(self):
        self.student = User.objects.create_user(
            email='student@test.com',
            password='testpass123',
            user_name='Test Student',
        )
        self.other = User.objects.create_user(
            email='other@test.com',
            password='testpass123',
            user_name='Other Student',
        )
        self.course = Course.objects.create(title='Python Basics', status='published')
        self.lecture = Lecture.objects.create(course=self.course, title='Lecture 1', order=0)
        self.quiz = LectureQuiz.objects.create(lecture=self.lecture)
        self.q1 = QuizQuestion.objects.create(
            quiz=self.quiz,
            question_text='2 + 2 = ?',
            options=['3', '4', '5'],
            correct_option='4',
            order=0,
        )
        self.q2 = QuizQuestion.objects.create(
            quiz=self.quiz,
            question_text='Столица Франции?',
            options=['Париж', 'Лион'],
            correct_option='Париж',
            order=1,
        )


# ─── grade_answers() ──────────────────────────────────────────────

class GradeAnswersTest(QuizTestBase):

    def test_one_right_one_blank(self):
        """Q1 верно, Q2 пусто → 1 правильный."""
        breakdown, correct = grade_answers(
            [self.q1, self.q2],
            [
                {'question_id': self.q1.id, 'selected_answer': '4'},
                {'question_id': self.q2.id, 'selected_answer': ''},
            ]
        )
        self.assertEqual(correct, 1)
        self.assertTrue(breakdown[0]['is_correct'])
        self.assertFalse(breakdown[1]['is_correct'])
        self.assertEqual(breakdown[1]['selected_answer'], '')

    def test_missing_answer_is_incorrect(self):
        """Вопрос без ответа считается неправильным, а не ошибкой."""
        breakdown, correct = grade_answers([self.q1, self.q2], [])
        self.assertEqual(correct, 0)
        self.assertEqual(len(breakdown), 2)
        self.assertEqual(breakdown[0]['correct_answer'], '4')

    def test_match_by_text_fallback(self):
        """Без question_id ответ ищется по тексту вопроса."""
        _, correct = grade_answers(
            [self.q1, self.q2],
            [{'question': 'Столица Франции?', 'selected_answer': 'Париж'}]
        )
        self.assertEqual(correct, 1)

    def test_first_text_match_wins(self):
        """При повторе текста берется первый ответ."""
        _, correct = grade_answers(
            [self.q1],
            [
                {'question': '2 + 2 = ?', 'selected_answer': '4'},
                {'question': '2 + 2 = ?', 'selected_answer': '5'},
            ]
        )
        self.assertEqual(correct, 1)

    def test_breakdown_follows_question_order(self):
        breakdown, _ = grade_answers(
            [self.q1, self.q2],
            [
                {'question_id': self.q2.id, 'selected_answer': 'Париж'},
                {'question_id': self.q1.id, 'selected_answer': '4'},
            ]
        )
        self.assertEqual([row['question_id'] for row in breakdown], [self.q1.id, self.q2.id])


class CalculatePercentageTest(TestCase):

    def test_half(self):
        self.assertEqual(calculate_percentage(1, 2), 50.0)

    def test_rounding(self):
        self.assertEqual(calculate_percentage(1, 3), 33.33)

    def test_zero_total(self):
        self.assertEqual(calculate_percentage(0, 0), 0.0)


# ─── QuizQuestion.clean() ─────────────────────────────────────────

class QuizQuestionCleanTest(QuizTestBase):

    def test_valid_question(self):
        self.q1.full_clean()

    def test_correct_option_not_in_options(self):
        self.q1.correct_option = '42'
        with self.assertRaises(DjangoValidationError):
            self.q1.full_clean()

    def test_single_option_rejected(self):
        self.q1.options = ['4']
        with self.assertRaises(DjangoValidationError):
            self.q1.full_clean()


# ─── QuizService.submit() ─────────────────────────────────────────

class QuizSubmitTest(QuizTestBase):

    def _answers(self):
        return [
            {'question_id': self.q1.id, 'selected_answer': '4'},
            {'question_id': self.q2.id, 'selected_answer': ''},
        ]

    def test_score_half(self):
        """2 вопроса, Q1 верно, Q2 пусто → 1/2, 50.0%."""
        result = QuizService.submit(self.student, self.lecture.id, self._answers(), time_taken=120)

        self.assertEqual(result['score'], 1)
        self.assertEqual(result['total_questions'], 2)
        self.assertEqual(result['correct_answers'], 1)
        self.assertEqual(result['percentage'], 50.0)
        self.assertEqual(result['student_name'], 'Test Student')

        attempt = QuizAttempt.objects.get(pk=result['response_id'])
        self.assertEqual(attempt.time_taken_seconds, 120)
        self.assertEqual(attempt.course, self.course)
        self.assertEqual(len(attempt.answers), 2)

    def test_second_submit_already_attempted(self):
        """Повторная отправка → AlreadyAttempted, новая запись не создается."""
        first = QuizService.submit(self.student, self.lecture.id, self._answers())

        with self.assertRaises(AlreadyAttempted) as ctx:
            QuizService.submit(
                self.student,
                self.lecture.id,
                [{'question_id': self.q1.id, 'selected_answer': '4'},
                 {'question_id': self.q2.id, 'selected_answer': 'Париж'}]
            )

        self.assertEqual(ctx.exception.attempt_id, first['response_id'])
        self.assertEqual(QuizAttempt.objects.filter(student=self.student).count(), 1)
        self.assertEqual(QuizAttempt.objects.get(pk=first['response_id']).score, 1)

    def test_race_loser_gets_winner_id(self):
        """Параллельная вставка: проигравший получает id сохраненной попытки."""
        winner = QuizService.submit(self.student, self.lecture.id, self._answers())

        with patch.object(QuizService, '_find_attempt', return_value=None):
            with self.assertRaises(AlreadyAttempted) as ctx:
                QuizService.submit(self.student, self.lecture.id, self._answers())

        self.assertEqual(ctx.exception.attempt_id, winner['response_id'])
        self.assertEqual(QuizAttempt.objects.filter(student=self.student).count(), 1)

    def test_attempts_are_per_student(self):
        QuizService.submit(self.student, self.lecture.id, self._answers())
        QuizService.submit(self.other, self.lecture.id, self._answers())
        self.assertEqual(QuizAttempt.objects.filter(lecture=self.lecture).count(), 2)

    def test_negative_time_clamped(self):
        result = QuizService.submit(self.student, self.lecture.id, self._answers(), time_taken=-30)
        self.assertEqual(QuizAttempt.objects.get(pk=result['response_id']).time_taken_seconds, 0)

    def test_huge_time_clamped(self):
        """Огромное время сохраняется как верхняя граница, без ошибки БД."""
        result = QuizService.submit(self.student, self.lecture.id, self._answers(), time_taken=1e20)
        attempt = QuizAttempt.objects.get(pk=result['response_id'])
        self.assertEqual(attempt.time_taken_seconds, MAX_TIME_TAKEN_SECONDS)

    def test_infinite_time_rejected(self):
        with self.assertRaises(ValidationError):
            QuizService.submit(self.student, self.lecture.id, self._answers(), time_taken=float('inf'))
        self.assertFalse(QuizAttempt.objects.exists())

    def test_attempt_outlives_deleted_quiz(self):
        """После удаления теста сохраненная попытка по-прежнему отсекает повторную отправку."""
        first = QuizService.submit(self.student, self.lecture.id, self._answers())
        self.quiz.delete()

        with self.assertRaises(AlreadyAttempted) as ctx:
            QuizService.submit(self.student, self.lecture.id, self._answers())
        self.assertEqual(ctx.exception.attempt_id, first['response_id'])
        self.assertTrue(QuizService.get_status(self.student, self.lecture.id)['attempted'])

    def test_unknown_lecture(self):
        with self.assertRaises(NotFound):
            QuizService.submit(self.student, 999999, self._answers())

    def test_lecture_without_quiz(self):
        lecture = Lecture.objects.create(course=self.course, title='No quiz', order=1)
        with self.assertRaises(NotFound):
            QuizService.submit(self.student, lecture.id, [])
        self.assertFalse(QuizAttempt.objects.exists())


# ─── QuizService.get_status() / get_result() ─────────────────────

class QuizStatusTest(QuizTestBase):

    def test_not_attempted_hides_correct_option(self):
        """До прохождения: вопросы без правильных ответов."""
        status = QuizService.get_status(self.student, self.lecture.id)

        self.assertFalse(status['attempted'])
        self.assertEqual(len(status['questions']), 2)
        for question in status['questions']:
            self.assertEqual(set(question.keys()), {'id', 'question', 'options'})
        self.assertEqual(status['questions'][0]['options'], ['3', '4', '5'])

    @override_settings(QUIZ_DEFAULT_TIME_LIMIT=900)
    def test_default_time_limit(self):
        status = QuizService.get_status(self.student, self.lecture.id)
        self.assertEqual(status['time_limit'], 900)

    def test_custom_time_limit(self):
        self.quiz.time_limit_seconds = 300
        self.quiz.save()
        status = QuizService.get_status(self.student, self.lecture.id)
        self.assertEqual(status['time_limit'], 300)

    def test_attempted_summary(self):
        QuizService.submit(self.student, self.lecture.id, [{'question_id': self.q1.id, 'selected_answer': '4'}])
        status = QuizService.get_status(self.student, self.lecture.id)

        self.assertTrue(status['attempted'])
        self.assertEqual(status['result']['score'], 1)
        self.assertEqual(status['result']['percentage'], 50.0)
        self.assertNotIn('questions', status)

    def test_status_unknown_lecture(self):
        with self.assertRaises(NotFound):
            QuizService.get_status(self.student, 999999)

    def test_result_not_found(self):
        with self.assertRaises(NotFound):
            QuizService.get_result(self.student, self.lecture.id)

    def test_result_breakdown(self):
        submitted = QuizService.submit(
            self.student, self.lecture.id,
            [{'question_id': self.q2.id, 'selected_answer': 'Париж'}],
            time_taken=45.7
        )
        result = QuizService.get_result(self.student, self.lecture.id)

        self.assertEqual(result['response_id'], submitted['response_id'])
        self.assertEqual(result['time_taken'], 45)
        self.assertEqual(result['answers'][1]['selected_answer'], 'Париж')
        self.assertTrue(result['answers'][1]['is_correct'])


# ─── API ──────────────────────────────────────────────────────────

class QuizApiTest(QuizTestBase):

    def setUp(self):
        super().setUp()
        self.client = APIClient()
        self.client.force_authenticate(user=self.student)

    def test_requires_auth(self):
        client = APIClient()
        response = client.get(f'/api/student/quiz/{self.lecture.id}/status/')
        self.assertEqual(response.status_code, 401)

    def test_submit_then_duplicate(self):
        payload = {
            'answers': [
                {'question_id': self.q1.id, 'selected_answer': '4'},
                {'question_id': self.q2.id, 'selected_answer': ''},
            ],
            'time_taken': 60,
        }
        response = self.client.post(f'/api/student/quiz/{self.lecture.id}/', payload, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['percentage'], 50.0)

        response = self.client.post(f'/api/student/quiz/{self.lecture.id}/', payload, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'already_attempted')
        self.assertEqual(response.data['attempt_id'], QuizAttempt.objects.get().id)

    def test_submit_huge_time_taken(self):
        payload = {
            'answers': [{'question_id': self.q1.id, 'selected_answer': '4'}],
            'time_taken': 1e20,
        }
        response = self.client.post(f'/api/student/quiz/{self.lecture.id}/', payload, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(QuizAttempt.objects.get().time_taken_seconds, MAX_TIME_TAKEN_SECONDS)

    def test_serializer_rejects_non_finite_time(self):
        for value in (float('inf'), float('nan')):
            serializer = QuizSubmitSerializer(data={'answers': [], 'time_taken': value})
            self.assertFalse(serializer.is_valid())
            self.assertIn('time_taken', serializer.errors)

    def test_submit_answer_without_question_reference(self):
        payload = {'answers': [{'selected_answer': '4'}]}
        response = self.client.post(f'/api/student/quiz/{self.lecture.id}/', payload, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertFalse(QuizAttempt.objects.exists())

    def test_status_endpoint(self):
        response = self.client.get(f'/api/student/quiz/{self.lecture.id}/status/')
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.data['attempted'])
        self.assertNotIn('correct_option', str(response.data))

    def test_result_endpoint_not_found(self):
        response = self.client.get(f'/api/student/quiz/{self.lecture.id}/result/')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['code'], 'not_found')

    def test_my_attempts(self):
        QuizService.submit(self.student, self.lecture.id, [])
        response = self.client.get('/api/student/quiz/attempts/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['lecture_title'], 'Lecture 1')
