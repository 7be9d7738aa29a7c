from django.test import TestCase
from rest_framework.test import APIClient

from account.models import User
from assignments.models import LectureAssignment
from content.models import Chapter, Course, Lecture
from quizzes.models import LectureQuiz, QuizQuestion


class ContentTestBase(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(
            email='student@test.com',
            password='testpass123',
            user_name='Test Student',
        )
        self.course = Course.objects.create(title='Published Course', status='published')
        self.draft = Course.objects.create(title='Draft Course', status='draft')
        self.chapter = Chapter.objects.create(course=self.course, title='Chapter 1', order=0)
        self.lecture = Lecture.objects.create(
            course=self.course, chapter=self.chapter, title='Lecture 1', order=0,
        )
        self.loose_lecture = Lecture.objects.create(course=self.course, title='Intro', order=0)

        quiz = LectureQuiz.objects.create(lecture=self.lecture, time_limit_seconds=600)
        QuizQuestion.objects.create(
            quiz=quiz, question_text='Q1', options=['a', 'b'], correct_option='b',
        )
        LectureAssignment.objects.create(lecture=self.lecture, title='HW')

        self.client = APIClient()


# ─── Каталог ──────────────────────────────────────────────────────

class CourseCatalogTest(ContentTestBase):

    def test_only_published_listed(self):
        response = self.client.get('/api/courses/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual([course['title'] for course in response.data], ['Published Course'])

    def test_draft_detail_hidden(self):
        response = self.client.get(f'/api/courses/{self.draft.id}/')
        self.assertEqual(response.status_code, 404)

    def test_course_structure(self):
        response = self.client.get(f'/api/courses/{self.course.id}/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['lectures_count'], 2)

        lecture = response.data['chapters'][0]['lectures'][0]
        self.assertTrue(lecture['has_quiz'])
        self.assertTrue(lecture['has_assignment'])
        self.assertEqual(response.data['direct_lectures'][0]['title'], 'Intro')


# ─── Лекция ───────────────────────────────────────────────────────

class LectureDetailTest(ContentTestBase):

    def test_requires_auth(self):
        response = self.client.get(f'/api/lectures/{self.lecture.id}/')
        self.assertEqual(response.status_code, 401)

    def test_quiz_meta_without_answers(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get(f'/api/lectures/{self.lecture.id}/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['quiz'], {'questions_count': 1, 'time_limit': 600})
        self.assertEqual(response.data['assignment']['title'], 'HW')

    def test_lecture_without_extras(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get(f'/api/lectures/{self.loose_lecture.id}/')

        self.assertIsNone(response.data['quiz'])
        self.assertIsNone(response.data['assignment'])
