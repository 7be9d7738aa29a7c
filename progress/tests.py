from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from account.models import User
from content.models import Course, Lecture
from core.exceptions import AlreadyEnrolled, Mismatch, NotFound
from progress.models import CourseEnrollment, LectureProgress
from progress.services import EnrollmentService, ProgressService


class ProgressTestBase(TestCase):
    """
    Общие фикстуры. Создаёт user, course с 3 лекциями и второй курс.
    """

    def setUp(self):
        self.user = User.objects.create_user(
            email='student@test.com',
            password='testpass123',
            user_name='Test Student',
        )
        self.course = Course.objects.create(title='Test Course', status='published')
        self.other_course = Course.objects.create(title='Other Course', status='published')
        self.lecture1 = Lecture.objects.create(course=self.course, title='Lecture 1', order=0)
        self.lecture2 = Lecture.objects.create(course=self.course, title='Lecture 2', order=1)
        self.lecture3 = Lecture.objects.create(course=self.course, title='Lecture 3', order=2)


# ─── LectureProgress.update_progress() ───────────────────────────

@override_settings(PROGRESS_COMPLETION_RATIO=0.95)
class LectureProgressUpdateTest(ProgressTestBase):

    def setUp(self):
        super().setUp()
        self.progress = LectureProgress.objects.create(
            user=self.user, course=self.course, lecture=self.lecture1,
        )

    def test_partial_not_completed(self):
        """50% просмотра → не завершено."""
        self.progress.update_progress(300, 600)
        self.assertFalse(self.progress.completed)
        self.assertEqual(self.progress.get_percentage(), 50.0)

    def test_threshold_completes(self):
        """95% просмотра → завершено."""
        self.progress.update_progress(570, 600)
        self.assertTrue(self.progress.completed)

    def test_zero_duration_never_completed(self):
        self.progress.update_progress(100, 0)
        self.assertFalse(self.progress.completed)
        self.assertEqual(self.progress.get_percentage(), 0.0)

    def test_negative_values_clamped(self):
        self.progress.update_progress(-10, -5)
        self.progress.refresh_from_db()
        self.assertEqual(self.progress.watch_time, 0)
        self.assertEqual(self.progress.duration, 0)

    def test_rewind_recomputes(self):
        """Перемотка назад снимает отметку завершения."""
        self.progress.update_progress(600, 600)
        self.progress.update_progress(100, 600)
        self.assertFalse(self.progress.completed)


# ─── ProgressService ──────────────────────────────────────────────

class ProgressServiceTest(ProgressTestBase):

    def test_save_creates_and_updates(self):
        ProgressService.save_progress(self.user, self.lecture1.id, 100, 600)
        ProgressService.save_progress(self.user, self.lecture1.id, 600, 600, course_id=self.course.id)

        progress = LectureProgress.objects.get(user=self.user, lecture=self.lecture1)
        self.assertEqual(progress.watch_time, 600)
        self.assertTrue(progress.completed)
        self.assertEqual(progress.course, self.course)
        self.assertEqual(LectureProgress.objects.count(), 1)

    def test_course_mismatch(self):
        with self.assertRaises(Mismatch):
            ProgressService.save_progress(self.user, self.lecture1.id, 10, 600, course_id=self.other_course.id)
        self.assertFalse(LectureProgress.objects.exists())

    def test_unknown_lecture(self):
        with self.assertRaises(NotFound):
            ProgressService.save_progress(self.user, 999999, 10, 600)

    def test_course_progress(self):
        ProgressService.save_progress(self.user, self.lecture1.id, 600, 600)
        ProgressService.save_progress(self.user, self.lecture2.id, 60, 600)

        course, records = ProgressService.course_progress(self.user, self.course.id)
        self.assertEqual(course, self.course)
        self.assertEqual([record.lecture for record in records], [self.lecture1, self.lecture2])

    def test_course_progress_unknown_course(self):
        with self.assertRaises(NotFound):
            ProgressService.course_progress(self.user, 999999)


# ─── API ──────────────────────────────────────────────────────────

class ProgressApiTest(ProgressTestBase):

    def setUp(self):
        super().setUp()
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def test_requires_auth(self):
        response = APIClient().get(f'/api/student/progress/course/{self.course.id}/')
        self.assertEqual(response.status_code, 401)

    def test_save_endpoint(self):
        response = self.client.post('/api/student/progress/save/', {
            'lecture_id': self.lecture1.id,
            'course_id': self.course.id,
            'watch_time': 590,
            'duration': 600,
        }, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data['progress']['completed'])

    def test_save_validation(self):
        response = self.client.post('/api/student/progress/save/', {
            'lecture_id': self.lecture1.id,
        }, format='json')
        self.assertEqual(response.status_code, 400)

    def test_course_endpoint_counts(self):
        ProgressService.save_progress(self.user, self.lecture1.id, 600, 600)
        ProgressService.save_progress(self.user, self.lecture2.id, 10, 600)

        response = self.client.get(f'/api/student/progress/course/{self.course.id}/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['completed_lectures'], 1)
        self.assertEqual(response.data['total_lectures'], 3)
        self.assertEqual(len(response.data['progress']), 2)


# ─── EnrollmentService ────────────────────────────────────────────

class EnrollmentServiceTest(ProgressTestBase):

    def test_enroll(self):
        enrollment = EnrollmentService.enroll(self.user, self.course.id)
        self.assertEqual(enrollment.course, self.course)
        self.assertTrue(CourseEnrollment.objects.filter(user=self.user, course=self.course).exists())

    def test_duplicate_enroll(self):
        """Повторное зачисление → AlreadyEnrolled, вторая запись не создается."""
        EnrollmentService.enroll(self.user, self.course.id)
        with self.assertRaises(AlreadyEnrolled):
            EnrollmentService.enroll(self.user, self.course.id)
        self.assertEqual(CourseEnrollment.objects.count(), 1)

    def test_unknown_course(self):
        with self.assertRaises(NotFound):
            EnrollmentService.enroll(self.user, 999999)

    def test_draft_course(self):
        draft = Course.objects.create(title='Draft', status='draft')
        with self.assertRaises(NotFound):
            EnrollmentService.enroll(self.user, draft.id)

    def test_completed_lectures_count(self):
        enrollment = EnrollmentService.enroll(self.user, self.course.id)
        ProgressService.save_progress(self.user, self.lecture1.id, 600, 600)
        ProgressService.save_progress(self.user, self.lecture2.id, 10, 600)
        self.assertEqual(enrollment.get_completed_lectures_count(), 1)


class EnrollmentApiTest(ProgressTestBase):

    def setUp(self):
        super().setUp()
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def test_enroll_requires_auth(self):
        response = APIClient().post(f'/api/student/enroll/{self.course.id}/')
        self.assertEqual(response.status_code, 401)

    def test_enroll_then_duplicate(self):
        response = self.client.post(f'/api/student/enroll/{self.course.id}/')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['enrollment']['course']['id'], self.course.id)

        response = self.client.post(f'/api/student/enroll/{self.course.id}/')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'already_enrolled')

    def test_enroll_unknown_course(self):
        response = self.client.post('/api/student/enroll/999999/')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['code'], 'not_found')

    def test_my_courses(self):
        EnrollmentService.enroll(self.user, self.course.id)
        ProgressService.save_progress(self.user, self.lecture1.id, 600, 600)

        response = self.client.get('/api/student/my-courses/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['course']['title'], 'Test Course')
        self.assertEqual(response.data[0]['completed_lectures'], 1)
        self.assertEqual(response.data[0]['total_lectures'], 3)

    def test_my_courses_only_own(self):
        other = User.objects.create_user(email='other@test.com', password='testpass123', user_name='Other')
        EnrollmentService.enroll(other, self.course.id)

        response = self.client.get('/api/student/my-courses/')
        self.assertEqual(response.data, [])
