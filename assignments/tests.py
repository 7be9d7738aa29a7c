from datetime import datetime, timedelta, timezone as dt_timezone
from unittest.mock import patch

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from account.models import User
from content.models import Course, Lecture
from core.exceptions import Blocked, Forbidden, Mismatch, NotFound, PastDue, ResubmissionDisabled, ValidationError
from assignments.models import AssignmentSubmission, LectureAssignment
from assignments.services import AssignmentService, evaluate_submission_window

FILES = [{'file_url': 'https://cdn.example.com/hw1.pdf', 'file_name': 'hw1.pdf'}]
NEW_FILES = [{'file_url': 'https://cdn.example.com/hw2.pdf', 'file_name': 'hw2.pdf'}]


class AssignmentTestBase(TestCase):
    """
    Общие фикстуры: студент, преподаватель, курс, лекция с заданием без срока.
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
        self.instructor = User.objects.create_user(
            email='instructor@test.com',
            password='testpass123',
            user_name='Instructor',
            role='instructor',
        )
        self.course = Course.objects.create(title='Python Basics', status='published')
        self.other_course = Course.objects.create(title='Django Advanced', status='published')
        self.lecture = Lecture.objects.create(course=self.course, title='Lecture 1', order=0)
        self.assignment = LectureAssignment.objects.create(
            lecture=self.lecture,
            title='Homework 1',
            file_url='https://cdn.example.com/task1.pdf',
        )

    def set_due(self, due_date, allow_resubmission=True):
        self.assignment.due_date = due_date
        self.assignment.allow_resubmission = allow_resubmission
        self.assignment.save()

    def submit(self, files=FILES, **kwargs):
        return AssignmentService.submit(self.student, self.lecture.id, files, **kwargs)


# ─── evaluate_submission_window() ─────────────────────────────────

class SubmissionWindowTest(AssignmentTestBase):
    """Таблица окна сдачи: наличие работы × срок × разрешение пересдачи."""

    def setUp(self):
        super().setUp()
        self.now = timezone.now()
        self.existing = AssignmentSubmission(
            student=self.student, lecture=self.lecture, course=self.course, files=FILES,
        )

    def test_first_before_due(self):
        self.set_due(self.now + timedelta(days=1))
        self.assertEqual(evaluate_submission_window(self.assignment, None, self.now), ('submitted', False))

    def test_first_without_due(self):
        self.assertEqual(evaluate_submission_window(self.assignment, None, self.now), ('submitted', False))

    def test_first_after_due(self):
        self.set_due(self.now - timedelta(days=1))
        self.assertEqual(evaluate_submission_window(self.assignment, None, self.now), ('late', True))

    def test_resubmit_before_due_allowed(self):
        self.set_due(self.now + timedelta(days=1), allow_resubmission=True)
        self.assertEqual(
            evaluate_submission_window(self.assignment, self.existing, self.now),
            ('resubmitted', False)
        )

    def test_resubmit_before_due_disabled(self):
        self.set_due(self.now + timedelta(days=1), allow_resubmission=False)
        with self.assertRaises(ResubmissionDisabled):
            evaluate_submission_window(self.assignment, self.existing, self.now)

    def test_resubmit_after_due(self):
        for allow in (True, False):
            self.set_due(self.now - timedelta(days=1), allow_resubmission=allow)
            with self.assertRaises(PastDue):
                evaluate_submission_window(self.assignment, self.existing, self.now)

    def test_graded_never_overwritten(self):
        self.existing.status = 'graded'
        with self.assertRaises(Blocked):
            evaluate_submission_window(self.assignment, self.existing, self.now)

    def test_score_counts_as_graded(self):
        self.existing.score = 80
        with self.assertRaises(Blocked):
            evaluate_submission_window(self.assignment, self.existing, self.now)

    def test_due_date_boundary_not_late(self):
        """Ровно в срок: не опоздание."""
        self.set_due(self.now)
        self.assertEqual(evaluate_submission_window(self.assignment, None, self.now), ('submitted', False))


# ─── AssignmentService.submit() ───────────────────────────────────

class AssignmentSubmitTest(AssignmentTestBase):

    def test_first_submission(self):
        result = self.submit(remarks='Готово')

        self.assertEqual(result['message'], 'Работа успешно сдана')
        self.assertEqual(result['submission']['status'], 'submitted')
        self.assertFalse(result['submission']['is_late'])
        self.assertEqual(result['assignment']['title'], 'Homework 1')
        self.assertEqual(result['course'], {'id': self.course.id, 'title': 'Python Basics'})
        self.assertEqual(result['lecture'], {'id': self.lecture.id, 'title': 'Lecture 1'})

        submission = AssignmentSubmission.objects.get(student=self.student, lecture=self.lecture)
        self.assertEqual(submission.files, FILES)
        self.assertEqual(submission.remarks, 'Готово')
        self.assertEqual(submission.course, self.course)

    def test_late_first_submission(self):
        """Срок 2024-01-01, первая сдача 2024-01-05 → late, is_late."""
        self.set_due(datetime(2024, 1, 1, tzinfo=dt_timezone.utc))
        submitted_at = datetime(2024, 1, 5, tzinfo=dt_timezone.utc)

        with patch('assignments.services.timezone.now', return_value=submitted_at):
            result = self.submit()

        self.assertEqual(result['message'], 'Работа сдана после срока')
        submission = AssignmentSubmission.objects.get()
        self.assertEqual(submission.status, 'late')
        self.assertTrue(submission.is_late)
        self.assertEqual(submission.submitted_at, submitted_at)

    def test_resubmission_replaces_files_and_keeps_remarks(self):
        self.set_due(timezone.now() + timedelta(days=7))
        first = self.submit(remarks='Первая версия')
        result = self.submit(files=NEW_FILES)

        self.assertEqual(result['message'], 'Работа пересдана')
        self.assertEqual(result['submission']['id'], first['submission']['id'])

        submission = AssignmentSubmission.objects.get()
        self.assertEqual(submission.status, 'resubmitted')
        self.assertEqual(submission.files, NEW_FILES)
        self.assertEqual(submission.remarks, 'Первая версия')

    def test_resubmission_disabled_keeps_previous(self):
        """allow_resubmission=false до срока → ResubmissionDisabled, работа не меняется."""
        self.set_due(timezone.now() + timedelta(days=7), allow_resubmission=False)
        self.submit(remarks='Оригинал')
        before = AssignmentSubmission.objects.get()

        with self.assertRaises(ResubmissionDisabled):
            self.submit(files=NEW_FILES, remarks='Новая')

        submission = AssignmentSubmission.objects.get()
        self.assertEqual(submission.files, FILES)
        self.assertEqual(submission.remarks, 'Оригинал')
        self.assertEqual(submission.status, 'submitted')
        self.assertEqual(submission.submitted_at, before.submitted_at)

    def test_resubmission_after_due(self):
        self.submit()
        self.set_due(timezone.now() - timedelta(days=1))

        with self.assertRaises(PastDue):
            self.submit(files=NEW_FILES)
        self.assertEqual(AssignmentSubmission.objects.get().files, FILES)

    def test_graded_submission_blocked(self):
        self.submit()
        AssignmentSubmission.objects.get().mark_graded(self.instructor, grade='A')

        with self.assertRaises(Blocked):
            self.submit(files=NEW_FILES)
        submission = AssignmentSubmission.objects.get()
        self.assertEqual(submission.status, 'graded')
        self.assertEqual(submission.files, FILES)

    def test_parallel_first_submission_goes_through_window(self):
        """Параллельная первая сдача проверяется как пересдача сохраненной работы."""
        self.set_due(timezone.now() + timedelta(days=7))
        first = self.submit()

        with patch.object(AssignmentService, '_find_existing', return_value=None):
            result = self.submit(files=NEW_FILES)

        self.assertEqual(result['message'], 'Работа пересдана')
        self.assertEqual(result['submission']['id'], first['submission']['id'])
        self.assertEqual(result['submission']['status'], 'resubmitted')
        self.assertEqual(AssignmentSubmission.objects.count(), 1)

    def test_parallel_first_submission_respects_disabled_resubmission(self):
        self.set_due(timezone.now() + timedelta(days=7), allow_resubmission=False)
        self.submit()

        with patch.object(AssignmentService, '_find_existing', return_value=None):
            with self.assertRaises(ResubmissionDisabled):
                self.submit(files=NEW_FILES)

        submission = AssignmentSubmission.objects.get()
        self.assertEqual(submission.files, FILES)
        self.assertEqual(submission.status, 'submitted')

    def test_course_mismatch(self):
        with self.assertRaises(Mismatch):
            self.submit(course_id=self.other_course.id)
        self.assertFalse(AssignmentSubmission.objects.exists())

    def test_matching_course_id(self):
        self.submit(course_id=self.course.id)
        self.assertTrue(AssignmentSubmission.objects.exists())

    def test_no_files(self):
        with self.assertRaises(ValidationError):
            self.submit(files=[])

    def test_lecture_without_assignment(self):
        lecture = Lecture.objects.create(course=self.course, title='No homework', order=1)
        with self.assertRaises(NotFound):
            AssignmentService.submit(self.student, lecture.id, FILES)

    def test_unknown_lecture(self):
        with self.assertRaises(NotFound):
            AssignmentService.submit(self.student, 999999, FILES)


# ─── AssignmentService.get_status() ──────────────────────────────

class AssignmentStatusTest(AssignmentTestBase):

    def test_not_submitted(self):
        status = AssignmentService.get_status(self.student, self.lecture.id)

        self.assertFalse(status['submitted'])
        self.assertIsNone(status['submission'])
        self.assertEqual(status['assignment']['file_url'], 'https://cdn.example.com/task1.pdf')
        self.assertTrue(status['assignment']['allow_resubmission'])
        self.assertEqual(status['course']['id'], self.course.id)

    def test_submitted(self):
        self.submit()
        status = AssignmentService.get_status(self.student, self.lecture.id)

        self.assertTrue(status['submitted'])
        self.assertEqual(status['submission']['files'], FILES)

    def test_other_student_submission_not_visible(self):
        AssignmentService.submit(self.other, self.lecture.id, FILES)
        status = AssignmentService.get_status(self.student, self.lecture.id)
        self.assertFalse(status['submitted'])

    def test_missing_assignment(self):
        lecture = Lecture.objects.create(course=self.course, title='No homework', order=1)
        with self.assertRaises(NotFound):
            AssignmentService.get_status(self.student, lecture.id)


# ─── AssignmentService.delete_submission() ───────────────────────

class AssignmentDeleteTest(AssignmentTestBase):

    def setUp(self):
        super().setUp()
        self.submission_id = self.submit()['submission']['id']

    def test_delete_own(self):
        AssignmentService.delete_submission(self.student, self.submission_id)
        self.assertFalse(AssignmentSubmission.objects.exists())

    def test_not_found(self):
        with self.assertRaises(NotFound):
            AssignmentService.delete_submission(self.student, 999999)

    def test_not_owner(self):
        with self.assertRaises(Forbidden):
            AssignmentService.delete_submission(self.other, self.submission_id)
        self.assertTrue(AssignmentSubmission.objects.exists())

    def test_graded_blocked(self):
        AssignmentSubmission.objects.filter(pk=self.submission_id).update(grade='B+')
        with self.assertRaises(Blocked):
            AssignmentService.delete_submission(self.student, self.submission_id)
        self.assertTrue(AssignmentSubmission.objects.exists())

    def test_past_due_blocked(self):
        self.set_due(timezone.now() - timedelta(hours=1))
        with self.assertRaises(Blocked):
            AssignmentService.delete_submission(self.student, self.submission_id)
        self.assertTrue(AssignmentSubmission.objects.exists())


# ─── AssignmentService.grade() ───────────────────────────────────

class AssignmentGradeTest(AssignmentTestBase):

    def setUp(self):
        super().setUp()
        self.submission_id = self.submit()['submission']['id']

    def test_instructor_grades(self):
        result = AssignmentService.grade(self.instructor, self.submission_id, score=90, feedback='Отлично')

        self.assertEqual(result['submission']['status'], 'graded')
        submission = AssignmentSubmission.objects.get()
        self.assertEqual(submission.score, 90)
        self.assertEqual(submission.graded_by, self.instructor)
        self.assertIsNotNone(submission.graded_at)

    def test_student_cannot_grade(self):
        with self.assertRaises(Forbidden):
            AssignmentService.grade(self.student, self.submission_id, grade='A')
        self.assertEqual(AssignmentSubmission.objects.get().status, 'submitted')

    def test_grade_or_score_required(self):
        with self.assertRaises(ValidationError):
            AssignmentService.grade(self.instructor, self.submission_id)


# ─── API ──────────────────────────────────────────────────────────

class AssignmentApiTest(AssignmentTestBase):

    def setUp(self):
        super().setUp()
        self.client = APIClient()
        self.client.force_authenticate(user=self.student)

    def test_requires_auth(self):
        response = APIClient().post('/api/student/assignments/submit/', {}, format='json')
        self.assertEqual(response.status_code, 401)

    def test_submit_files_array(self):
        response = self.client.post('/api/student/assignments/submit/', {
            'lecture_id': self.lecture.id,
            'course_id': self.course.id,
            'files': FILES + [{'file_name': 'без ссылки'}],
            'remarks': 'Готово',
        }, format='json')

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['submission']['files'], FILES)

    def test_submit_single_file_fields(self):
        response = self.client.post('/api/student/assignments/submit/', {
            'lecture_id': self.lecture.id,
            'file_url': 'https://cdn.example.com/single.zip',
            'file_name': 'single.zip',
        }, format='json')

        self.assertEqual(response.status_code, 201)
        self.assertEqual(
            AssignmentSubmission.objects.get().files,
            [{'file_url': 'https://cdn.example.com/single.zip', 'file_name': 'single.zip'}]
        )

    def test_submit_without_files(self):
        response = self.client.post('/api/student/assignments/submit/', {
            'lecture_id': self.lecture.id,
        }, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'validation_error')

    def test_submit_without_lecture(self):
        response = self.client.post('/api/student/assignments/submit/', {'files': FILES}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('lecture_id', response.data)

    def test_mismatch_code(self):
        response = self.client.post('/api/student/assignments/submit/', {
            'lecture_id': self.lecture.id,
            'course_id': self.other_course.id,
            'files': FILES,
        }, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['code'], 'mismatch')

    def test_status_and_delete(self):
        submission_id = self.submit()['submission']['id']

        response = self.client.get(f'/api/student/assignments/{self.lecture.id}/status/')
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data['submitted'])

        response = self.client.delete(f'/api/student/assignments/{submission_id}/')
        self.assertEqual(response.status_code, 200)
        self.assertFalse(AssignmentSubmission.objects.exists())

    def test_delete_foreign_submission(self):
        submission_id = AssignmentService.submit(self.other, self.lecture.id, FILES)['submission']['id']
        response = self.client.delete(f'/api/student/assignments/{submission_id}/')
        self.assertEqual(response.status_code, 403)

    def test_my_submissions(self):
        self.submit()
        response = self.client.get('/api/student/assignments/my-submissions/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 1)

    def test_grade_endpoint_forbidden_for_student(self):
        submission_id = self.submit()['submission']['id']
        response = self.client.post(
            f'/api/student/assignments/submissions/{submission_id}/grade/',
            {'grade': 'A'},
            format='json'
        )
        self.assertEqual(response.status_code, 403)
