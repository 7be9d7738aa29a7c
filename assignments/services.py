"""
Сдача домашних заданий.

Окно сдачи определяется сроком (due_date) и флагом allow_resubmission
задания. На пару (студент, лекция) хранится одна запись: пересдача
заменяет файлы и дату, история не ведется. Оцененная работа не
перезаписывается и не удаляется.
"""

import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from core.exceptions import Blocked, Forbidden, Mismatch, NotFound, PastDue, ResubmissionDisabled, ValidationError
from content.models import Lecture
from .models import AssignmentSubmission, LectureAssignment
from .serializers import AssignmentSubmissionSerializer

logger = logging.getLogger(__name__)


def evaluate_submission_window(assignment, existing, now=None):
    """
    Можно ли сдать работу сейчас.

    Returns:
        tuple: (status, is_late) для сохраняемой записи

    Raises:
        Blocked: работа уже оценена
        PastDue: пересдача после срока
        ResubmissionDisabled: пересдача запрещена заданием
    """
    past_due = assignment.is_past_due(now)

    if existing is None:
        if past_due:
            return 'late', True
        return 'submitted', False

    if existing.is_graded():
        raise Blocked('Работа уже оценена. Пересдача невозможна')

    if past_due:
        raise PastDue()

    if not assignment.allow_resubmission:
        raise ResubmissionDisabled()

    return 'resubmitted', False


class AssignmentService:
    """Сервис сдачи домашних заданий"""

    @classmethod
    def _load_assignment(cls, lecture_id):
        try:
            lecture = Lecture.objects.select_related('course').get(pk=lecture_id)
        except Lecture.DoesNotExist:
            raise NotFound('Лекция не найдена')

        try:
            assignment = lecture.assignment
        except LectureAssignment.DoesNotExist:
            raise NotFound('Для этой лекции нет домашнего задания')

        return lecture, assignment

    @classmethod
    def _find_existing(cls, student, lecture):
        return AssignmentSubmission.objects.select_for_update().filter(
            student=student,
            lecture=lecture
        ).first()

    @classmethod
    def _evaluate_window(cls, student, lecture, assignment, existing, now):
        try:
            return evaluate_submission_window(assignment, existing, now)
        except (Blocked, PastDue, ResubmissionDisabled) as e:
            logger.warning(f"Сдача отклонена: {student.email}, лекция {lecture.id}: {e.detail}")
            raise

    @staticmethod
    def _context(lecture, assignment):
        return {
            'assignment': assignment.to_meta(),
            'course': {'id': lecture.course.id, 'title': lecture.course.title},
            'lecture': {'id': lecture.id, 'title': lecture.title},
        }

    @classmethod
    def submit(cls, student, lecture_id, files, course_id=None, remarks=None):
        """
        Сдать или пересдать работу.

        Args:
            student: пользователь из request.user
            lecture_id: id лекции с заданием
            files: [{"file_url": ..., "file_name": ...}]
            course_id: id курса от клиента (сверяется с курсом лекции)
            remarks: комментарий; если не передан, сохраняется прежний

        Raises:
            ValidationError, NotFound, Mismatch,
            Blocked, PastDue, ResubmissionDisabled
        """
        if not files:
            raise ValidationError('Прикрепите хотя бы один файл')

        lecture, assignment = cls._load_assignment(lecture_id)

        if course_id is not None and course_id != lecture.course_id:
            raise Mismatch()

        now = timezone.now()

        with transaction.atomic():
            submission = cls._find_existing(student, lecture)
            created = submission is None

            if created:
                submission_status, is_late = evaluate_submission_window(assignment, None, now)
                try:
                    # Параллельную первую сдачу отсекает уникальный индекс (student, lecture)
                    with transaction.atomic():
                        submission = AssignmentSubmission.objects.create(
                            student=student,
                            lecture=lecture,
                            course=lecture.course,
                            files=files,
                            remarks=remarks or '',
                            status=submission_status,
                            is_late=is_late,
                            submitted_at=now,
                        )
                except IntegrityError:
                    logger.warning(f"Параллельная сдача задания: {student.email}, лекция {lecture.id}")
                    submission = AssignmentSubmission.objects.select_for_update().get(
                        student=student,
                        lecture=lecture
                    )
                    created = False

            if not created:
                submission_status, is_late = cls._evaluate_window(student, lecture, assignment, submission, now)

                submission.course = lecture.course
                submission.files = files
                submission.remarks = remarks or submission.remarks
                submission.status = submission_status
                submission.is_late = is_late
                submission.submitted_at = now
                submission.save()

        if not created:
            message = 'Работа пересдана'
        elif is_late:
            message = 'Работа сдана после срока'
        else:
            message = 'Работа успешно сдана'

        logger.info(
            f"Задание {'сдано' if created else 'пересдано'}: {student.email}, "
            f"лекция {lecture.id}, статус {submission_status}"
        )

        return {
            'message': message,
            'submission': AssignmentSubmissionSerializer(submission).data,
            **cls._context(lecture, assignment),
        }

    @classmethod
    def get_status(cls, student, lecture_id):
        """Сдана ли работа и данные задания"""
        lecture, assignment = cls._load_assignment(lecture_id)

        submission = AssignmentSubmission.objects.filter(
            student=student,
            lecture=lecture
        ).first()

        return {
            'submitted': submission is not None,
            'submission': AssignmentSubmissionSerializer(submission).data if submission else None,
            **cls._context(lecture, assignment),
        }

    @classmethod
    def delete_submission(cls, student, submission_id):
        """
        Удалить свою работу.

        Raises:
            NotFound: работы нет
            Forbidden: работа другого студента
            Blocked: работа оценена или срок сдачи прошел
        """
        try:
            submission = AssignmentSubmission.objects.select_related('lecture').get(pk=submission_id)
        except AssignmentSubmission.DoesNotExist:
            raise NotFound('Работа не найдена')

        if submission.student_id != student.id:
            logger.warning(f"Попытка удалить чужую работу: {student.email}, работа {submission_id}")
            raise Forbidden('Можно удалить только свою работу')

        if submission.is_graded():
            raise Blocked('Нельзя удалить оцененную работу')

        assignment = submission.lecture.get_assignment()
        if assignment is not None and assignment.is_past_due():
            raise Blocked('Срок сдачи истек. Удаление невозможно')

        submission.delete()
        logger.info(f"Работа удалена: {student.email}, работа {submission_id}")

        return {'message': 'Работа удалена'}

    @classmethod
    def list_submissions(cls, student):
        submissions = AssignmentSubmission.objects.filter(
            student=student
        ).select_related('lecture').order_by('-submitted_at')

        return AssignmentSubmissionSerializer(submissions, many=True).data

    @classmethod
    def grade(cls, instructor, submission_id, grade='', score=None, feedback=''):
        """
        Оценить работу (преподаватель или администратор).

        Raises:
            Forbidden: нет прав на проверку
            NotFound: работы нет
            ValidationError: не указаны ни оценка, ни балл
        """
        if not instructor.can_grade():
            raise Forbidden('Оценивать работы может только преподаватель')

        try:
            submission = AssignmentSubmission.objects.get(pk=submission_id)
        except AssignmentSubmission.DoesNotExist:
            raise NotFound('Работа не найдена')

        if not grade and score is None:
            raise ValidationError('Укажите оценку или балл')

        submission.mark_graded(instructor, grade=grade, score=score, feedback=feedback)
        logger.info(f"Работа {submission.id} оценена: {instructor.email}, оценка {grade or score}")

        return {
            'message': 'Работа оценена',
            'submission': AssignmentSubmissionSerializer(submission).data,
        }
