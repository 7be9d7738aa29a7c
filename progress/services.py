import logging

from django.db import IntegrityError, transaction

from core.exceptions import AlreadyEnrolled, Mismatch, NotFound
from content.models import Course, Lecture
from .models import CourseEnrollment, LectureProgress

logger = logging.getLogger(__name__)


class ProgressService:
    """Прогресс просмотра лекций"""

    @classmethod
    def save_progress(cls, user, lecture_id, watch_time, duration, course_id=None):
        """
        Сохранить прогресс просмотра лекции.

        Raises:
            NotFound: лекции нет
            Mismatch: course_id не совпадает с курсом лекции
        """
        try:
            lecture = Lecture.objects.select_related('course').get(pk=lecture_id)
        except Lecture.DoesNotExist:
            raise NotFound('Лекция не найдена')

        if course_id is not None and course_id != lecture.course_id:
            raise Mismatch()

        with transaction.atomic():
            progress, created = LectureProgress.objects.select_for_update().get_or_create(
                user=user,
                lecture=lecture,
                defaults={'course': lecture.course}
            )
            was_completed = progress.completed
            progress.update_progress(watch_time, duration)

        if progress.completed and not was_completed:
            logger.info(f"Лекция завершена: {user.email}, лекция {lecture.id}")

        return progress

    @classmethod
    def course_progress(cls, user, course_id):
        """Прогресс пользователя по лекциям курса"""
        try:
            course = Course.objects.get(pk=course_id)
        except Course.DoesNotExist:
            raise NotFound('Курс не найден')

        records = LectureProgress.objects.filter(
            user=user,
            course=course
        ).select_related('lecture')

        return course, list(records)


class EnrollmentService:
    """Зачисление на курсы"""

    @classmethod
    def enroll(cls, user, course_id):
        """
        Зачислить студента на опубликованный курс.

        Raises:
            NotFound: курса нет или он не опубликован
            AlreadyEnrolled: студент уже зачислен
        """
        try:
            course = Course.objects.get(pk=course_id, status='published')
        except Course.DoesNotExist:
            raise NotFound('Курс не найден')

        try:
            with transaction.atomic():
                enrollment = CourseEnrollment.objects.create(user=user, course=course)
        except IntegrityError:
            logger.warning(f"Повторное зачисление: {user.email}, курс {course.id}")
            raise AlreadyEnrolled()

        logger.info(f"Зачислен на курс: {user.email}, курс {course.id}")
        return enrollment

    @classmethod
    def my_courses(cls, user):
        return CourseEnrollment.objects.filter(
            user=user
        ).select_related('course', 'course__instructor').order_by('-enrolled_at')
