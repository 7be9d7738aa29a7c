from django.conf import settings
from django.db import models
from content.models import Course, Lecture


class LectureProgress(models.Model):
    """Прогресс просмотра видео лекции"""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='lecture_progress',
        verbose_name='Пользователь'
    )

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='lecture_progress',
        verbose_name='Курс'
    )

    lecture = models.ForeignKey(
        Lecture,
        on_delete=models.CASCADE,
        related_name='progress_records',
        verbose_name='Лекция'
    )

    watch_time = models.FloatField('Просмотрено (секунды)', default=0)
    duration = models.FloatField('Длительность видео (секунды)', default=0)
    completed = models.BooleanField('Завершено', default=False, db_index=True)

    last_updated = models.DateTimeField('Последний просмотр', auto_now=True)

    class Meta:
        verbose_name = 'Прогресс лекции'
        verbose_name_plural = 'Прогресс лекций'
        ordering = ['lecture__order', 'id']
        unique_together = [['user', 'lecture']]
        indexes = [
            models.Index(fields=['user', 'course'], name='progress_le_user_id_3c5e2a_idx'),
        ]

    def __str__(self):
        return f"{self.user.get_full_name()} - {self.lecture.title} ({self.get_percentage()}%)"

    def get_percentage(self):
        if self.duration <= 0:
            return 0.0
        return round(min(self.watch_time / self.duration, 1) * 100, 2)

    def update_progress(self, watch_time, duration):
        """
        Сохранить позицию просмотра и пересчитать завершение.

        Лекция завершена, когда просмотрено не меньше
        PROGRESS_COMPLETION_RATIO от длительности.
        """
        self.watch_time = max(0.0, float(watch_time))
        self.duration = max(0.0, float(duration))
        self.completed = (
            self.duration > 0
            and self.watch_time >= self.duration * settings.PROGRESS_COMPLETION_RATIO
        )
        self.save()


class CourseEnrollment(models.Model):
    """Зачисление студента на курс"""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='enrollments',
        verbose_name='Студент'
    )

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='enrollments',
        verbose_name='Курс'
    )

    enrolled_at = models.DateTimeField('Дата зачисления', auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = 'Зачисление на курс'
        verbose_name_plural = 'Зачисления на курсы'
        ordering = ['-enrolled_at']
        unique_together = [['user', 'course']]

    def __str__(self):
        return f"{self.user.get_full_name()} → {self.course.title}"

    def get_completed_lectures_count(self):
        return LectureProgress.objects.filter(
            user=self.user,
            course=self.course,
            completed=True
        ).count()
