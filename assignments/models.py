from django.db import models
from django.conf import settings
from django.utils import timezone
from content.models import Course, Lecture


class LectureAssignment(models.Model):
    """Домашнее задание лекции (расширение Lecture)"""

    lecture = models.OneToOneField(
        Lecture,
        on_delete=models.CASCADE,
        related_name='assignment',
        verbose_name='Лекция'
    )

    title = models.CharField('Название задания', max_length=255, blank=True)
    description = models.TextField('Описание', blank=True)

    file_url = models.URLField(
        'Файл задания (URL)',
        max_length=500,
        blank=True,
        help_text='Ссылка на файл с условием в CDN'
    )

    due_date = models.DateTimeField(
        'Срок сдачи',
        null=True,
        blank=True,
        help_text='Пусто = без срока'
    )

    allow_resubmission = models.BooleanField(
        'Разрешить пересдачу',
        default=True,
        help_text='Студент может заменить работу до срока сдачи'
    )

    created_at = models.DateTimeField('Создано', auto_now_add=True)
    updated_at = models.DateTimeField('Обновлено', auto_now=True)

    class Meta:
        verbose_name = 'Домашнее задание'
        verbose_name_plural = 'Домашние задания'

    def __str__(self):
        return f"Задание: {self.get_title()}"

    def get_title(self):
        return self.title or 'Домашнее задание'

    def is_past_due(self, now=None):
        """Истек ли срок сдачи"""
        if self.due_date is None:
            return False
        return (now or timezone.now()) > self.due_date

    def to_meta(self):
        """Данные задания для ответа API"""
        return {
            'title': self.get_title(),
            'description': self.description,
            'file_url': self.file_url or None,
            'due_date': self.due_date,
            'allow_resubmission': self.allow_resubmission,
        }


class AssignmentSubmission(models.Model):
    """
    Сдача домашнего задания.

    Одна запись на пару (студент, лекция): пересдача перезаписывает
    файлы, комментарий и дату сдачи, история не хранится.
    """

    STATUS_CHOICES = [
        ('submitted', '📤 Сдано'),
        ('late', '⏰ Сдано с опозданием'),
        ('resubmitted', '🔄 Пересдано'),
        ('graded', '✅ Оценено'),
    ]

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='assignment_submissions',
        verbose_name='Студент'
    )

    lecture = models.ForeignKey(
        Lecture,
        on_delete=models.CASCADE,
        related_name='assignment_submissions',
        verbose_name='Лекция'
    )

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='assignment_submissions',
        verbose_name='Курс'
    )

    files = models.JSONField(
        'Файлы',
        default=list,
        help_text='[{"file_url": "...", "file_name": "..."}]'
    )

    remarks = models.TextField('Комментарий студента', blank=True)

    status = models.CharField(
        'Статус',
        max_length=20,
        choices=STATUS_CHOICES,
        default='submitted',
        db_index=True
    )

    is_late = models.BooleanField('Сдано после срока', default=False)

    grade = models.CharField('Оценка', max_length=20, blank=True, help_text='Например: "A", "B+", "Зачет"')
    score = models.PositiveIntegerField('Балл', null=True, blank=True)
    feedback = models.TextField('Обратная связь от преподавателя', blank=True)

    graded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='graded_submissions',
        verbose_name='Проверил'
    )

    submitted_at = models.DateTimeField('Дата сдачи', default=timezone.now, db_index=True)
    graded_at = models.DateTimeField('Дата проверки', null=True, blank=True)

    class Meta:
        verbose_name = 'Сдача задания'
        verbose_name_plural = 'Сдачи заданий'
        ordering = ['-submitted_at']
        unique_together = [['student', 'lecture']]
        indexes = [
            models.Index(fields=['status', '-submitted_at'], name='assignments_status_4e9a1c_idx'),
            models.Index(fields=['course', 'status'], name='assignments_course_7b2d0f_idx'),
        ]

    def __str__(self):
        return f"{self.student.email} - {self.lecture.title} ({self.get_status_display()})"

    def is_graded(self):
        """Оценена ли работа (оцененную нельзя удалить или перезаписать)"""
        return self.status == 'graded' or bool(self.grade) or self.score is not None

    def mark_graded(self, instructor, grade='', score=None, feedback=''):
        """Выставить оценку"""
        self.status = 'graded'
        self.grade = grade or ''
        self.score = score
        self.feedback = feedback or ''
        self.graded_by = instructor
        self.graded_at = timezone.now()
        self.save()
