from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator


class Course(models.Model):
    """Курс"""

    STATUS_CHOICES = [
        ('draft', 'Черновик'),
        ('published', 'Опубликован'),
        ('archived', 'В архиве'),
    ]

    LEVEL_CHOICES = [
        ('beginner', 'Начальный'),
        ('intermediate', 'Средний'),
        ('advanced', 'Продвинутый'),
    ]

    title = models.CharField('Название курса', max_length=255, unique=True)
    description = models.TextField('Описание курса', blank=True)
    category = models.CharField('Категория', max_length=100, blank=True)
    level = models.CharField('Уровень', max_length=20, choices=LEVEL_CHOICES, blank=True)
    language = models.CharField('Язык', max_length=50, blank=True)
    thumbnail_url = models.URLField('Обложка (URL)', max_length=500, blank=True)

    pricing = models.DecimalField(
        'Цена',
        max_digits=10,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0)]
    )

    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='authored_courses',
        verbose_name='Преподаватель'
    )

    status = models.CharField(
        'Статус',
        max_length=20,
        choices=STATUS_CHOICES,
        default='draft',
        db_index=True
    )

    created_at = models.DateTimeField('Создан', auto_now_add=True)
    updated_at = models.DateTimeField('Обновлен', auto_now=True)

    class Meta:
        verbose_name = 'Курс'
        verbose_name_plural = 'Курсы'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', '-created_at'], name='content_cou_status_6d1f2b_idx'),
        ]

    def __str__(self):
        return self.title

    def get_lectures_count(self):
        """Общее количество лекций в курсе"""
        return self.lectures.count()


class Chapter(models.Model):
    """Глава курса"""

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='chapters',
        verbose_name='Курс'
    )

    title = models.CharField('Название главы', max_length=255)
    description = models.TextField('Описание главы', blank=True)
    order = models.PositiveIntegerField('Порядок', default=0, db_index=True)

    created_at = models.DateTimeField('Создана', auto_now_add=True)
    updated_at = models.DateTimeField('Обновлена', auto_now=True)

    class Meta:
        verbose_name = 'Глава'
        verbose_name_plural = 'Главы'
        ordering = ['course', 'order']

    def __str__(self):
        return f"{self.course.title} - {self.title}"


class Lecture(models.Model):
    """
    Лекция: видео + необязательные конспект, тест и домашнее задание.

    Тест и задание хранятся в отдельных моделях (quizzes.LectureQuiz,
    assignments.LectureAssignment) со связью один-к-одному.
    """

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='lectures',
        verbose_name='Курс'
    )

    chapter = models.ForeignKey(
        Chapter,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='lectures',
        verbose_name='Глава',
        help_text='Пусто = лекция без главы'
    )

    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='lectures',
        verbose_name='Преподаватель'
    )

    title = models.CharField('Название лекции', max_length=255)
    description = models.TextField('Описание', blank=True)

    video_url = models.URLField('Видео (URL)', max_length=500, blank=True)
    thumbnail_url = models.URLField('Обложка (URL)', max_length=500, blank=True)
    code_link = models.URLField('Ссылка на код', max_length=500, blank=True)

    notes_file_url = models.URLField('Конспект (URL)', max_length=500, blank=True)
    notes_file_name = models.CharField('Имя файла конспекта', max_length=255, blank=True)

    order = models.PositiveIntegerField('Порядок', default=0, db_index=True)

    created_at = models.DateTimeField('Создана', auto_now_add=True)
    updated_at = models.DateTimeField('Обновлена', auto_now=True)

    class Meta:
        verbose_name = 'Лекция'
        verbose_name_plural = 'Лекции'
        ordering = ['course', 'order']
        indexes = [
            models.Index(fields=['course', 'order'], name='content_lec_course__8a3c1e_idx'),
        ]

    def __str__(self):
        return self.title

    def get_quiz(self):
        """Тест лекции или None"""
        return getattr(self, 'quiz', None)

    def get_assignment(self):
        """Домашнее задание лекции или None"""
        return getattr(self, 'assignment', None)
