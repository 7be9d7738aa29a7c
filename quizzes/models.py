from django.db import models
from django.conf import settings
from django.core.exceptions import ValidationError
from django.utils import timezone
from content.models import Course, Lecture


class LectureQuiz(models.Model):
    """Тест лекции (расширение Lecture)"""

    lecture = models.OneToOneField(
        Lecture,
        on_delete=models.CASCADE,
        related_name='quiz',
        verbose_name='Лекция'
    )

    time_limit_seconds = models.PositiveIntegerField(
        'Ограничение по времени (секунды)',
        default=0,
        help_text='0 = значение по умолчанию (QUIZ_DEFAULT_TIME_LIMIT)'
    )

    created_at = models.DateTimeField('Создан', auto_now_add=True)
    updated_at = models.DateTimeField('Обновлен', auto_now=True)

    class Meta:
        verbose_name = 'Тест'
        verbose_name_plural = 'Тесты'

    def __str__(self):
        return f"Тест: {self.lecture.title}"

    def get_questions(self):
        """Вопросы в порядке, заданном автором"""
        return list(self.questions.all().order_by('order', 'id'))

    def get_questions_count(self):
        """Количество вопросов в тесте"""
        return self.questions.count()

    def get_effective_time_limit(self):
        """Лимит времени в секундах с учетом значения по умолчанию"""
        return self.time_limit_seconds or settings.QUIZ_DEFAULT_TIME_LIMIT


class QuizQuestion(models.Model):
    """Вопрос теста с одним правильным вариантом"""

    quiz = models.ForeignKey(
        LectureQuiz,
        on_delete=models.CASCADE,
        related_name='questions',
        verbose_name='Тест'
    )

    question_text = models.TextField('Текст вопроса')

    options = models.JSONField(
        'Варианты ответа',
        default=list,
        help_text='Список строк, минимум 2 варианта: ["Да", "Нет"]'
    )

    correct_option = models.TextField(
        'Правильный ответ',
        help_text='Должен совпадать с одним из вариантов'
    )

    order = models.PositiveIntegerField('Порядок', default=0, db_index=True)

    class Meta:
        verbose_name = 'Вопрос'
        verbose_name_plural = 'Вопросы'
        ordering = ['quiz', 'order', 'id']

    def __str__(self):
        return self.question_text[:50]

    def clean(self):
        """Проверка вариантов ответа"""
        if not isinstance(self.options, list) or len(self.options) < 2:
            raise ValidationError({'options': 'Нужно минимум 2 варианта ответа'})

        if not all(isinstance(option, str) and option.strip() for option in self.options):
            raise ValidationError({'options': 'Варианты ответа должны быть непустыми строками'})

        if self.correct_option not in self.options:
            raise ValidationError({'correct_option': 'Правильный ответ должен быть одним из вариантов'})


class QuizAttempt(models.Model):
    """
    Результат прохождения теста.

    Одна запись на пару (студент, лекция): уникальность обеспечивается
    на уровне БД, запись создается один раз и больше не меняется.
    """

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='quiz_attempts',
        verbose_name='Студент'
    )

    student_name = models.CharField('Имя студента', max_length=150)

    lecture = models.ForeignKey(
        Lecture,
        on_delete=models.CASCADE,
        related_name='quiz_attempts',
        verbose_name='Лекция'
    )

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='quiz_attempts',
        verbose_name='Курс'
    )

    answers = models.JSONField(
        'Ответы',
        default=list,
        help_text='[{"question_id", "question", "selected_answer", "correct_answer", "is_correct"}]'
    )

    score = models.PositiveIntegerField('Баллы')
    total_questions = models.PositiveIntegerField('Всего вопросов')
    correct_answers = models.PositiveIntegerField('Правильных ответов')
    time_taken_seconds = models.PositiveIntegerField('Затрачено времени (секунды)', default=0)

    submitted_at = models.DateTimeField('Дата сдачи', default=timezone.now, db_index=True)

    class Meta:
        verbose_name = 'Попытка прохождения теста'
        verbose_name_plural = 'Попытки прохождения тестов'
        ordering = ['-submitted_at']
        unique_together = [['student', 'lecture']]

    def __str__(self):
        return f"{self.student.email} - {self.lecture.title} ({self.score}/{self.total_questions})"

    def get_percentage(self):
        """Процент правильных ответов"""
        return calculate_percentage(self.score, self.total_questions)


def calculate_percentage(score, total):
    if total <= 0:
        return 0.0
    return round(score / total * 100, 2)
