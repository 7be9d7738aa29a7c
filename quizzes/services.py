"""
Прохождение тестов: проверка ответов, сохранение результата, статус.

Тест проходится один раз: результат на пару (студент, лекция) создается
единожды и больше не меняется. Повторная отправка возвращает
AlreadyAttempted с id уже сохраненной попытки.
"""

import logging
import math

from django.db import IntegrityError, transaction

from core.exceptions import AlreadyAttempted, NotFound, ValidationError
from content.models import Lecture
from .models import LectureQuiz, QuizAttempt, calculate_percentage

logger = logging.getLogger(__name__)

# Верхняя граница для PositiveIntegerField во всех поддерживаемых БД
MAX_TIME_TAKEN_SECONDS = 2 ** 31 - 1


def grade_answers(questions, submitted_answers):
    """
    Проверить ответы студента.

    Вопросы перебираются в порядке автора. Ответ ищется по question_id,
    а если клиент его не прислал, то по тексту вопроса (первое совпадение).
    Вопрос без ответа считается неправильным.

    Returns:
        tuple: (список разбора по вопросам, количество правильных)
    """
    by_id = {}
    by_text = {}
    for answer in submitted_answers:
        question_id = answer.get('question_id')
        if question_id is not None:
            by_id.setdefault(question_id, answer)
        elif answer.get('question'):
            by_text.setdefault(answer['question'], answer)

    breakdown = []
    correct_count = 0

    for question in questions:
        answer = by_id.get(question.id) or by_text.get(question.question_text)
        selected = (answer or {}).get('selected_answer') or ''
        is_correct = bool(selected) and selected == question.correct_option

        breakdown.append({
            'question_id': question.id,
            'question': question.question_text,
            'selected_answer': selected,
            'correct_answer': question.correct_option,
            'is_correct': is_correct,
        })

        if is_correct:
            correct_count += 1

    return breakdown, correct_count


class QuizService:
    """Сервис прохождения тестов"""

    @classmethod
    def _find_attempt(cls, student, lecture_id):
        return QuizAttempt.objects.filter(student=student, lecture_id=lecture_id).first()

    @classmethod
    def _load_quiz(cls, lecture_id):
        """
        Лекция, тест и его вопросы.

        Raises:
            NotFound: нет лекции, теста или вопросов
        """
        try:
            lecture = Lecture.objects.select_related('course').get(pk=lecture_id)
        except Lecture.DoesNotExist:
            raise NotFound('Тест для этой лекции не найден')

        try:
            quiz = lecture.quiz
        except LectureQuiz.DoesNotExist:
            raise NotFound('Тест для этой лекции не найден')

        questions = quiz.get_questions()
        if not questions:
            raise NotFound('Тест для этой лекции не найден')

        return lecture, quiz, questions

    @classmethod
    def submit(cls, student, lecture_id, answers, time_taken=0):
        """
        Отправить ответы на тест.

        Args:
            student: пользователь из request.user
            lecture_id: id лекции с тестом
            answers: [{"question_id"?, "question"?, "selected_answer"}]
            time_taken: время прохождения по данным клиента (секунды)

        Raises:
            AlreadyAttempted: тест уже пройден (без изменений в БД)
            NotFound: нет лекции или теста
            ValidationError: time_taken не является конечным числом
        """
        existing = cls._find_attempt(student, lecture_id)
        if existing:
            logger.warning(f"Повторная отправка теста: {student.email}, лекция {lecture_id}")
            raise AlreadyAttempted(existing.id)

        lecture, quiz, questions = cls._load_quiz(lecture_id)

        breakdown, correct_count = grade_answers(questions, answers)
        total_questions = len(questions)

        time_taken = float(time_taken or 0)
        if not math.isfinite(time_taken):
            raise ValidationError('time_taken должен быть конечным числом')

        # Время от клиента: неотрицательное целое число секунд
        time_taken_seconds = min(max(0, int(time_taken)), MAX_TIME_TAKEN_SECONDS)

        try:
            # Дубликат (student, lecture) отсекает уникальный индекс
            with transaction.atomic():
                attempt = QuizAttempt.objects.create(
                    student=student,
                    student_name=student.get_full_name(),
                    lecture=lecture,
                    course=lecture.course,
                    answers=breakdown,
                    score=correct_count,
                    total_questions=total_questions,
                    correct_answers=correct_count,
                    time_taken_seconds=time_taken_seconds,
                )
        except IntegrityError:
            winner = QuizAttempt.objects.filter(student=student, lecture=lecture).first()
            if winner is None:
                raise
            logger.warning(f"Параллельная отправка теста: {student.email}, лекция {lecture.id}")
            raise AlreadyAttempted(winner.id)

        logger.info(
            f"Тест сдан: {student.email}, лекция {lecture.id}, "
            f"результат {correct_count}/{total_questions}"
        )

        return {
            'message': 'Тест успешно отправлен',
            'student_name': attempt.student_name,
            'score': attempt.score,
            'total_questions': attempt.total_questions,
            'correct_answers': attempt.correct_answers,
            'percentage': attempt.get_percentage(),
            'response_id': attempt.id,
            'result': breakdown,
        }

    @classmethod
    def get_status(cls, student, lecture_id):
        """
        Проходил ли студент тест.

        Если проходил: краткий итог без разбора по вопросам.
        Если нет: вопросы без правильных ответов и лимит времени.
        """
        attempt = cls._find_attempt(student, lecture_id)

        if attempt:
            return {
                'attempted': True,
                'result': {
                    'score': attempt.score,
                    'total_questions': attempt.total_questions,
                    'correct_answers': attempt.correct_answers,
                    'percentage': attempt.get_percentage(),
                    'submitted_at': attempt.submitted_at,
                },
            }

        _, quiz, questions = cls._load_quiz(lecture_id)

        return {
            'attempted': False,
            'questions': [
                {
                    'id': question.id,
                    'question': question.question_text,
                    'options': list(question.options),
                }
                for question in questions
            ],
            'time_limit': quiz.get_effective_time_limit(),
        }

    @classmethod
    def get_result(cls, student, lecture_id):
        """
        Полный разбор сохраненной попытки.

        Raises:
            NotFound: студент еще не проходил тест
        """
        attempt = cls._find_attempt(student, lecture_id)
        if attempt is None:
            raise NotFound('Результат теста не найден')

        return {
            'response_id': attempt.id,
            'score': attempt.score,
            'total_questions': attempt.total_questions,
            'correct_answers': attempt.correct_answers,
            'percentage': calculate_percentage(attempt.score, attempt.total_questions),
            'time_taken': attempt.time_taken_seconds,
            'submitted_at': attempt.submitted_at,
            'answers': attempt.answers,
        }
