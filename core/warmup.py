import logging

logger = logging.getLogger(__name__)


def warmup():
    """Прогрев Django при старте воркера Gunicorn"""
    logger.info("🔥 Warmup started...")

    from django.contrib.auth import get_user_model
    from django.db import connections

    # Прогреваем подключение к БД
    for conn in connections.all():
        conn.ensure_connection()
    logger.info("✅ Database connection established")

    # Прогреваем основные модели
    User = get_user_model()
    User.objects.first()

    from content.models import Course, Lecture
    from quizzes.models import QuizAttempt
    from assignments.models import AssignmentSubmission

    Course.objects.first()
    Lecture.objects.first()
    QuizAttempt.objects.first()
    AssignmentSubmission.objects.first()

    logger.info("✅ ORM models loaded")

    # Прогреваем URL routing
    from django.urls import resolve, Resolver404
    try:
        resolve('/api/courses/')
        resolve('/api/account/profile/')
        resolve('/api/student/assignments/my-submissions/')
    except Resolver404:
        logger.warning("⚠️ URL routing warmup: маршрут не найден")
    logger.info("✅ URL routing loaded")

    logger.info("🔥 Warmup completed!")
