"""
Ошибки бизнес-логики LMS и обработчик исключений DRF.

Каждая ошибка является подклассом APIException со своим HTTP-статусом
и кодом. Ответ формирует api_exception_handler в формате
{"error": ..., "code": ...}.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class LMSError(APIException):
    """Базовая ошибка бизнес-логики"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Ошибка запроса'
    default_code = 'error'

    def __init__(self, detail=None, code=None, **extra):
        super().__init__(detail=detail, code=code)
        # Дополнительные поля ответа (например attempt_id)
        self.extra = extra


class NotFound(LMSError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Не найдено'
    default_code = 'not_found'


class AlreadyAttempted(LMSError):
    """Повторная отправка теста"""

    default_detail = 'Вы уже проходили этот тест'
    default_code = 'already_attempted'

    def __init__(self, attempt_id, detail=None):
        super().__init__(detail=detail, attempt_id=attempt_id)
        self.attempt_id = attempt_id


class Forbidden(LMSError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Доступ запрещен'
    default_code = 'forbidden'


class Mismatch(LMSError):
    default_detail = 'course_id не совпадает с курсом лекции'
    default_code = 'mismatch'


class ResubmissionDisabled(LMSError):
    default_detail = 'Пересдача запрещена'
    default_code = 'resubmission_disabled'


class AlreadyEnrolled(LMSError):
    default_detail = 'Вы уже зачислены на этот курс'
    default_code = 'already_enrolled'


class PastDue(LMSError):
    default_detail = 'Срок сдачи истек. Пересдача невозможна'
    default_code = 'past_due'


class Blocked(LMSError):
    default_detail = 'Операция недоступна'
    default_code = 'blocked'


class ValidationError(LMSError):
    default_detail = 'Некорректные данные'
    default_code = 'validation_error'


def api_exception_handler(exc, context):
    """
    Обработчик исключений для REST_FRAMEWORK['EXCEPTION_HANDLER'].

    - LMSError → {"error": сообщение, "code": код, ...extra}
    - остальные APIException (валидация сериализатора, 401, 405) → стандартный ответ DRF
    - всё прочее → 500 с логированием трейсбека
    """
    if isinstance(exc, LMSError):
        data = {
            'error': str(exc.detail),
            'code': exc.get_codes(),
        }
        data.update(exc.extra)
        return Response(data, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get('view')
    logger.exception(f"Необработанная ошибка в {view.__class__.__name__ if view else 'unknown view'}: {exc}")
    return Response(
        {'error': 'Внутренняя ошибка сервера', 'code': 'server_error'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
