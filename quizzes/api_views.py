from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import QuizAttempt
from .serializers import QuizSubmitSerializer, QuizAttemptSerializer
from .services import QuizService


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def submit_quiz(request, lecture_id):
    """
    Отправить ответы на тест лекции

    POST /api/student/quiz/{lecture_id}/

    Body:
    {
        "answers": [
            {"question_id": 1, "selected_answer": "Вариант A"},
            {"question": "Текст вопроса", "selected_answer": "Вариант B"}
        ],
        "time_taken": 300
    }
    """
    serializer = QuizSubmitSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = QuizService.submit(
        student=request.user,
        lecture_id=lecture_id,
        answers=serializer.validated_data['answers'],
        time_taken=serializer.validated_data['time_taken']
    )

    return Response(result, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def quiz_status(request, lecture_id):
    """
    Проходил ли студент тест

    GET /api/student/quiz/{lecture_id}/status/
    """
    return Response(QuizService.get_status(request.user, lecture_id))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def quiz_result(request, lecture_id):
    """
    Полный разбор результата теста

    GET /api/student/quiz/{lecture_id}/result/
    """
    return Response(QuizService.get_result(request.user, lecture_id))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_quiz_attempts(request):
    """
    История пройденных тестов

    GET /api/student/quiz/attempts/
    """
    attempts = QuizAttempt.objects.filter(
        student=request.user
    ).select_related('lecture').order_by('-submitted_at')

    serializer = QuizAttemptSerializer(attempts, many=True)
    return Response(serializer.data)
