from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .serializers import AssignmentSubmitSerializer, GradeSubmissionSerializer
from .services import AssignmentService


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def submit_assignment(request):
    """
    Сдать домашнее задание

    POST /api/student/assignments/submit/

    Body:
    {
        "lecture_id": 12,
        "course_id": 3,
        "files": [{"file_url": "https://...", "file_name": "hw.pdf"}],
        "remarks": "..."
    }
    """
    serializer = AssignmentSubmitSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = AssignmentService.submit(
        student=request.user,
        lecture_id=serializer.validated_data['lecture_id'],
        files=serializer.get_files(),
        course_id=serializer.validated_data.get('course_id'),
        remarks=serializer.validated_data.get('remarks')
    )

    return Response(result, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def assignment_status(request, lecture_id):
    """
    Статус сдачи задания лекции

    GET /api/student/assignments/{lecture_id}/status/
    """
    return Response(AssignmentService.get_status(request.user, lecture_id))


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def delete_submission(request, submission_id):
    """
    Удалить свою работу (до срока сдачи и до проверки)

    DELETE /api/student/assignments/{submission_id}/
    """
    return Response(AssignmentService.delete_submission(request.user, submission_id))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_submissions(request):
    """
    Мои сдачи заданий

    GET /api/student/assignments/my-submissions/
    """
    return Response(AssignmentService.list_submissions(request.user))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def grade_submission(request, submission_id):
    """
    Оценить работу (только преподаватель)

    POST /api/student/assignments/submissions/{id}/grade/

    Body:
    {
        "grade": "A",
        "score": 95,
        "feedback": "Хорошая работа!"
    }
    """
    serializer = GradeSubmissionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = AssignmentService.grade(
        instructor=request.user,
        submission_id=submission_id,
        grade=serializer.validated_data.get('grade', ''),
        score=serializer.validated_data.get('score'),
        feedback=serializer.validated_data['feedback']
    )

    return Response(result)
