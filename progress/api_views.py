from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import LectureProgressSerializer, MyCourseSerializer, SaveProgressSerializer
from .services import EnrollmentService, ProgressService


class SaveProgressView(APIView):
    """
    POST /api/student/progress/save/
    Сохранить позицию просмотра видео лекции

    Body: { "lecture_id": 12, "course_id": 3, "watch_time": 310.5, "duration": 600 }
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = SaveProgressSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        progress = ProgressService.save_progress(
            user=request.user,
            lecture_id=data['lecture_id'],
            watch_time=data['watch_time'],
            duration=data['duration'],
            course_id=data.get('course_id')
        )

        return Response({
            'success': True,
            'progress': LectureProgressSerializer(progress).data
        })


class CourseProgressView(APIView):
    """
    GET /api/student/progress/course/{course_id}/
    Прогресс по всем лекциям курса
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, course_id):
        course, records = ProgressService.course_progress(request.user, course_id)

        return Response({
            'course': {'id': course.id, 'title': course.title},
            'completed_lectures': sum(1 for record in records if record.completed),
            'total_lectures': course.get_lectures_count(),
            'progress': LectureProgressSerializer(records, many=True).data
        })


class EnrollView(APIView):
    """
    POST /api/student/enroll/{course_id}/
    Записаться на курс
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, course_id):
        enrollment = EnrollmentService.enroll(request.user, course_id)

        return Response({
            'message': 'Вы записаны на курс',
            'enrollment': MyCourseSerializer(enrollment).data
        }, status=status.HTTP_201_CREATED)


class MyCoursesView(APIView):
    """
    GET /api/student/my-courses/
    Мои курсы с прогрессом
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        enrollments = EnrollmentService.my_courses(request.user)
        serializer = MyCourseSerializer(enrollments, many=True)
        return Response(serializer.data)
