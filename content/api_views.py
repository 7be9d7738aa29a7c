from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated
from django.shortcuts import get_object_or_404
from .models import Course, Lecture
from .serializers import (
    CourseListSerializer,
    CourseDetailSerializer,
    LectureDetailSerializer,
)


class CourseListView(APIView):
    """
    GET /api/courses/
    Каталог опубликованных курсов
    """
    permission_classes = [AllowAny]

    def get(self, request):
        courses = Course.objects.filter(status='published').select_related('instructor').order_by('-created_at')
        serializer = CourseListSerializer(courses, many=True)
        return Response(serializer.data)


class CourseDetailView(APIView):
    """
    GET /api/courses/{id}/
    Структура курса: главы и лекции
    """
    permission_classes = [AllowAny]

    def get(self, request, pk):
        course = get_object_or_404(Course, pk=pk, status='published')
        serializer = CourseDetailSerializer(course)
        return Response(serializer.data)


class LectureDetailView(APIView):
    """
    GET /api/lectures/{id}/
    Детали лекции (видео, материалы, мета теста и задания)
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, pk):
        lecture = get_object_or_404(Lecture.objects.select_related('course'), pk=pk)
        serializer = LectureDetailSerializer(lecture)
        return Response(serializer.data)
