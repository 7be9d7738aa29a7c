from rest_framework import serializers
from content.serializers import CourseListSerializer
from .models import CourseEnrollment, LectureProgress


class SaveProgressSerializer(serializers.Serializer):
    """
    Сохранение прогресса видео

    Body: { "lecture_id": 12, "course_id": 3, "watch_time": 310.5, "duration": 600 }
    """

    lecture_id = serializers.IntegerField()
    course_id = serializers.IntegerField(required=False, allow_null=True)
    watch_time = serializers.FloatField()
    duration = serializers.FloatField()


class LectureProgressSerializer(serializers.ModelSerializer):
    """Прогресс лекции"""

    lecture_title = serializers.CharField(source='lecture.title', read_only=True)
    percentage = serializers.FloatField(source='get_percentage', read_only=True)

    class Meta:
        model = LectureProgress
        fields = [
            'id',
            'lecture',
            'lecture_title',
            'course',
            'watch_time',
            'duration',
            'percentage',
            'completed',
            'last_updated',
        ]


class MyCourseSerializer(serializers.ModelSerializer):
    """Мой курс с прогрессом"""

    course = CourseListSerializer(read_only=True)
    completed_lectures = serializers.IntegerField(source='get_completed_lectures_count', read_only=True)
    total_lectures = serializers.IntegerField(source='course.get_lectures_count', read_only=True)

    class Meta:
        model = CourseEnrollment
        fields = ['id', 'course', 'enrolled_at', 'completed_lectures', 'total_lectures']
