from rest_framework import serializers
from .models import Course, Chapter, Lecture


class LectureListSerializer(serializers.ModelSerializer):
    """Лекция в списке (для структуры курса)"""
    has_quiz = serializers.SerializerMethodField()
    has_assignment = serializers.SerializerMethodField()

    class Meta:
        model = Lecture
        fields = ['id', 'title', 'description', 'order', 'thumbnail_url', 'has_quiz', 'has_assignment']

    def get_has_quiz(self, obj):
        return obj.get_quiz() is not None

    def get_has_assignment(self, obj):
        return obj.get_assignment() is not None


class ChapterSerializer(serializers.ModelSerializer):
    """Глава с лекциями"""
    lectures = LectureListSerializer(many=True, read_only=True)

    class Meta:
        model = Chapter
        fields = ['id', 'title', 'description', 'order', 'lectures']


class CourseListSerializer(serializers.ModelSerializer):
    """Курс в каталоге (список)"""
    instructor_name = serializers.SerializerMethodField()
    lectures_count = serializers.IntegerField(source='get_lectures_count', read_only=True)

    class Meta:
        model = Course
        fields = ['id', 'title', 'description', 'category', 'level', 'language',
                  'thumbnail_url', 'pricing', 'instructor_name', 'lectures_count']

    def get_instructor_name(self, obj):
        if obj.instructor:
            return obj.instructor.get_full_name()
        return None


class CourseDetailSerializer(CourseListSerializer):
    """Детальная информация о курсе"""
    chapters = ChapterSerializer(many=True, read_only=True)
    direct_lectures = serializers.SerializerMethodField()

    class Meta(CourseListSerializer.Meta):
        fields = CourseListSerializer.Meta.fields + ['chapters', 'direct_lectures']

    def get_direct_lectures(self, obj):
        """Лекции без главы"""
        lectures = obj.lectures.filter(chapter__isnull=True).order_by('order')
        return LectureListSerializer(lectures, many=True).data


class LectureDetailSerializer(serializers.ModelSerializer):
    """
    Детали лекции.

    Для теста отдаются только количество вопросов и лимит времени:
    сами вопросы приходят из /quiz/{id}/status/ без правильных ответов.
    """
    course_title = serializers.CharField(source='course.title', read_only=True)
    quiz = serializers.SerializerMethodField()
    assignment = serializers.SerializerMethodField()

    class Meta:
        model = Lecture
        fields = ['id', 'course', 'course_title', 'chapter', 'title', 'description', 'video_url',
                  'thumbnail_url', 'code_link', 'notes_file_url', 'notes_file_name', 'quiz', 'assignment']

    def get_quiz(self, obj):
        quiz = obj.get_quiz()
        if quiz is None:
            return None
        return {
            'questions_count': quiz.get_questions_count(),
            'time_limit': quiz.get_effective_time_limit(),
        }

    def get_assignment(self, obj):
        assignment = obj.get_assignment()
        if assignment is None:
            return None
        return assignment.to_meta()
