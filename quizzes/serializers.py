import math

from rest_framework import serializers
from .models import QuizAttempt


class QuizAnswerInputSerializer(serializers.Serializer):
    """Ответ на один вопрос"""

    question_id = serializers.IntegerField(required=False)
    question = serializers.CharField(required=False, allow_blank=True)
    selected_answer = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        default='',
        trim_whitespace=False
    )

    def validate(self, data):
        """Вопрос указывается по id или по тексту"""
        if data.get('question_id') is None and not data.get('question'):
            raise serializers.ValidationError('Укажите question_id или question')
        return data


class QuizSubmitSerializer(serializers.Serializer):
    """
    Отправка ответов

    {
        "answers": [{"question_id": 1, "selected_answer": "Да"}],
        "time_taken": 120
    }
    """

    answers = QuizAnswerInputSerializer(many=True, allow_empty=True)
    time_taken = serializers.FloatField(required=False, default=0)

    def validate_time_taken(self, value):
        if not math.isfinite(value):
            raise serializers.ValidationError('time_taken должен быть конечным числом')
        return value


class QuizAttemptSerializer(serializers.ModelSerializer):
    """Попытка в истории студента"""

    lecture_title = serializers.CharField(source='lecture.title', read_only=True)
    percentage = serializers.FloatField(source='get_percentage', read_only=True)

    class Meta:
        model = QuizAttempt
        fields = [
            'id',
            'lecture',
            'lecture_title',
            'course',
            'score',
            'total_questions',
            'correct_answers',
            'percentage',
            'time_taken_seconds',
            'submitted_at',
        ]
