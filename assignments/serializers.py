from rest_framework import serializers
from .models import AssignmentSubmission


class SubmissionFileSerializer(serializers.Serializer):
    """Загруженный файл работы (URL уже в CDN)"""

    file_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    file_name = serializers.CharField(max_length=255, required=False, allow_blank=True)


class AssignmentSubmitSerializer(serializers.Serializer):
    """
    Сдача домашнего задания

    {
        "lecture_id": 12,
        "course_id": 3,
        "files": [{"file_url": "https://cdn.example.com/hw.pdf", "file_name": "hw.pdf"}],
        "remarks": "Комментарий"
    }

    Клиенты с одним файлом могут прислать file_url / file_name
    на верхнем уровне вместо массива files.
    """

    lecture_id = serializers.IntegerField()
    course_id = serializers.IntegerField(required=False, allow_null=True)
    files = SubmissionFileSerializer(many=True, required=False)
    file_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    file_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    remarks = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def get_files(self):
        """Список файлов без записей с пустым file_url"""
        data = self.validated_data
        entries = data.get('files')
        if not entries and data.get('file_url'):
            entries = [{'file_url': data['file_url'], 'file_name': data.get('file_name', '')}]

        return [
            {
                'file_url': entry['file_url'],
                'file_name': entry.get('file_name') or '',
            }
            for entry in entries or []
            if entry.get('file_url')
        ]


class AssignmentSubmissionSerializer(serializers.ModelSerializer):
    """Сдача задания"""

    lecture_title = serializers.CharField(source='lecture.title', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = AssignmentSubmission
        fields = [
            'id',
            'student',
            'lecture',
            'lecture_title',
            'course',
            'files',
            'remarks',
            'status',
            'status_display',
            'is_late',
            'grade',
            'score',
            'feedback',
            'submitted_at',
            'graded_at',
        ]


class GradeSubmissionSerializer(serializers.Serializer):
    """Оценка работы преподавателем"""

    grade = serializers.CharField(max_length=20, required=False, allow_blank=True)
    score = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    feedback = serializers.CharField(required=False, allow_blank=True, default='')
