from django.contrib import admin
from django.utils.html import format_html, format_html_join

from .models import LectureQuiz, QuizQuestion, QuizAttempt


class QuizQuestionInline(admin.StackedInline):
    """Inline для вопросов теста"""
    model = QuizQuestion
    extra = 0
    fields = ['order', 'question_text', 'options', 'correct_option']
    ordering = ['order']


@admin.register(LectureQuiz)
class LectureQuizAdmin(admin.ModelAdmin):
    list_display = ['lecture', 'course', 'time_limit', 'questions_count', 'attempts_count']
    list_filter = ['lecture__course']
    search_fields = ['lecture__title', 'lecture__course__title']
    readonly_fields = ['questions_count', 'attempts_count', 'created_at', 'updated_at']

    fieldsets = (
        ('Связь с лекцией', {
            'fields': ('lecture',)
        }),
        ('Настройки прохождения', {
            'fields': ('time_limit_seconds',)
        }),
        ('Статистика', {
            'fields': ('questions_count', 'attempts_count', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    inlines = [QuizQuestionInline]

    def course(self, obj):
        return obj.lecture.course

    course.short_description = 'Курс'

    def time_limit(self, obj):
        if obj.time_limit_seconds > 0:
            return f'⏰ {obj.time_limit_seconds // 60} мин'
        return f'⏰ {obj.get_effective_time_limit() // 60} мин (по умолчанию)'

    time_limit.short_description = 'Лимит времени'

    def questions_count(self, obj):
        if obj.pk:
            return f'❓ {obj.get_questions_count()}'
        return 0

    questions_count.short_description = 'Вопросов'

    def attempts_count(self, obj):
        if obj.pk:
            return obj.lecture.quiz_attempts.count()
        return 0

    attempts_count.short_description = 'Попыток'


@admin.register(QuizAttempt)
class QuizAttemptAdmin(admin.ModelAdmin):
    """Результаты только для просмотра: попытка не редактируется"""
    list_display = ['student_name', 'student', 'lecture', 'course', 'score_badge', 'time_taken', 'submitted_at']
    list_filter = ['course', 'submitted_at']
    search_fields = ['student__email', 'student_name', 'lecture__title']
    readonly_fields = ['student', 'student_name', 'lecture', 'course', 'score', 'total_questions',
                       'correct_answers', 'time_taken_seconds', 'submitted_at', 'answers_display']
    exclude = ['answers']
    date_hierarchy = 'submitted_at'

    fieldsets = (
        ('Основная информация', {
            'fields': ('student', 'student_name', 'lecture', 'course')
        }),
        ('Результаты', {
            'fields': ('score', 'total_questions', 'correct_answers', 'time_taken_seconds', 'submitted_at')
        }),
        ('Ответы', {
            'fields': ('answers_display',)
        }),
    )

    def score_badge(self, obj):
        percentage = obj.get_percentage()
        color = '#28a745' if percentage >= 50 else '#dc3545'
        return format_html(
            '<span style="color: {}; font-weight: bold;">⭐ {}/{} ({}%)</span>',
            color,
            obj.score,
            obj.total_questions,
            percentage
        )

    score_badge.short_description = 'Результат'

    def time_taken(self, obj):
        minutes = obj.time_taken_seconds // 60
        secs = obj.time_taken_seconds % 60
        return f'⏱️ {minutes}:{secs:02d}'

    time_taken.short_description = 'Время'

    def answers_display(self, obj):
        rows = format_html_join(
            '',
            '<li>{} {}: ответ «{}», верно «{}»</li>',
            (
                (
                    '✅' if answer.get('is_correct') else '❌',
                    answer.get('question', ''),
                    answer.get('selected_answer') or '-',
                    answer.get('correct_answer', ''),
                )
                for answer in obj.answers
            )
        )
        return format_html('<ul>{}</ul>', rows)

    answers_display.short_description = 'Разбор ответов'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
