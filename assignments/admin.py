from django.contrib import admin
from django.utils.html import format_html, format_html_join
from .models import LectureAssignment, AssignmentSubmission


class AssignmentSubmissionInline(admin.TabularInline):
    """Inline для сдач задания"""
    model = AssignmentSubmission
    fk_name = 'lecture'
    extra = 0
    fields = ['student', 'status', 'is_late', 'grade', 'score', 'submitted_at']
    readonly_fields = ['student', 'is_late', 'submitted_at']
    can_delete = False
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(LectureAssignment)
class LectureAssignmentAdmin(admin.ModelAdmin):
    list_display = ['lecture', 'title', 'due_date', 'resubmission_badge', 'submissions_info']
    list_filter = ['allow_resubmission', 'lecture__course']
    search_fields = ['title', 'lecture__title']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Связь с лекцией', {
            'fields': ('lecture',)
        }),
        ('Задание', {
            'fields': ('title', 'description', 'file_url')
        }),
        ('Сроки', {
            'fields': ('due_date', 'allow_resubmission')
        }),
        ('Даты', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def resubmission_badge(self, obj):
        return '✅ Да' if obj.allow_resubmission else '❌ Нет'

    resubmission_badge.short_description = 'Пересдача'

    def submissions_info(self, obj):
        if obj.pk:
            return f'📝 {obj.lecture.assignment_submissions.count()}'
        return '-'

    submissions_info.short_description = 'Сдачи'


@admin.register(AssignmentSubmission)
class AssignmentSubmissionAdmin(admin.ModelAdmin):
    list_display = ['student_info', 'lecture_short', 'status_badge', 'is_late', 'grade', 'score', 'submitted_at']
    list_filter = ['status', 'is_late', 'course', 'submitted_at']
    search_fields = ['student__email', 'student__user_name', 'lecture__title']
    readonly_fields = ['student', 'lecture', 'course', 'files_display', 'submitted_at', 'graded_at', 'graded_by']
    date_hierarchy = 'submitted_at'

    fieldsets = (
        ('Основная информация', {
            'fields': ('student', 'lecture', 'course', 'status', 'is_late')
        }),
        ('Работа студента', {
            'fields': ('files_display', 'remarks', 'submitted_at')
        }),
        ('Проверка', {
            'fields': ('grade', 'score', 'feedback', 'graded_by', 'graded_at')
        }),
    )

    def student_info(self, obj):
        return f"{obj.student.get_full_name()} ({obj.student.email})"

    student_info.short_description = 'Студент'

    def lecture_short(self, obj):
        return obj.lecture.title[:50]

    lecture_short.short_description = 'Лекция'

    def status_badge(self, obj):
        colors = {
            'submitted': '#17a2b8',
            'late': '#ffc107',
            'resubmitted': '#6c757d',
            'graded': '#28a745',
        }
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; border-radius: 3px;">{}</span>',
            colors.get(obj.status, '#6c757d'),
            obj.get_status_display()
        )

    status_badge.short_description = 'Статус'

    def files_display(self, obj):
        if not obj.files:
            return 'Нет файлов'
        items = format_html_join(
            '',
            '<li><a href="{}" target="_blank">📎 {}</a></li>',
            ((item.get('file_url'), item.get('file_name') or item.get('file_url')) for item in obj.files)
        )
        return format_html('<ul>{}</ul>', items)

    files_display.short_description = 'Файлы'

    def save_model(self, request, obj, form, change):
        """Оценка из админки проставляет статус и проверяющего"""
        if change and (obj.grade or obj.score is not None) and obj.status != 'graded':
            obj.mark_graded(request.user, grade=obj.grade, score=obj.score, feedback=obj.feedback)
            return
        super().save_model(request, obj, form, change)
