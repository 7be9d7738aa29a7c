from django.contrib import admin
from django.utils.html import format_html
from .models import CourseEnrollment, LectureProgress


@admin.register(LectureProgress)
class LectureProgressAdmin(admin.ModelAdmin):
    list_display = ['user_info', 'lecture_info', 'progress_bar', 'completion_badge', 'last_updated']
    list_filter = ['completed', 'course', 'last_updated']
    search_fields = ['user__email', 'user__user_name', 'lecture__title']
    readonly_fields = ['watch_time', 'duration', 'completed', 'last_updated']
    date_hierarchy = 'last_updated'

    def user_info(self, obj):
        return obj.user.get_full_name()

    user_info.short_description = 'Студент'

    def lecture_info(self, obj):
        return obj.lecture.title

    lecture_info.short_description = 'Лекция'

    def progress_bar(self, obj):
        percentage = obj.get_percentage()
        color = '#28a745' if obj.completed else '#ffc107' if percentage >= 50 else '#dc3545'
        return format_html(
            '<div style="width: 100px; background-color: #e9ecef; border-radius: 4px; overflow: hidden;">'
            '<div style="width: {}%; background-color: {}; color: white; text-align: center; padding: 2px 0; font-size: 11px;">'
            '{}%'
            '</div>'
            '</div>',
            percentage, color, int(percentage)
        )

    progress_bar.short_description = 'Прогресс'

    def completion_badge(self, obj):
        if obj.completed:
            return format_html(
                '<span style="background-color: #28a745; color: white; padding: 3px 10px; border-radius: 3px;">✅ Завершена</span>')
        return format_html(
            '<span style="background-color: #ffc107; color: white; padding: 3px 10px; border-radius: 3px;">⏳ Просмотр</span>')

    completion_badge.short_description = 'Статус'

    def has_add_permission(self, request):
        return False


@admin.register(CourseEnrollment)
class CourseEnrollmentAdmin(admin.ModelAdmin):
    list_display = ['user_info', 'course', 'completed_lectures_info', 'enrolled_at']
    list_filter = ['course', 'enrolled_at']
    search_fields = ['user__email', 'user__user_name', 'course__title']
    readonly_fields = ['enrolled_at']
    date_hierarchy = 'enrolled_at'

    def user_info(self, obj):
        return f"{obj.user.get_full_name()} ({obj.user.email})"

    user_info.short_description = 'Студент'

    def completed_lectures_info(self, obj):
        return f'✅ {obj.get_completed_lectures_count()} / {obj.course.get_lectures_count()}'

    completed_lectures_info.short_description = 'Завершено лекций'
