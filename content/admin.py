from django.contrib import admin
from django.utils.html import format_html
from .models import Course, Chapter, Lecture


class ChapterInline(admin.TabularInline):
    """Inline для глав курса"""
    model = Chapter
    extra = 0
    fields = ['order', 'title', 'description']
    ordering = ['order']


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'level', 'status_badge', 'lectures_count', 'instructor', 'created_at']
    list_filter = ['status', 'level', 'created_at']
    search_fields = ['title', 'description', 'category']
    readonly_fields = ['created_at', 'updated_at', 'lectures_count']

    fieldsets = (
        ('Основная информация', {
            'fields': ('title', 'description', 'category', 'level', 'language', 'thumbnail_url', 'pricing')
        }),
        ('Преподаватель и статус', {
            'fields': ('instructor', 'status')
        }),
        ('Системная информация', {
            'fields': ('lectures_count', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    inlines = [ChapterInline]

    def save_model(self, request, obj, form, change):
        if not change and obj.instructor is None:
            obj.instructor = request.user
        super().save_model(request, obj, form, change)

    def status_badge(self, obj):
        colors = {
            'draft': '#6c757d',
            'published': '#28a745',
            'archived': '#dc3545',
        }
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; border-radius: 3px;">{}</span>',
            colors.get(obj.status, '#6c757d'),
            obj.get_status_display()
        )

    status_badge.short_description = 'Статус'

    def lectures_count(self, obj):
        return obj.get_lectures_count()

    lectures_count.short_description = '📚 Лекций'

    actions = ['publish_courses', 'archive_courses']

    def publish_courses(self, request, queryset):
        updated = queryset.update(status='published')
        self.message_user(request, f'✅ Опубликовано курсов: {updated}')

    publish_courses.short_description = '✅ Опубликовать выбранные курсы'

    def archive_courses(self, request, queryset):
        updated = queryset.update(status='archived')
        self.message_user(request, f'📦 Перенесено в архив: {updated}')

    archive_courses.short_description = '📦 Перенести в архив'


@admin.register(Lecture)
class LectureAdmin(admin.ModelAdmin):
    list_display = ['title', 'course', 'chapter', 'order', 'has_quiz', 'has_assignment', 'created_at']
    list_filter = ['course', 'created_at']
    search_fields = ['title', 'description', 'course__title']
    readonly_fields = ['created_at', 'updated_at']
    autocomplete_fields = ['course']

    fieldsets = (
        ('Основная информация', {
            'fields': ('course', 'chapter', 'instructor', 'title', 'description', 'order')
        }),
        ('Видео', {
            'fields': ('video_url', 'thumbnail_url')
        }),
        ('Материалы', {
            'fields': ('notes_file_url', 'notes_file_name', 'code_link')
        }),
        ('Системная информация', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def has_quiz(self, obj):
        return obj.get_quiz() is not None

    has_quiz.boolean = True
    has_quiz.short_description = '❓ Тест'

    def has_assignment(self, obj):
        return obj.get_assignment() is not None

    has_assignment.boolean = True
    has_assignment.short_description = '📝 Задание'
