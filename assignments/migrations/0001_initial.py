import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('content', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='LectureAssignment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(blank=True, max_length=255, verbose_name='Название задания')),
                ('description', models.TextField(blank=True, verbose_name='Описание')),
                ('file_url', models.URLField(blank=True, help_text='Ссылка на файл с условием в CDN', max_length=500, verbose_name='Файл задания (URL)')),
                ('due_date', models.DateTimeField(blank=True, help_text='Пусто = без срока', null=True, verbose_name='Срок сдачи')),
                ('allow_resubmission', models.BooleanField(default=True, help_text='Студент может заменить работу до срока сдачи', verbose_name='Разрешить пересдачу')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Создано')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Обновлено')),
                ('lecture', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='assignment', to='content.lecture', verbose_name='Лекция')),
            ],
            options={
                'verbose_name': 'Домашнее задание',
                'verbose_name_plural': 'Домашние задания',
            },
        ),
        migrations.CreateModel(
            name='AssignmentSubmission',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('files', models.JSONField(default=list, help_text='[{"file_url": "...", "file_name": "..."}]', verbose_name='Файлы')),
                ('remarks', models.TextField(blank=True, verbose_name='Комментарий студента')),
                ('status', models.CharField(choices=[('submitted', '📤 Сдано'), ('late', '⏰ Сдано с опозданием'), ('resubmitted', '🔄 Пересдано'), ('graded', '✅ Оценено')], db_index=True, default='submitted', max_length=20, verbose_name='Статус')),
                ('is_late', models.BooleanField(default=False, verbose_name='Сдано после срока')),
                ('grade', models.CharField(blank=True, help_text='Например: "A", "B+", "Зачет"', max_length=20, verbose_name='Оценка')),
                ('score', models.PositiveIntegerField(blank=True, null=True, verbose_name='Балл')),
                ('feedback', models.TextField(blank=True, verbose_name='Обратная связь от преподавателя')),
                ('submitted_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Дата сдачи')),
                ('graded_at', models.DateTimeField(blank=True, null=True, verbose_name='Дата проверки')),
                ('course', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='assignment_submissions', to='content.course', verbose_name='Курс')),
                ('graded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='graded_submissions', to=settings.AUTH_USER_MODEL, verbose_name='Проверил')),
                ('lecture', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='assignment_submissions', to='content.lecture', verbose_name='Лекция')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='assignment_submissions', to=settings.AUTH_USER_MODEL, verbose_name='Студент')),
            ],
            options={
                'verbose_name': 'Сдача задания',
                'verbose_name_plural': 'Сдачи заданий',
                'ordering': ['-submitted_at'],
                'indexes': [models.Index(fields=['status', '-submitted_at'], name='assignments_status_4e9a1c_idx'), models.Index(fields=['course', 'status'], name='assignments_course_7b2d0f_idx')],
                'unique_together': {('student', 'lecture')},
            },
        ),
    ]
