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
            name='LectureQuiz',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('time_limit_seconds', models.PositiveIntegerField(default=0, help_text='0 = значение по умолчанию (QUIZ_DEFAULT_TIME_LIMIT)', verbose_name='Ограничение по времени (секунды)')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Создан')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Обновлен')),
                ('lecture', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='quiz', to='content.lecture', verbose_name='Лекция')),
            ],
            options={
                'verbose_name': 'Тест',
                'verbose_name_plural': 'Тесты',
            },
        ),
        migrations.CreateModel(
            name='QuizQuestion',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('question_text', models.TextField(verbose_name='Текст вопроса')),
                ('options', models.JSONField(default=list, help_text='Список строк, минимум 2 варианта: ["Да", "Нет"]', verbose_name='Варианты ответа')),
                ('correct_option', models.TextField(help_text='Должен совпадать с одним из вариантов', verbose_name='Правильный ответ')),
                ('order', models.PositiveIntegerField(db_index=True, default=0, verbose_name='Порядок')),
                ('quiz', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='questions', to='quizzes.lecturequiz', verbose_name='Тест')),
            ],
            options={
                'verbose_name': 'Вопрос',
                'verbose_name_plural': 'Вопросы',
                'ordering': ['quiz', 'order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='QuizAttempt',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('student_name', models.CharField(max_length=150, verbose_name='Имя студента')),
                ('answers', models.JSONField(default=list, help_text='[{"question_id", "question", "selected_answer", "correct_answer", "is_correct"}]', verbose_name='Ответы')),
                ('score', models.PositiveIntegerField(verbose_name='Баллы')),
                ('total_questions', models.PositiveIntegerField(verbose_name='Всего вопросов')),
                ('correct_answers', models.PositiveIntegerField(verbose_name='Правильных ответов')),
                ('time_taken_seconds', models.PositiveIntegerField(default=0, verbose_name='Затрачено времени (секунды)')),
                ('submitted_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Дата сдачи')),
                ('course', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='quiz_attempts', to='content.course', verbose_name='Курс')),
                ('lecture', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='quiz_attempts', to='content.lecture', verbose_name='Лекция')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='quiz_attempts', to=settings.AUTH_USER_MODEL, verbose_name='Студент')),
            ],
            options={
                'verbose_name': 'Попытка прохождения теста',
                'verbose_name_plural': 'Попытки прохождения тестов',
                'ordering': ['-submitted_at'],
                'unique_together': {('student', 'lecture')},
            },
        ),
    ]
