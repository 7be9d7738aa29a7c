import django.db.models.deletion
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
            name='LectureProgress',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('watch_time', models.FloatField(default=0, verbose_name='Просмотрено (секунды)')),
                ('duration', models.FloatField(default=0, verbose_name='Длительность видео (секунды)')),
                ('completed', models.BooleanField(db_index=True, default=False, verbose_name='Завершено')),
                ('last_updated', models.DateTimeField(auto_now=True, verbose_name='Последний просмотр')),
                ('course', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lecture_progress', to='content.course', verbose_name='Курс')),
                ('lecture', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='progress_records', to='content.lecture', verbose_name='Лекция')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lecture_progress', to=settings.AUTH_USER_MODEL, verbose_name='Пользователь')),
            ],
            options={
                'verbose_name': 'Прогресс лекции',
                'verbose_name_plural': 'Прогресс лекций',
                'ordering': ['lecture__order', 'id'],
                'indexes': [models.Index(fields=['user', 'course'], name='progress_le_user_id_3c5e2a_idx')],
                'unique_together': {('user', 'lecture')},
            },
        ),
    ]
