from django.urls import path
from . import api_views

app_name = 'assignments'

urlpatterns = [
    # Сдача и список
    path('assignments/submit/', api_views.submit_assignment, name='submit'),
    path('assignments/my-submissions/', api_views.my_submissions, name='my_submissions'),

    # Статус по лекции
    path('assignments/<int:lecture_id>/status/', api_views.assignment_status, name='status'),

    # Удаление своей работы
    path('assignments/<int:submission_id>/', api_views.delete_submission, name='delete_submission'),

    # Проверка (преподаватель)
    path('assignments/submissions/<int:submission_id>/grade/', api_views.grade_submission, name='grade'),
]
