from django.urls import path
from . import api_views

app_name = 'quizzes'

urlpatterns = [
    # История тестов
    path('quiz/attempts/', api_views.my_quiz_attempts, name='my_attempts'),

    # Отправить ответы
    path('quiz/<int:lecture_id>/', api_views.submit_quiz, name='submit_quiz'),

    # Статус и результат
    path('quiz/<int:lecture_id>/status/', api_views.quiz_status, name='quiz_status'),
    path('quiz/<int:lecture_id>/result/', api_views.quiz_result, name='quiz_result'),
]
