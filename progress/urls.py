from django.urls import path
from . import api_views

app_name = 'progress'

urlpatterns = [
    # Зачисление
    path('enroll/<int:course_id>/', api_views.EnrollView.as_view(), name='api-enroll'),
    path('my-courses/', api_views.MyCoursesView.as_view(), name='api-my-courses'),

    # Прогресс просмотра
    path('progress/save/', api_views.SaveProgressView.as_view(), name='api-save-progress'),
    path('progress/course/<int:course_id>/', api_views.CourseProgressView.as_view(), name='api-course-progress'),
]
