from django.urls import path
from . import api_views

app_name = 'content'

urlpatterns = [
    # Каталог и структура курса
    path('courses/', api_views.CourseListView.as_view(), name='api-course-list'),
    path('courses/<int:pk>/', api_views.CourseDetailView.as_view(), name='api-course-detail'),
    path('lectures/<int:pk>/', api_views.LectureDetailView.as_view(), name='api-lecture-detail'),
]
