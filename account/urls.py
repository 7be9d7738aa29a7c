from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView, TokenBlacklistView
from .views import (
    RegisterView,
    LoginView,
    UserProfileView,
)

app_name = 'account'

urlpatterns = [
    # Регистрация и авторизация
    path('register/', RegisterView.as_view(), name='register'),
    path('login/', LoginView.as_view(), name='login'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('logout/', TokenBlacklistView.as_view(), name='token-blacklist'),

    # Профиль пользователя
    path('profile/', UserProfileView.as_view(), name='profile'),
]
