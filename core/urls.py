import logging

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

logger = logging.getLogger(__name__)
logger.info("Admin URL: /%s/", settings.ADMIN_URL)

urlpatterns = [
    path(f'{settings.ADMIN_URL}/', admin.site.urls),

    # API документация
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),

    # API endpoints
    path('api/account/', include('account.urls')),
    path('api/', include('content.urls')),

    # Кабинет студента
    path('api/student/', include('quizzes.urls')),
    path('api/student/', include('assignments.urls')),
    path('api/student/', include('progress.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)

# Silk
if getattr(settings, 'SILK_ENABLED', False):
    urlpatterns += [
        path('silk/', include('silk.urls', namespace='silk')),
    ]
