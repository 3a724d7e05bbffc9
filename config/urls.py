# config/urls.py

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from django.views.generic import RedirectView

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Home
    path('', RedirectView.as_view(pattern_name='dashboard', permanent=False), name='home'),

    # App URLs
    path('', include('apps.accounts.urls')),
    path('hierarchy/', include('apps.hierarchy.urls')),

    # API URLs
    path('api/v1/', include('api.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
