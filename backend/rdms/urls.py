from django.urls import path, include
from django.contrib import admin
from django.views.generic import RedirectView
from django.http import HttpResponse
import rdms.admin_customization  # noqa: F401

# Uploaded files are never served from MEDIA_URL; downloads go through
# signed links (`documents.views.file_views.SignedFileView`).
urlpatterns = [
    path('', RedirectView.as_view(url='/admin/', permanent=False)),
    path('favicon.ico', lambda request: HttpResponse(status=204), name='favicon'),
    path('admin/', admin.site.urls),
    path('api/accounts/', include('accounts.urls')),
    path('api/academics/', include('academics.urls')),
    path('api/documents/', include('documents.urls')),
    path('api/messages/', include('messaging.urls')),
    path('api/announcements/', include('announcements.urls')),
    path('api/research/', include('research.urls')),
    path('api/reports/', include('reports.urls')),
]
