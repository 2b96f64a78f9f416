from django.urls import path

from .views import ResearchDetailsView

urlpatterns = [
    path('', ResearchDetailsView.as_view(), name='research-details'),
]
