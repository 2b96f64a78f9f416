from django.urls import path

from .views import BatchListView, ProgramChecklistView, ProgramListView

urlpatterns = [
    path('programs/', ProgramListView.as_view()),
    path('programs/<int:pk>/checklist/', ProgramChecklistView.as_view()),
    path('batches/', BatchListView.as_view()),
]
