from django.urls import path

from documents.views import (
    DocumentApproveView,
    DocumentHistoryView,
    DocumentLogsView,
    DocumentRejectView,
    DocumentUploadView,
    SignedFileView,
    StudentChecklistView,
    StudentDetailView,
    StudentExportView,
    StudentListView,
)

urlpatterns = [
    path('checklist/', StudentChecklistView.as_view(), name='document-checklist'),
    path('upload/', DocumentUploadView.as_view(), name='document-upload'),
    path('history/', DocumentHistoryView.as_view(), name='document-history'),
    path('<int:pk>/approve/', DocumentApproveView.as_view(), name='document-approve'),
    path('<int:pk>/reject/', DocumentRejectView.as_view(), name='document-reject'),
    path('<int:pk>/logs/', DocumentLogsView.as_view(), name='document-logs'),
    path('students/', StudentListView.as_view(), name='document-students'),
    path('students/<int:pk>/', StudentDetailView.as_view(), name='document-student-detail'),
    path('export/', StudentExportView.as_view(), name='document-export'),
    path('files/<str:token>/', SignedFileView.as_view(), name='document-file'),
]
