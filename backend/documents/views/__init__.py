# views package for documents
from .document_views import (
    DocumentApproveView,
    DocumentHistoryView,
    DocumentLogsView,
    DocumentRejectView,
    DocumentUploadView,
    StudentChecklistView,
)
from .student_views import StudentDetailView, StudentExportView, StudentListView
from .file_views import SignedFileView
