from .document import (
    DocumentLogSerializer,
    DocumentRejectSerializer,
    DocumentUploadSerializer,
    StudentDocumentSerializer,
)
from .checklist import (
    ChecklistRowSerializer,
    StudentOverviewSerializer,
    StudentQuickViewSerializer,
    StudentSummarySerializer,
)
