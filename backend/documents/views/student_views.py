from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions_api import IsCoordinator
from documents.serializers import StudentOverviewSerializer, StudentQuickViewSerializer
from documents.services.student_overview import student_overview, student_quick_view
from reports.services.exporters import export_response

EXPORT_HEADERS = ('Name', 'Email', 'Reg No', 'Program', 'Dept', 'Status', 'Missing docs')


class StudentListView(APIView):
    """Coordinator dashboard table with totals."""

    permission_classes = (IsAuthenticated, IsCoordinator)

    def get(self, request):
        overview = student_overview(request.user)
        return Response(StudentOverviewSerializer(overview).data)


class StudentDetailView(APIView):
    permission_classes = (IsAuthenticated,)

    def get(self, request, pk):
        quick_view = student_quick_view(request.user, pk)
        return Response(StudentQuickViewSerializer(quick_view).data)


class StudentExportView(APIView):
    permission_classes = (IsAuthenticated, IsCoordinator)

    def get(self, request):
        overview = student_overview(request.user)
        rows = [
            (s.name, s.email, s.registration_number or '', s.program or '', s.department, s.status_label, s.missing)
            for s in overview.students
        ]
        return export_response(
            request.query_params.get('format', 'pdf'),
            'students',
            EXPORT_HEADERS,
            rows,
            title='Student Document Status',
            summary={
                'Total students': overview.totals.get('total_students', 0),
                'Pending reviews': overview.totals.get('pending_reviews', 0),
                'Incomplete': overview.totals.get('incomplete', 0),
                'Complete': overview.totals.get('complete', 0),
            },
        )
