from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions_api import IsCoordinator
from .serializers import ReportResultSerializer
from .services.aggregator import HEADERS, build_report
from .services.exporters import export_response


def _filters(request):
    return {
        'program': request.query_params.get('program') or None,
        'status': request.query_params.get('status') or None,
    }


class ReportView(APIView):
    permission_classes = (IsAuthenticated, IsCoordinator)

    def get(self, request):
        filters = _filters(request)
        result = build_report(request.user, program_filter=filters['program'], status_filter=filters['status'])
        return Response(ReportResultSerializer(result).data)


class ReportExportView(APIView):
    permission_classes = (IsAuthenticated, IsCoordinator)

    def get(self, request):
        filters = _filters(request)
        result = build_report(request.user, program_filter=filters['program'], status_filter=filters['status'])
        return export_response(
            request.query_params.get('format', 'pdf'),
            'research_report',
            HEADERS,
            [row.as_table_row() for row in result.rows],
            title='Research Progress Report',
            summary=result.summary(),
            filters=filters,
            breakdowns={
                'Program Distribution': result.program_distribution,
                'Status Distribution': result.status_distribution,
            },
        )
