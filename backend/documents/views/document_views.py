from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from academics.serializers import StudentProfileSerializer
from academics.services import get_or_provision_student_profile
from accounts.permissions_api import IsCoordinator, IsStudent
from documents.models import StudentDocument
from documents.serializers import (
    ChecklistRowSerializer,
    DocumentLogSerializer,
    DocumentRejectSerializer,
    DocumentUploadSerializer,
    StudentDocumentSerializer,
    StudentSummarySerializer,
)
from documents.services import checklist_resolver, document_service
from rdms.exceptions import BackendError


class StudentChecklistView(APIView):
    """Student dashboard: checklist rows, summary and avatar."""

    permission_classes = (IsAuthenticated, IsStudent)

    def get(self, request):
        profile = get_or_provision_student_profile(request.user)
        rows, summary = checklist_resolver.build_student_checklist(profile)
        try:
            avatar_url = checklist_resolver.resolve_avatar_url(rows)
        except BackendError:
            avatar_url = None
        return Response({
            'profile': StudentProfileSerializer(profile).data,
            'rows': ChecklistRowSerializer(rows, many=True).data,
            'summary': StudentSummarySerializer(summary).data,
            'avatar_url': avatar_url,
        })


class DocumentUploadView(APIView):
    permission_classes = (IsAuthenticated, IsStudent)
    parser_classes = (MultiPartParser, FormParser)

    def post(self, request):
        ser = DocumentUploadSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        document = document_service.upload_document(
            request.user,
            ser.validated_data['checklist_item'],
            ser.validated_data['file'],
        )
        return Response(StudentDocumentSerializer(document).data, status=status.HTTP_201_CREATED)


class DocumentHistoryView(APIView):
    """The student's submissions, newest first."""

    permission_classes = (IsAuthenticated, IsStudent)

    def get(self, request):
        result = document_service.list_my_documents(request.user)
        if not result.ok:
            return Response({'detail': result.error}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response(StudentDocumentSerializer(result.items, many=True).data)


class DocumentApproveView(APIView):
    permission_classes = (IsAuthenticated, IsCoordinator)

    def post(self, request, pk):
        document = document_service.approve_document(request.user, pk)
        return Response(StudentDocumentSerializer(document).data)


class DocumentRejectView(APIView):
    permission_classes = (IsAuthenticated, IsCoordinator)

    def post(self, request, pk):
        ser = DocumentRejectSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        document = document_service.reject_document(request.user, pk, ser.validated_data.get('remarks'))
        return Response(StudentDocumentSerializer(document).data)


class DocumentLogsView(APIView):
    permission_classes = (IsAuthenticated,)

    def get(self, request, pk):
        document = get_object_or_404(StudentDocument.objects.select_related('student'), pk=pk)
        logs = document_service.document_history(request.user, document)
        return Response(DocumentLogSerializer(logs, many=True).data)
