from django.shortcuts import get_object_or_404
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Batch, Program
from .serializers import BatchSerializer, ChecklistItemSerializer, ProgramSerializer


class ProgramListView(APIView):
    """Programs offered; public so the registration form can list them."""

    permission_classes = (AllowAny,)

    def get(self, request):
        return Response(ProgramSerializer(Program.objects.all(), many=True).data)


class BatchListView(APIView):
    permission_classes = (AllowAny,)

    def get(self, request):
        return Response(BatchSerializer(Batch.objects.all(), many=True).data)


class ProgramChecklistView(APIView):
    permission_classes = (IsAuthenticated,)

    def get(self, request, pk):
        program = get_object_or_404(Program, pk=pk)
        items = program.checklist_items.all().order_by('order_index', 'id')
        return Response(ChecklistItemSerializer(items, many=True).data)
