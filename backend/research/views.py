from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions_api import IsStudent
from .serializers import ResearchDetailsInputSerializer, ResearchDetailsSerializer
from .services import get_research_details, upsert_research_details


class ResearchDetailsView(APIView):
    permission_classes = (IsAuthenticated, IsStudent)

    def get(self, request):
        details = get_research_details(request.user)
        if details is None:
            return Response(None)
        return Response(ResearchDetailsSerializer(details).data)

    def put(self, request):
        ser = ResearchDetailsInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        details = upsert_research_details(request.user, ser.validated_data)
        return Response(ResearchDetailsSerializer(details).data)
