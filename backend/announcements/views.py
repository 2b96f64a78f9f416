from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions_api import IsCoordinator
from .serializers import AnnouncementSerializer
from .services import create_announcement, delete_announcement, list_announcements


class AnnouncementListCreateView(APIView):
    permission_classes = (IsAuthenticated,)

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticated(), IsCoordinator()]
        return super().get_permissions()

    def get(self, request):
        result = list_announcements(request.user)
        if not result.ok:
            return Response({'detail': result.error}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response(AnnouncementSerializer(result.items, many=True).data)

    def post(self, request):
        ser = AnnouncementSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        announcement = create_announcement(
            request.user,
            ser.validated_data.get('title'),
            ser.validated_data.get('content'),
            ser.validated_data.get('is_pinned', False),
        )
        return Response(AnnouncementSerializer(announcement).data, status=status.HTTP_201_CREATED)


class AnnouncementDetailView(APIView):
    permission_classes = (IsAuthenticated, IsCoordinator)

    def delete(self, request, pk):
        delete_announcement(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
