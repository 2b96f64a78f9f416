from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions_api import IsCoordinator
from .serializers import ConversationSummarySerializer, MessageSerializer, SendMessageSerializer
from .services import conversation, conversations, send_message


def _int_param(request, name, required=False):
    raw = request.query_params.get(name)
    if raw in (None, ''):
        if required:
            raise ValidationError({name: 'This parameter is required.'})
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError({name: 'Must be an integer.'})


class MessageListCreateView(APIView):
    permission_classes = (IsAuthenticated,)
    parser_classes = (MultiPartParser, FormParser, JSONParser)

    def get(self, request):
        other = _int_param(request, 'with', required=True)
        after = _int_param(request, 'after')
        result = conversation(request.user, other, after_id=after)
        if not result.ok:
            return Response({'detail': result.error}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response(MessageSerializer(result.items, many=True).data)

    def post(self, request):
        ser = SendMessageSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        message = send_message(
            request.user,
            ser.validated_data['receiver'],
            ser.validated_data.get('content', ''),
            ser.validated_data.get('file'),
        )
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


class ConversationListView(APIView):
    permission_classes = (IsAuthenticated, IsCoordinator)

    def get(self, request):
        return Response(ConversationSummarySerializer(conversations(request.user), many=True).data)
