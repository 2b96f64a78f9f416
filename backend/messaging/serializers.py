from rest_framework import serializers

from documents.serializers.document import signed_url_or_none
from .models import Message


class MessageSerializer(serializers.ModelSerializer):
    # attachments are private; the link is a signed, expiring download url
    file_url = serializers.SerializerMethodField()

    class Meta:
        model = Message
        fields = ('id', 'sender_id', 'receiver_id', 'content', 'file_url', 'file_name', 'file_size', 'created_at')

    def get_file_url(self, obj):
        return signed_url_or_none(obj.file_path)


class SendMessageSerializer(serializers.Serializer):
    receiver = serializers.IntegerField()
    content = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)
    file = serializers.FileField(required=False, allow_empty_file=False)


class ConversationSummarySerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    full_name = serializers.CharField()
    email = serializers.EmailField()
    last_message = serializers.CharField(allow_null=True)
    last_message_time = serializers.DateTimeField(allow_null=True)
