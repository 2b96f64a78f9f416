from rest_framework import serializers

from .models import Announcement


class AnnouncementSerializer(serializers.ModelSerializer):
    created_by_name = serializers.SerializerMethodField()

    class Meta:
        model = Announcement
        fields = ('id', 'title', 'content', 'is_pinned', 'created_by', 'created_by_name', 'created_at')
        read_only_fields = ('id', 'created_by', 'created_by_name', 'created_at')

    def get_created_by_name(self, obj):
        if obj.created_by is None:
            return None
        return obj.created_by.display_name()
