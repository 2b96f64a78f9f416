from rest_framework import serializers

from .models import ResearchDetails


class ResearchDetailsSerializer(serializers.ModelSerializer):
    class Meta:
        model = ResearchDetails
        fields = ('id', 'title', 'abstract', 'supervisor_name', 'co_supervisor_name', 'keywords', 'status', 'updated_at')
        read_only_fields = ('id', 'status', 'updated_at')


class ResearchDetailsInputSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=500, allow_blank=True)
    abstract = serializers.CharField(required=False, allow_blank=True)
    supervisor_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    co_supervisor_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    # comma separated string or list of strings
    keywords = serializers.JSONField(required=False)
