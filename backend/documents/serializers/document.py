import logging

from rest_framework import serializers

from academics.models import ChecklistItem
from rdms.exceptions import BackendError
from documents.models import DocumentLog, StudentDocument
from documents.services import storage

logger = logging.getLogger(__name__)


def signed_url_or_none(path):
    if not path:
        return None
    try:
        return storage.create_signed_url(path)
    except BackendError as exc:
        logger.debug('no signed url for %s: %s', path, exc)
        return None


class StudentDocumentSerializer(serializers.ModelSerializer):
    checklist_item_id = serializers.IntegerField(read_only=True)
    checklist_item_title = serializers.CharField(source='checklist_item.title', read_only=True)
    status = serializers.CharField(source='effective_status', read_only=True)
    file_url = serializers.SerializerMethodField()

    class Meta:
        model = StudentDocument
        fields = (
            'id', 'checklist_item_id', 'checklist_item_title', 'title', 'status', 'version',
            'remarks', 'file_url', 'submission_date', 'created_at', 'updated_at',
        )

    def get_file_url(self, obj):
        return signed_url_or_none(obj.file_path)


class DocumentLogSerializer(serializers.ModelSerializer):
    changed_by_id = serializers.IntegerField(read_only=True)
    changed_by_name = serializers.SerializerMethodField()

    class Meta:
        model = DocumentLog
        fields = ('id', 'document_id', 'old_status', 'new_status', 'changed_by_id', 'changed_by_name', 'remarks', 'created_at')

    def get_changed_by_name(self, obj):
        if obj.changed_by is None:
            return None
        return obj.changed_by.display_name()


class DocumentUploadSerializer(serializers.Serializer):
    checklist_item = serializers.PrimaryKeyRelatedField(queryset=ChecklistItem.objects.select_related('program'))
    file = serializers.FileField(allow_empty_file=False)


class DocumentRejectSerializer(serializers.Serializer):
    # blank is checked by the service so the message is the same everywhere
    remarks = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False, default='')
