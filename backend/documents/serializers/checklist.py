from rest_framework import serializers

from academics.serializers import StudentProfileSerializer
from research.serializers import ResearchDetailsSerializer
from .document import signed_url_or_none


class ChecklistRowSerializer(serializers.Serializer):
    item_id = serializers.IntegerField()
    title = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    is_required = serializers.BooleanField()
    order_index = serializers.IntegerField()
    status = serializers.CharField()
    version = serializers.IntegerField()
    remarks = serializers.CharField(allow_null=True)
    document_id = serializers.IntegerField(allow_null=True)
    submission_date = serializers.DateTimeField(allow_null=True)
    file_url = serializers.SerializerMethodField()

    def get_file_url(self, row):
        return signed_url_or_none(row.file_path)


class StudentSummarySerializer(serializers.Serializer):
    approved = serializers.IntegerField()
    pending = serializers.IntegerField()
    rejected = serializers.IntegerField()
    missing = serializers.IntegerField()
    total = serializers.IntegerField()
    required = serializers.IntegerField()
    completion_percentage = serializers.IntegerField()
    status_label = serializers.CharField()


class StudentOverviewRowSerializer(serializers.Serializer):
    profile_id = serializers.IntegerField()
    user_id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.EmailField()
    registration_number = serializers.CharField(allow_null=True)
    program = serializers.CharField(allow_null=True)
    department = serializers.CharField(allow_blank=True)
    batch = serializers.CharField(allow_null=True)
    account_status = serializers.CharField()
    status_label = serializers.CharField()
    missing = serializers.IntegerField()
    completion_percentage = serializers.IntegerField()
    avatar_url = serializers.CharField(allow_null=True)


class StudentOverviewSerializer(serializers.Serializer):
    students = StudentOverviewRowSerializer(many=True)
    pending_accounts = StudentOverviewRowSerializer(many=True)
    totals = serializers.DictField(child=serializers.IntegerField())


class StudentQuickViewSerializer(serializers.Serializer):
    profile = serializers.SerializerMethodField()
    rows = ChecklistRowSerializer(many=True)
    summary = StudentSummarySerializer()
    avatar_url = serializers.CharField(allow_null=True)
    research = ResearchDetailsSerializer(allow_null=True)

    def get_profile(self, obj):
        return StudentProfileSerializer(obj.profile).data
