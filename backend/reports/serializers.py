from rest_framework import serializers


class ReportRowSerializer(serializers.Serializer):
    student_id = serializers.IntegerField()
    name = serializers.CharField()
    registration_number = serializers.CharField(allow_null=True)
    program = serializers.CharField()
    total = serializers.IntegerField()
    approved = serializers.IntegerField()
    pending = serializers.IntegerField()
    rejected = serializers.IntegerField()
    required_count = serializers.IntegerField()
    status_label = serializers.CharField()


class ReportResultSerializer(serializers.Serializer):
    rows = ReportRowSerializer(many=True)
    total_students = serializers.IntegerField()
    active = serializers.IntegerField()
    completed = serializers.IntegerField()
    program_distribution = serializers.DictField(child=serializers.IntegerField())
    status_distribution = serializers.DictField(child=serializers.IntegerField())
    document_totals = serializers.DictField(child=serializers.IntegerField())
