from rest_framework import serializers

from .models import Batch, ChecklistItem, Program, StudentProfile


class ProgramSerializer(serializers.ModelSerializer):
    class Meta:
        model = Program
        fields = ('id', 'name', 'type')


class BatchSerializer(serializers.ModelSerializer):
    class Meta:
        model = Batch
        fields = ('id', 'name')


class ChecklistItemSerializer(serializers.ModelSerializer):
    program_id = serializers.IntegerField(source='program.id', read_only=True)

    class Meta:
        model = ChecklistItem
        fields = ('id', 'program_id', 'title', 'description', 'is_required', 'order_index')


class StudentProfileSerializer(serializers.ModelSerializer):
    full_name = serializers.SerializerMethodField()
    email = serializers.EmailField(source='user.email', read_only=True)
    program = ProgramSerializer(read_only=True)
    batch = BatchSerializer(read_only=True)
    coordinator_id = serializers.IntegerField(source='coordinator.id', read_only=True, default=None)

    class Meta:
        model = StudentProfile
        fields = (
            'id', 'full_name', 'email', 'registration_number', 'department',
            'program', 'batch', 'coordinator_id', 'status', 'created_at',
        )

    def get_full_name(self, obj):
        return obj.user.display_name()
