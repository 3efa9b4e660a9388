"""
Serializers for recruitment models.
Their output is what the redaction filter projects, so client fields keep
the names listed in redaction.CLIENT_IDENTIFYING_FIELDS.
"""
from rest_framework import serializers

from core.access_control.catalog import RoleTypes
from .models import Client, Job, JobAssignment


class ClientSerializer(serializers.ModelSerializer):
    """Serializer for Client model."""

    class Meta:
        model = Client
        fields = [
            'id', 'name', 'contact_name', 'email', 'phone', 'address',
            'industry', 'notes', 'status', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'status', 'created_at', 'updated_at']


class ClientSummarySerializer(serializers.ModelSerializer):
    """Client block embedded in job payloads."""

    class Meta:
        model = Client
        fields = ['id', 'name', 'contact_name', 'email', 'phone', 'address']
        read_only_fields = fields


class JobSerializer(serializers.ModelSerializer):
    """Serializer for Job model with the client embedded."""
    client = ClientSummarySerializer(read_only=True)
    client_id = serializers.PrimaryKeyRelatedField(
        queryset=Client.objects.active(),
        source='client',
        write_only=True
    )

    class Meta:
        model = Job
        fields = [
            'id', 'title', 'description', 'location', 'status',
            'client', 'client_id', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class JobAssignmentSerializer(serializers.ModelSerializer):
    """Serializer for handing jobs to external recruiters."""
    user_email = serializers.CharField(source='user.email', read_only=True)
    job_title = serializers.CharField(source='job.title', read_only=True)
    assigned_by_email = serializers.CharField(source='assigned_by.email', read_only=True, default=None)

    class Meta:
        model = JobAssignment
        fields = ['id', 'user', 'user_email', 'job', 'job_title', 'assigned_by_email', 'assigned_at']
        read_only_fields = ['id', 'assigned_at']

    def validate_user(self, value):
        """Only external recruiters receive job assignments."""
        if not value.user_roles.filter(
            role__role_type=RoleTypes.EXTERNAL_RECRUITER,
            role__status='active'
        ).exists():
            raise serializers.ValidationError(
                f"User {value.email} is not an external recruiter"
            )
        return value

    def validate_job(self, value):
        if value.status == Job.JobStatus.CLOSED:
            raise serializers.ValidationError("Closed jobs cannot be assigned")
        return value

    def create(self, validated_data):
        request = self.context.get('request')
        validated_data['assigned_by'] = request.user if request else None
        return super().create(validated_data)
