from rest_framework import serializers
from apps.members.serializers import MemberInputSerializer


class IntentSerializer(serializers.Serializer):
    intent = serializers.CharField()


# =============================================================================
# One serializer per intent
# =============================================================================

class CreateWeekCommandSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    name = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)


class WeekCommandSerializer(serializers.Serializer):
    """finalize-week and delete-week"""

    week_id = serializers.UUIDField()


class CreateMembersCommandSerializer(serializers.Serializer):
    members = MemberInputSerializer(many=True, allow_empty=True)


class UpdateMemberCommandSerializer(serializers.Serializer):
    member_id = serializers.UUIDField()
    name = serializers.CharField(max_length=100)
    email = serializers.EmailField(max_length=255, required=False, allow_blank=True, allow_null=True)


class DeleteMemberCommandSerializer(serializers.Serializer):
    member_id = serializers.UUIDField()


class UpdatePaymentCommandSerializer(serializers.Serializer):
    member_id = serializers.UUIDField()
    week_id = serializers.UUIDField()
    paid = serializers.BooleanField()
