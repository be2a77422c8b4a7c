"""Command handlers. Each one calls the same service as its REST endpoint."""

from apps.members.serializers import MemberSerializer
from apps.members.services import (
    create_members,
    delete_member,
    get_member_by_id,
    update_member,
)
from apps.weeks.serializers import PaymentStatusSerializer, WeekSerializer
from apps.weeks.services import (
    create_week,
    delete_week,
    finalize_week,
    get_week_by_id,
    set_payment_status,
)

from .dispatcher import CommandDispatcher
from .serializers import (
    CreateMembersCommandSerializer,
    CreateWeekCommandSerializer,
    DeleteMemberCommandSerializer,
    UpdateMemberCommandSerializer,
    UpdatePaymentCommandSerializer,
    WeekCommandSerializer,
)

dispatcher = CommandDispatcher()


def validated(serializer_class):
    def validate(payload):
        serializer = serializer_class(data=payload)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data
    return validate


# Weeks

@dispatcher.register('create-week', validate=validated(CreateWeekCommandSerializer))
def handle_create_week(data):
    week = create_week(start_date=data['start_date'], name=data.get('name'))
    return {'success': True, 'week': WeekSerializer(week).data}


@dispatcher.register('finalize-week', validate=validated(WeekCommandSerializer))
def handle_finalize_week(data):
    week = finalize_week(week_id=data['week_id'])
    return {'success': True, 'week': WeekSerializer(week).data}


@dispatcher.register('delete-week', validate=validated(WeekCommandSerializer))
def handle_delete_week(data):
    delete_week(week_id=data['week_id'])
    return {'success': True}


# Members

@dispatcher.register('create-members', validate=validated(CreateMembersCommandSerializer))
def handle_create_members(data):
    members = create_members(members=data['members'])
    return {'success': True, 'members': MemberSerializer(members, many=True).data}


@dispatcher.register('update-member', validate=validated(UpdateMemberCommandSerializer))
def handle_update_member(data):
    member = update_member(
        member_id=data['member_id'],
        name=data['name'],
        email=data.get('email'),
    )
    return {'success': True, 'member': MemberSerializer(member).data}


@dispatcher.register('delete-member', validate=validated(DeleteMemberCommandSerializer))
def handle_delete_member(data):
    delete_member(member_id=data['member_id'])
    return {'success': True}


# Payments

@dispatcher.register('update-payment', validate=validated(UpdatePaymentCommandSerializer))
def handle_update_payment(data):
    member = get_member_by_id(member_id=data['member_id'])
    week = get_week_by_id(week_id=data['week_id'])
    payment = set_payment_status(member=member, week=week, paid=data['paid'])
    return {'success': True, 'payment': PaymentStatusSerializer(payment).data}
