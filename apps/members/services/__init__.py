"""
Members app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    MembersServiceError,
    MemberValidationError,
    MemberNotFoundError,
    DuplicateMemberError,
    MemberHasChargesError,
)

from .member_management import (
    create_member,
    create_members,
    update_member,
    delete_member,
    get_member_by_id,
    find_member_by_name,
    get_or_create_member,
    list_members_with_stats,
)


__all__ = [
    # Exceptions
    'MembersServiceError',
    'MemberValidationError',
    'MemberNotFoundError',
    'DuplicateMemberError',
    'MemberHasChargesError',

    # Member Management
    'create_member',
    'create_members',
    'update_member',
    'delete_member',
    'get_member_by_id',
    'find_member_by_name',
    'get_or_create_member',
    'list_members_with_stats',
]
