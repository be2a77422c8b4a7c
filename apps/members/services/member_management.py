"""
Member management service.

Handles member CRUD operations. Names are unique case-insensitively because
payment memos identify the payer by name.
"""

from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Count, DecimalField, Sum, Value
from django.db.models.functions import Coalesce

from apps.members.models import Member

from .exceptions import (
    DuplicateMemberError,
    MemberHasChargesError,
    MemberNotFoundError,
    MemberValidationError,
)

MEMBER_ORDERINGS = {'order_count', 'total_amount', 'name'}


def _clean_name(name: Optional[str]) -> str:
    name = (name or '').strip()
    if not name:
        raise MemberValidationError("Member name must not be empty")
    return name


def _clean_email(email: Optional[str]) -> Optional[str]:
    email = (email or '').strip()
    return email or None


def find_member_by_name(name: str) -> Optional[Member]:
    """Case-insensitive exact-name lookup. Returns None if absent."""
    name = (name or '').strip()
    if not name:
        return None
    return Member.objects.filter(name_normalized=Member.normalize_name(name)).first()


def get_member_by_id(*, member_id: UUID) -> Member:
    """
    Get a member by ID.

    Raises:
        MemberNotFoundError: If member doesn't exist
    """
    try:
        return Member.objects.get(id=member_id)
    except Member.DoesNotExist:
        raise MemberNotFoundError(f"Member with ID {member_id} not found")


@transaction.atomic
def create_members(*, members: Iterable[dict]) -> List[Member]:
    """
    Create several members at once.

    Args:
        members: Dicts with ``name`` and optional ``email``. Entries with a
            blank name are skipped.

    Returns:
        Created Member instances, in input order

    Raises:
        MemberValidationError: If no entry has a name
        DuplicateMemberError: If a name already exists or repeats in the batch
    """
    cleaned = []
    for entry in members:
        name = (entry.get('name') or '').strip()
        if name:
            cleaned.append((name, _clean_email(entry.get('email'))))

    if not cleaned:
        raise MemberValidationError("Enter at least one member")

    seen = set()
    repeated = []
    for name, _ in cleaned:
        key = Member.normalize_name(name)
        if key in seen:
            repeated.append(name)
        seen.add(key)
    if repeated:
        raise DuplicateMemberError(
            f"Member names are repeated: {', '.join(repeated)}",
            names=repeated,
        )

    existing = list(
        Member.objects.filter(name_normalized__in=seen).values_list('name', flat=True)
    )
    if existing:
        raise DuplicateMemberError(
            f"Member names already exist: {', '.join(existing)}",
            names=existing,
        )

    return [
        Member.objects.create(name=name, email=email)
        for name, email in cleaned
    ]


def create_member(*, name: str, email: Optional[str] = None) -> Member:
    """Create a single member. See create_members for errors."""
    return create_members(members=[{'name': name, 'email': email}])[0]


@transaction.atomic
def update_member(*, member_id: UUID, name: str, email: Optional[str] = None) -> Member:
    """
    Rename a member and/or change their email.

    Raises:
        MemberNotFoundError: If member doesn't exist
        MemberValidationError: If name is blank
        DuplicateMemberError: If another member already has the name
    """
    name = _clean_name(name)

    try:
        member = Member.objects.select_for_update().get(id=member_id)
    except Member.DoesNotExist:
        raise MemberNotFoundError(f"Member with ID {member_id} not found")

    if Member.objects.filter(name_normalized=Member.normalize_name(name)).exclude(id=member.id).exists():
        raise DuplicateMemberError("Member name already exists", names=[name])

    member.name = name
    member.email = _clean_email(email)
    member.save(update_fields=['name', 'name_normalized', 'email', 'updated_at'])

    return member


@transaction.atomic
def delete_member(*, member_id: UUID) -> None:
    """
    Delete a member who has never been charged.

    Raises:
        MemberNotFoundError: If member doesn't exist
        MemberHasChargesError: If member owns any order lines
    """
    try:
        member = Member.objects.select_for_update().get(id=member_id)
    except Member.DoesNotExist:
        raise MemberNotFoundError(f"Member with ID {member_id} not found")

    item_count = member.order_items.count()
    if item_count > 0:
        raise MemberHasChargesError(
            "Cannot delete a member who already has orders",
            item_count=item_count,
        )

    member.delete()


@transaction.atomic
def get_or_create_member(*, name: str) -> tuple:
    """
    Look up a member by name, creating one if none matches.

    Returns:
        (Member, created) tuple

    Raises:
        MemberValidationError: If name is blank
    """
    name = _clean_name(name)
    member = find_member_by_name(name)
    if member is not None:
        return member, False
    return Member.objects.create(name=name), True


def list_members_with_stats(*, ordering: str = '-order_count'):
    """
    Members annotated with ``order_count`` (lines) and ``total_amount``.

    Args:
        ordering: One of order_count, total_amount, name; prefix with '-'
            for descending.
    """
    field = ordering.lstrip('-')
    if field not in MEMBER_ORDERINGS:
        raise MemberValidationError(f"Invalid ordering: {ordering}")

    queryset = Member.objects.annotate(
        order_count=Count('order_items'),
        total_amount=Coalesce(
            Sum('order_items__final_price'),
            Value(Decimal('0.00')),
            output_field=DecimalField(max_digits=14, decimal_places=2),
        ),
    )
    return queryset.order_by(ordering, 'name')
