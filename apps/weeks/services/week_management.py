"""
Week management service.

A week is five consecutive days starting on a Monday. Weeks never overlap,
finalize one way, and can only be deleted while they have no orders.
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Count

from apps.orders.services import format_date
from apps.weeks.models import Week

from .exceptions import (
    InvalidWeekStartError,
    WeekHasOrdersError,
    WeekNotFoundError,
    WeekOverlapError,
)

logger = logging.getLogger(__name__)

# Indexed by date.weekday()
WEEKDAY_NAMES = (
    'Thứ hai',
    'Thứ ba',
    'Thứ tư',
    'Thứ năm',
    'Thứ sáu',
    'Thứ bảy',
    'Chủ nhật',
)


def weekday_name(value: date) -> str:
    """Business-calendar name of the weekday, e.g. 'Thứ ba' for a Tuesday."""
    return WEEKDAY_NAMES[value.weekday()]


def _find_overlapping_week(start_date: date, end_date: date) -> Optional[Week]:
    return (
        Week.objects
        .filter(start_date__lte=end_date, end_date__gte=start_date)
        .order_by('start_date')
        .first()
    )


def get_week_by_id(*, week_id: UUID) -> Week:
    """
    Get a week by ID.

    Raises:
        WeekNotFoundError: If week doesn't exist
    """
    try:
        return Week.objects.get(id=week_id)
    except Week.DoesNotExist:
        raise WeekNotFoundError(f"Week with ID {week_id} not found")


def list_weeks():
    """All weeks, newest first, annotated with ``order_count``."""
    return Week.objects.annotate(order_count=Count('orders')).order_by('-start_date')


@transaction.atomic
def create_week(*, start_date: date, name: Optional[str] = None) -> Week:
    """
    Create a Monday-to-Friday week.

    Args:
        start_date: Must be a Monday
        name: Optional label; blank names are stored as None

    Returns:
        Created Week

    Raises:
        InvalidWeekStartError: If start_date is not a Monday
        WeekOverlapError: If the range overlaps an existing week
    """
    if start_date.weekday() != 0:
        found = weekday_name(start_date)
        raise InvalidWeekStartError(
            f"A week must start on Monday (Thứ hai). "
            f"{format_date(start_date)} is a {found}.",
            weekday_name=found,
        )

    end_date = Week.end_date_for(start_date)

    existing = _find_overlapping_week(start_date, end_date)
    if existing is not None:
        raise WeekOverlapError(
            f"This week overlaps an existing week "
            f"({format_date(existing.start_date)} - {format_date(existing.end_date)}).",
            existing=existing,
        )

    name = (name or '').strip() or None

    week = Week.objects.create(
        start_date=start_date,
        end_date=end_date,
        name=name,
    )
    logger.info("Week created: %s", week)
    return week


@transaction.atomic
def finalize_week(*, week_id: UUID) -> Week:
    """
    Finalize a week so it can be paid for.

    Finalizing twice keeps the first ``finalized_at``.

    Raises:
        WeekNotFoundError: If week doesn't exist
    """
    try:
        week = Week.objects.select_for_update().get(id=week_id)
    except Week.DoesNotExist:
        raise WeekNotFoundError(f"Week with ID {week_id} not found")

    if not week.is_finalized:
        week.finalize()
        logger.info("Week finalized: %s", week)

    return week


@transaction.atomic
def delete_week(*, week_id: UUID) -> None:
    """
    Delete a week without orders.

    Raises:
        WeekNotFoundError: If week doesn't exist
        WeekHasOrdersError: If the week has orders
    """
    try:
        week = Week.objects.select_for_update().get(id=week_id)
    except Week.DoesNotExist:
        raise WeekNotFoundError(f"Week with ID {week_id} not found")

    order_count = week.orders.count()
    if order_count > 0:
        raise WeekHasOrdersError(
            f"Cannot delete a week that has {order_count} orders.",
            order_count=order_count,
        )

    week.delete()
    logger.info("Week deleted: %s", week_id)
