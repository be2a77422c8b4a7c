"""
Payment memo format.

The memo (``vnp_OrderInfo``) is the only link between a bank transfer and
the ledger. Its format is ``"<name> tien com <dd/mm/yyyy>"``, where the date
is the start of the week being paid for. The builder and the parser live
together so the two cannot drift apart.
"""

from dataclasses import dataclass
from datetime import date

from apps.orders.services import format_date

from .exceptions import MemoDateError, MemoFormatError

MARKER = 'tien com'


def build_memo(member_name: str, week_start: date) -> str:
    """
    Example:
        >>> build_memo('Nguyen Van A', date(2026, 1, 12))
        'Nguyen Van A tien com 12/01/2026'
    """
    return f"{member_name.strip()} {MARKER} {format_date(week_start)}"


@dataclass(frozen=True)
class ParsedMemo:
    member_name: str
    week_start: date


class MemoParser:
    """
    Split a memo into payer name and week start date.

    The marker is matched case-insensitively; the name keeps its case.
    """

    marker = MARKER

    def split(self, memo: str):
        """Return (name, date_text) or None when the marker is absent."""
        memo = (memo or '').strip()
        index = memo.lower().find(self.marker)
        if index == -1:
            return None
        name = memo[:index].strip()
        date_text = memo[index + len(self.marker):].strip()
        return name, date_text

    def parse_date(self, text: str) -> date:
        parts = text.split('/')
        if len(parts) != 3:
            raise MemoDateError(f"Invalid date format: '{text}'")
        try:
            day, month, year = (int(part) for part in parts)
        except ValueError:
            raise MemoDateError(f"Invalid date format: '{text}'")
        if not day or not month or not year:
            raise MemoDateError(f"Invalid date format: '{text}'")
        try:
            return date(year, month, day)
        except ValueError:
            raise MemoDateError(f"Invalid date: '{text}'")

    def parse(self, memo: str) -> ParsedMemo:
        """
        Raises:
            MemoFormatError: If the marker or the name is missing
            MemoDateError: If the date is not a valid dd/mm/yyyy date
        """
        parts = self.split(memo)
        if parts is None:
            raise MemoFormatError('Invalid order info format')
        name, date_text = parts
        if not name:
            raise MemoFormatError('Invalid order info format: missing payer name')
        return ParsedMemo(member_name=name, week_start=self.parse_date(date_text))
