"""
Payment URL and signature builder.

The gateway recomputes the signature from the query it receives, so the
canonical form has to match byte for byte:

    1. drop vnp_SecureHash / vnp_SecureHashType
    2. sort keys by code point
    3. percent-encode keys and values like JavaScript's encodeURIComponent,
       then turn "%20" into "+"
    4. join "k=v" pairs with "&"
    5. HMAC-SHA512 with the merchant secret, lowercase hex

The signed URL is the same canonical query with vnp_SecureHash added.

Example:
    Building a link for a member's weekly total::

        builder = PaymentUrlBuilder(GatewayConfig.from_settings())
        url = builder.build_payment_url(
            amount=Decimal('130000'),
            member_name='An',
            week_start=date(2026, 1, 12),
            member_id=member.id,
            week_id=week.id,
        )
"""

import hashlib
import hmac
import time
from datetime import datetime
from typing import Dict, Mapping, Optional
from urllib.parse import quote

from django.utils import timezone

from apps.orders.services import to_minor_units

from .gateway_config import GatewayConfig
from .memo import build_memo

SIGNATURE_FIELDS = ('vnp_SecureHash', 'vnp_SecureHashType')

# Characters encodeURIComponent leaves alone
_UNRESERVED = "-_.!~*'()"


def _encode(value) -> str:
    return quote(str(value), safe=_UNRESERVED).replace('%20', '+')


def canonical_query(params: Mapping[str, object]) -> str:
    """Sorted, encoded query string without the signature fields."""
    pairs = sorted(
        (key, value) for key, value in params.items()
        if key not in SIGNATURE_FIELDS
    )
    return '&'.join(f"{_encode(key)}={_encode(value)}" for key, value in pairs)


def sign_params(params: Mapping[str, object], secret: str) -> str:
    """HMAC-SHA512 hex digest of the canonical query."""
    digest = hmac.new(
        secret.encode('utf-8'),
        canonical_query(params).encode('utf-8'),
        hashlib.sha512,
    )
    return digest.hexdigest()


def build_signed_query(params: Mapping[str, object], secret: str) -> str:
    signed = dict(params)
    for key in SIGNATURE_FIELDS:
        signed.pop(key, None)
    signed['vnp_SecureHash'] = sign_params(signed, secret)
    pairs = sorted(signed.items())
    return '&'.join(f"{_encode(key)}={_encode(value)}" for key, value in pairs)


def verify_signature(params: Mapping[str, object], secret: str) -> bool:
    """Check vnp_SecureHash against the other fields, in constant time."""
    received = params.get('vnp_SecureHash')
    if not received:
        return False
    expected = sign_params(params, secret)
    return hmac.compare_digest(expected, str(received).lower())


class PaymentUrlBuilder:
    """
    Build signed gateway links.

    Raises:
        GatewayConfigurationError: On construction, if credentials are missing.
    """

    def __init__(self, config: GatewayConfig):
        config.require_credentials()
        self.config = config

    def build_memo(self, member_name: str, week_start) -> str:
        return build_memo(member_name, week_start)

    def build_txn_ref(self, member_id=None, week_id=None, now: Optional[float] = None) -> str:
        """
        Merchant transaction reference.

        Derived from member, week and a millisecond timestamp, or just the
        timestamp when either id is missing.
        """
        millis = int((now if now is not None else time.time()) * 1000)
        if member_id is None or week_id is None:
            return str(millis)
        return f"{member_id.hex[:8]}-{week_id.hex[:8]}-{millis}"

    def build_params(
        self,
        *,
        amount,
        member_name: str,
        week_start,
        member_id=None,
        week_id=None,
        ip_address: str = '127.0.0.1',
        created_at: Optional[datetime] = None,
        txn_ref: Optional[str] = None,
    ) -> Dict[str, str]:
        created_at = timezone.localtime(created_at or timezone.now())
        return {
            'vnp_Version': self.config.version,
            'vnp_Command': 'pay',
            'vnp_TmnCode': self.config.tmn_code,
            'vnp_Amount': str(to_minor_units(amount)),
            'vnp_CurrCode': self.config.currency,
            'vnp_TxnRef': txn_ref or self.build_txn_ref(member_id, week_id),
            'vnp_OrderInfo': self.build_memo(member_name, week_start),
            'vnp_OrderType': 'other',
            'vnp_Locale': self.config.locale,
            'vnp_ReturnUrl': self.config.return_url,
            'vnp_IpAddr': ip_address,
            'vnp_CreateDate': created_at.strftime('%Y%m%d%H%M%S'),
        }

    def url_for(self, params: Mapping[str, object]) -> str:
        """Sign params and append them to the gateway URL."""
        query = build_signed_query(params, self.config.hash_secret)
        return f"{self.config.payment_url}?{query}"

    def build_payment_url(self, **kwargs) -> str:
        """Signed payment URL; accepts the same arguments as build_params."""
        return self.url_for(self.build_params(**kwargs))
