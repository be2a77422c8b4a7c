"""Payment gateway settings, resolved once and passed to the services."""

from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings

from .exceptions import GatewayConfigurationError

DEFAULT_PAYMENT_URL = 'https://sandbox.vnpayment.vn/paymentv2/vpcpay.html'


@dataclass(frozen=True)
class GatewayConfig:
    tmn_code: str
    hash_secret: str
    payment_url: str = DEFAULT_PAYMENT_URL
    return_url: str = ''
    version: str = '2.1.0'
    locale: str = 'vn'
    currency: str = 'VND'
    verify_signature: bool = True
    amount_tolerance: Decimal = Decimal('100')

    def require_credentials(self):
        """
        Raises:
            GatewayConfigurationError: If anything needed to sign a request
                is missing.
        """
        missing = [
            name for name, value in (
                ('VNPAY_TMN_CODE', self.tmn_code),
                ('VNPAY_HASH_SECRET', self.hash_secret),
                ('VNPAY_PAYMENT_URL', self.payment_url),
                ('VNPAY_RETURN_URL', self.return_url),
            )
            if not value
        ]
        if missing:
            raise GatewayConfigurationError(
                f"Payment gateway is not configured: missing {', '.join(missing)}"
            )

    @classmethod
    def from_settings(cls):
        """Build the config from Django settings."""
        return cls(
            tmn_code=getattr(settings, 'VNPAY_TMN_CODE', ''),
            hash_secret=getattr(settings, 'VNPAY_HASH_SECRET', ''),
            payment_url=getattr(settings, 'VNPAY_PAYMENT_URL', DEFAULT_PAYMENT_URL),
            return_url=getattr(settings, 'VNPAY_RETURN_URL', ''),
            version=getattr(settings, 'VNPAY_VERSION', '2.1.0'),
            locale=getattr(settings, 'VNPAY_LOCALE', 'vn'),
            verify_signature=getattr(settings, 'VNPAY_VERIFY_SIGNATURE', True),
            amount_tolerance=Decimal(str(getattr(settings, 'PAYMENT_AMOUNT_TOLERANCE', 100))),
        )
