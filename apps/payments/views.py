import logging
from decimal import Decimal
from urllib.parse import unquote

from django.http import HttpResponse
from rest_framework import status, serializers
from rest_framework.decorators import (
    api_view,
    authentication_classes,
    permission_classes,
)
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiResponse

from apps.members.services import MemberNotFoundError
from apps.orders.services import from_minor_units
from apps.weeks.services import WeekNotFoundError, find_unpaid_weeks
from .serializers import (
    PaymentLinkQuerySerializer,
    PaymentLinkSerializer,
    ReconciliationResponseSerializer,
    PaymentReturnSerializer,
    OutstandingQuerySerializer,
    OutstandingWeekSerializer,
)
from .services import (
    GatewayConfig,
    MemoParser,
    PaymentReconciler,
    PaymentUrlBuilder,
    create_payment_link,
    render_qr_png,
    verify_signature,
    # Exceptions
    GatewayConfigurationError,
    WeekNotFinalizedError,
    AlreadyPaidError,
    ReconciliationError,
    AmountMismatchError,
    PayerNotFoundError,
    PaymentWeekNotFoundError,
    NoChargesError,
)

logger = logging.getLogger(__name__)

GATEWAY_NOT_CONFIGURED = 'Payment gateway is not configured'


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def _client_ip(request):
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR') or '127.0.0.1'


def _notification_fields(request):
    if request.method == 'GET':
        return request.query_params.dict()
    data = request.data
    if hasattr(data, 'dict'):
        return data.dict()
    return dict(data)


def _rejection_response(e):
    body = {'error': str(e)}
    if isinstance(e, AmountMismatchError):
        body['expected'] = str(e.expected)
        body['received'] = str(e.received)
    if isinstance(e, (PayerNotFoundError, PaymentWeekNotFoundError)):
        return Response(body, status=status.HTTP_404_NOT_FOUND)
    return Response(body, status=status.HTTP_400_BAD_REQUEST)


# =============================================================================
# Gateway callbacks
# =============================================================================

@extend_schema(
    responses={
        200: ReconciliationResponseSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        500: ErrorResponseSerializer,
    },
    description="Payment notification from the gateway (query string, form or JSON body).",
    tags=['payments'],
)
@api_view(['GET', 'POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def vnpay_webhook(request):
    """Reconcile a payment notification."""
    try:
        fields = _notification_fields(request)
        reconciler = PaymentReconciler(GatewayConfig.from_settings())
        result = reconciler.reconcile(fields)
    except ReconciliationError as e:
        return _rejection_response(e)
    except GatewayConfigurationError as e:
        logger.error("Payment notification received but %s", e)
        return Response(
            {'error': GATEWAY_NOT_CONFIGURED},
            status=status.HTTP_503_SERVICE_UNAVAILABLE
        )
    except Exception:
        logger.exception("Unexpected error while handling payment notification")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return Response({
        'success': True,
        'message': 'Payment updated successfully',
        'member_id': result.member.id,
        'week_id': result.week.id,
        'amount': result.amount,
    })


@extend_schema(
    responses={200: PaymentReturnSerializer},
    description="Summarize the gateway redirect for the payer. Never changes state.",
    tags=['payments'],
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def vnpay_return(request):
    """Display data for the payment result page."""
    params = request.query_params
    response_code = params.get('vnp_ResponseCode')
    transaction_status = params.get('vnp_TransactionStatus')

    member_name = ''
    week_date = ''
    parts = MemoParser().split(unquote(params.get('vnp_OrderInfo', '')))
    if parts is not None:
        member_name, week_date = parts

    try:
        amount = from_minor_units(params.get('vnp_Amount'))
    except ValueError:
        amount = Decimal('0.00')

    config = GatewayConfig.from_settings()
    signature_valid = None
    if config.hash_secret:
        signature_valid = verify_signature(params.dict(), config.hash_secret)

    data = {
        'is_success': response_code == '00' and transaction_status == '00',
        'signature_valid': signature_valid,
        'member_name': member_name,
        'week_date': week_date,
        'amount': amount,
        'transaction_no': params.get('vnp_TransactionNo'),
        'txn_ref': params.get('vnp_TxnRef'),
        'response_code': response_code,
        'transaction_status': transaction_status,
    }
    return Response(PaymentReturnSerializer(data).data)


# =============================================================================
# Payment links
# =============================================================================

def _payment_link(request):
    """Returns (link, None) or (None, error Response)."""
    query = PaymentLinkQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    try:
        builder = PaymentUrlBuilder(GatewayConfig.from_settings())
        link = create_payment_link(
            builder=builder,
            member_id=query.validated_data['member'],
            week_id=query.validated_data['week'],
            ip_address=_client_ip(request),
        )
    except GatewayConfigurationError as e:
        logger.error("Cannot build payment link: %s", e)
        return None, Response(
            {'error': GATEWAY_NOT_CONFIGURED},
            status=status.HTTP_503_SERVICE_UNAVAILABLE
        )
    except (MemberNotFoundError, WeekNotFoundError) as e:
        return None, Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except (WeekNotFinalizedError, AlreadyPaidError, NoChargesError) as e:
        return None, Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return link, None


@extend_schema(
    parameters=[PaymentLinkQuerySerializer],
    responses={
        200: PaymentLinkSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        503: ErrorResponseSerializer,
    },
    description="Signed gateway link for a member's total in a finalized week.",
    tags=['payments'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def payment_link(request):
    link, error = _payment_link(request)
    if error is not None:
        return error
    return Response(PaymentLinkSerializer(link).data)


@extend_schema(
    parameters=[PaymentLinkQuerySerializer],
    responses={200: OpenApiResponse(description='PNG image'), 400: ErrorResponseSerializer},
    description="QR code (PNG) of the payment link.",
    tags=['payments'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def payment_qr(request):
    link, error = _payment_link(request)
    if error is not None:
        return error
    return HttpResponse(render_qr_png(link.payment_url), content_type='image/png')


@extend_schema(
    parameters=[OutstandingQuerySerializer],
    responses={200: OutstandingWeekSerializer(many=True)},
    description="Finalized weeks a member (by name) has not paid for yet.",
    tags=['payments'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def outstanding(request):
    query = OutstandingQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    results = find_unpaid_weeks(name=query.validated_data['name'])
    return Response(OutstandingWeekSerializer(results, many=True).data)
