import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.members.services import get_member_by_id, MemberNotFoundError
from apps.orders.serializers import OrderSerializer
from .models import Week
from .serializers import (
    WeekSerializer,
    WeekListSerializer,
    WeekCreateSerializer,
    WeekLedgerSerializer,
    PaymentStatusInputSerializer,
    PaymentStatusSerializer,
    DashboardFilterSerializer,
)
from .services import (
    create_week,
    finalize_week,
    delete_week,
    list_weeks,
    build_week_ledger,
    weeks_with_unpaid_members,
    set_payment_status,
    # Exceptions
    WeekValidationError,
    WeekOverlapError,
    WeekNotFoundError,
    WeekHasOrdersError,
)

logger = logging.getLogger(__name__)


class WeekViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Week operations.

    list: Weeks, newest first, with order counts
    create: Create a week starting on a Monday
    retrieve: Get a week
    destroy: Delete a week without orders
    finalize: Close a week for payment
    ledger: Member totals and payment state
    payments: Mark a member paid/unpaid
    dashboard: Selected week with ledger and orders (public)
    """

    queryset = Week.objects.all()
    serializer_class = WeekSerializer
    permission_classes = [IsAuthenticated]
    http_method_names = ['get', 'post', 'delete', 'head', 'options']

    def get_queryset(self):
        if self.action == 'list':
            return list_weeks()
        return Week.objects.all()

    def get_serializer_class(self):
        if self.action == 'list':
            return WeekListSerializer
        return WeekSerializer

    def get_permissions(self):
        if self.action == 'dashboard':
            return [AllowAny()]
        return [IsAuthenticated()]

    @extend_schema(request=WeekCreateSerializer, responses={201: WeekSerializer})
    def create(self, request, *args, **kwargs):
        serializer = WeekCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            week = create_week(**serializer.validated_data)
        except WeekValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except WeekOverlapError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(WeekSerializer(week).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_week(week_id=self.kwargs['pk'])
        except WeekNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except WeekHasOrdersError as e:
            return Response(
                {'error': str(e), 'order_count': e.order_count},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: WeekSerializer})
    @action(detail=True, methods=['post'])
    def finalize(self, request, pk=None):
        """
        Finalize a week.

        POST /api/weeks/{id}/finalize/
        """
        try:
            week = finalize_week(week_id=pk)
        except WeekNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(WeekSerializer(week).data)

    @extend_schema(responses={200: WeekLedgerSerializer})
    @action(detail=True, methods=['get'])
    def ledger(self, request, pk=None):
        """
        Member totals and payment state.

        GET /api/weeks/{id}/ledger/
        """
        week = self.get_object()
        return Response(WeekLedgerSerializer(build_week_ledger(week)).data)

    @extend_schema(request=PaymentStatusInputSerializer, responses={200: PaymentStatusSerializer})
    @action(detail=True, methods=['post'])
    def payments(self, request, pk=None):
        """
        Mark a member as paid or unpaid for this week.

        POST /api/weeks/{id}/payments/
        Body: {"member": "<uuid>", "paid": true}
        """
        week = self.get_object()
        serializer = PaymentStatusInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            member = get_member_by_id(member_id=serializer.validated_data['member'])
        except MemberNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        payment = set_payment_status(
            member=member,
            week=week,
            paid=serializer.validated_data['paid'],
        )
        logger.info(
            "Payment for %s in week %s set to %s by %s",
            member.name, week.start_date, payment.paid, request.user,
        )
        return Response(PaymentStatusSerializer(payment).data)

    @action(detail=False, methods=['get'])
    def dashboard(self, request):
        """
        Week overview.

        GET /api/weeks/dashboard/?week=<uuid>

        Admins see every week; anonymous callers only weeks where someone
        still owes money. Without ``week`` (or with an unknown one) the
        newest visible week is selected.
        """
        params = DashboardFilterSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        if request.user.is_authenticated:
            weeks = list(Week.objects.order_by('-start_date'))
        else:
            weeks = weeks_with_unpaid_members()

        if not weeks:
            return Response({
                'weeks': [],
                'selected_week': None,
                'ledger': None,
                'orders': [],
            })

        wanted = params.validated_data.get('week')
        selected = next((w for w in weeks if w.id == wanted), weeks[0])
        orders = (
            selected.orders
            .prefetch_related('items__member')
            .order_by('-order_date')
        )

        return Response({
            'weeks': WeekSerializer(weeks, many=True).data,
            'selected_week': WeekSerializer(selected).data,
            'ledger': WeekLedgerSerializer(build_week_ledger(selected)).data,
            'orders': OrderSerializer(orders, many=True).data,
        })
