from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import Order
from .serializers import (
    OrderSerializer,
    OrderListSerializer,
    OrderInputSerializer,
    OrderFilterSerializer,
    DishSerializer,
)
from .services import (
    create_order,
    update_order,
    delete_order,
    get_order_dishes,
    # Exceptions
    OrderValidationError,
    OrderNotFoundError,
    OrderWeekNotFoundError,
    OrderMemberNotFoundError,
    WeekFinalizedError,
)


class OrderPagination(PageNumberPagination):
    """Custom pagination for orders."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _service_error_response(e):
    if isinstance(e, (OrderNotFoundError, OrderWeekNotFoundError, OrderMemberNotFoundError)):
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)


class OrderViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Order CRUD operations.

    list: Orders, newest first (filterable by week)
    create: Create an order and split it across members
    retrieve: Order with its lines
    update: Replace an order and all of its lines
    destroy: Delete an order
    dishes: Lines regrouped into dishes
    """

    queryset = Order.objects.select_related('week').prefetch_related('items__member')
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = OrderPagination
    http_method_names = ['get', 'post', 'put', 'delete', 'head', 'options']

    def get_queryset(self):
        queryset = super().get_queryset()

        if self.action == 'list':
            params = OrderFilterSerializer(data=self.request.query_params)
            params.is_valid(raise_exception=True)
            week_id = params.validated_data.get('week')
            if week_id:
                queryset = queryset.filter(week_id=week_id)

        return queryset.order_by('-order_date', '-created_at')

    def get_serializer_class(self):
        if self.action == 'list':
            return OrderListSerializer
        return OrderSerializer

    def _service_kwargs(self, data):
        return {
            'week_id': data['week'],
            'description': data['description'],
            'final_amount': data['final_amount'],
            'dishes': data['items'],
            'order_date': data.get('order_date'),
        }

    @extend_schema(request=OrderInputSerializer, responses={201: OrderSerializer})
    def create(self, request, *args, **kwargs):
        """Create an order."""
        serializer = OrderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = create_order(**self._service_kwargs(serializer.validated_data))
        except (OrderValidationError, WeekFinalizedError,
                OrderWeekNotFoundError, OrderMemberNotFoundError) as e:
            return _service_error_response(e)

        order = self.get_queryset().get(id=order.id)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=OrderInputSerializer, responses={200: OrderSerializer})
    def update(self, request, *args, **kwargs):
        """Replace an order."""
        serializer = OrderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = update_order(
                order_id=self.kwargs['pk'],
                **self._service_kwargs(serializer.validated_data)
            )
        except (OrderValidationError, WeekFinalizedError, OrderNotFoundError,
                OrderWeekNotFoundError, OrderMemberNotFoundError) as e:
            return _service_error_response(e)

        order = self.get_queryset().get(id=order.id)
        return Response(OrderSerializer(order).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_order(order_id=self.kwargs['pk'])
        except OrderNotFoundError as e:
            return _service_error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: DishSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def dishes(self, request, pk=None):
        """
        Order lines grouped back into dishes.

        GET /api/orders/{id}/dishes/
        """
        order = self.get_object()
        return Response(DishSerializer(get_order_dishes(order), many=True).data)
