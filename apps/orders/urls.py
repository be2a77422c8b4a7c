from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'orders'

router = DefaultRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # GET    /api/orders/?week=       - List orders
    # POST   /api/orders/             - Create order
    # GET    /api/orders/{id}/        - Order with lines
    # PUT    /api/orders/{id}/        - Replace order
    # DELETE /api/orders/{id}/        - Delete order
    # GET    /api/orders/{id}/dishes/ - Lines grouped into dishes
    path('', include(router.urls)),
]
