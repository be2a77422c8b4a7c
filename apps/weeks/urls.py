from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'weeks'

router = DefaultRouter()
router.register(r'', views.WeekViewSet, basename='week')

urlpatterns = [
    # GET    /api/weeks/                 - List weeks
    # POST   /api/weeks/                 - Create week
    # GET    /api/weeks/{id}/            - Week details
    # DELETE /api/weeks/{id}/            - Delete week (no orders)
    # POST   /api/weeks/{id}/finalize/   - Finalize week
    # GET    /api/weeks/{id}/ledger/     - Member totals and payment state
    # POST   /api/weeks/{id}/payments/   - Mark member paid/unpaid
    # GET    /api/weeks/dashboard/       - Public week overview
    path('', include(router.urls)),
]
