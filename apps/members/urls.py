from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'members'

router = DefaultRouter()
router.register(r'', views.MemberViewSet, basename='member')

urlpatterns = [
    # GET    /api/members/              - List members with totals
    # POST   /api/members/              - Create member(s)
    # GET    /api/members/{id}/         - Member details
    # PUT    /api/members/{id}/         - Rename member
    # DELETE /api/members/{id}/         - Delete member (no order lines)
    # POST   /api/members/lookup/       - Find or create by name
    # GET    /api/members/names/        - Public name list
    path('', include(router.urls)),
]
