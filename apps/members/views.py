from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import Member
from .serializers import (
    MemberSerializer,
    MemberStatsSerializer,
    MemberInputSerializer,
    MemberBulkCreateSerializer,
    MemberLookupSerializer,
    MemberFilterSerializer,
)
from .services import (
    create_members,
    update_member,
    delete_member,
    get_or_create_member,
    list_members_with_stats,
    # Exceptions
    MemberValidationError,
    MemberNotFoundError,
    DuplicateMemberError,
    MemberHasChargesError,
)


class MemberPagination(PageNumberPagination):
    """Custom pagination for members."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class MemberViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Member CRUD operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Members with line counts and charged totals
    create: Create one member, or several with {"members": [...]}
    retrieve: Get a member
    update: Rename a member / change email
    destroy: Delete a member without order lines
    lookup: Find a member by name, creating one if missing
    """

    queryset = Member.objects.all()
    serializer_class = MemberSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = MemberPagination
    http_method_names = ['get', 'post', 'put', 'delete', 'head', 'options']

    def get_queryset(self):
        if self.action == 'list':
            params = MemberFilterSerializer(data=self.request.query_params)
            params.is_valid(raise_exception=True)
            return list_members_with_stats(ordering=params.validated_data['ordering'])
        return Member.objects.all()

    def get_serializer_class(self):
        if self.action == 'list':
            return MemberStatsSerializer
        return MemberSerializer

    def get_permissions(self):
        if self.action == 'names':
            return [AllowAny()]
        return [IsAuthenticated()]

    @extend_schema(request=MemberBulkCreateSerializer, responses={201: MemberSerializer(many=True)})
    def create(self, request, *args, **kwargs):
        """Create one member or a batch of members."""
        if 'members' in request.data:
            serializer = MemberBulkCreateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            entries = serializer.validated_data['members']
        else:
            serializer = MemberInputSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            entries = [serializer.validated_data]

        try:
            members = create_members(members=entries)
        except MemberValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except DuplicateMemberError as e:
            return Response(
                {'error': str(e), 'names': e.names},
                status=status.HTTP_409_CONFLICT
            )

        data = MemberSerializer(members, many=True).data
        if 'members' not in request.data:
            data = data[0]
        return Response(data, status=status.HTTP_201_CREATED)

    @extend_schema(request=MemberInputSerializer, responses={200: MemberSerializer})
    def update(self, request, *args, **kwargs):
        """Rename a member."""
        serializer = MemberInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            member = update_member(
                member_id=self.kwargs['pk'],
                name=serializer.validated_data['name'],
                email=serializer.validated_data.get('email'),
            )
        except MemberNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except MemberValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except DuplicateMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(MemberSerializer(member).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a member."""
        try:
            delete_member(member_id=self.kwargs['pk'])
        except MemberNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except MemberHasChargesError as e:
            return Response(
                {'error': str(e), 'item_count': e.item_count},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=MemberLookupSerializer, responses={200: MemberSerializer, 201: MemberSerializer})
    @action(detail=False, methods=['post'])
    def lookup(self, request):
        """
        Find a member by name or create one.

        POST /api/members/lookup/
        Body: {"name": "An"}
        """
        serializer = MemberLookupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            member, created = get_or_create_member(name=serializer.validated_data['name'])
        except MemberValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            MemberSerializer(member).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )

    @action(detail=False, methods=['get'])
    def names(self, request):
        """
        Alphabetical member list for pickers.

        GET /api/members/names/
        """
        members = Member.objects.order_by('name').values('id', 'name')
        return Response(list(members))
