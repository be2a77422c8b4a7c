import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.members.services import (
    DuplicateMemberError,
    MemberHasChargesError,
    MemberNotFoundError,
    MemberValidationError,
)
from apps.weeks.services import (
    WeekHasOrdersError,
    WeekNotFoundError,
    WeekOverlapError,
    WeekValidationError,
)
from .dispatcher import UnknownIntentError
from .handlers import dispatcher
from .serializers import IntentSerializer

logger = logging.getLogger(__name__)

ERROR_STATUS = (
    (MemberNotFoundError, status.HTTP_404_NOT_FOUND),
    (WeekNotFoundError, status.HTTP_404_NOT_FOUND),
    (WeekOverlapError, status.HTTP_409_CONFLICT),
    (DuplicateMemberError, status.HTTP_409_CONFLICT),
    (WeekValidationError, status.HTTP_400_BAD_REQUEST),
    (MemberValidationError, status.HTTP_400_BAD_REQUEST),
    (WeekHasOrdersError, status.HTTP_400_BAD_REQUEST),
    (MemberHasChargesError, status.HTTP_400_BAD_REQUEST),
)
HANDLED_ERRORS = tuple(error for error, _ in ERROR_STATUS)


def _status_for(error):
    for error_class, code in ERROR_STATUS:
        if isinstance(error, error_class):
            return code
    return status.HTTP_400_BAD_REQUEST


@extend_schema(
    request=IntentSerializer,
    description=(
        "Run an admin command selected by `intent`: create-week, finalize-week, "
        "delete-week, create-members, update-member, delete-member, update-payment."
    ),
    tags=['commands'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def run_command(request):
    """Dispatch an intent-tagged command."""
    try:
        result = dispatcher.dispatch(request.data)
    except UnknownIntentError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except HANDLED_ERRORS as e:
        return Response({'error': str(e)}, status=_status_for(e))

    logger.info("Command %s run by %s", request.data.get('intent'), request.user)
    return Response(result)
