from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
import logging

from .exceptions import SplitIntegrityError, UnknownOperationError
from .serializers import SplitRequestSerializer
from .services import SplitCheckService

logger = logging.getLogger(__name__)


class BaseSplitView(APIView):
    """
    Stateless split endpoints: the request carries the order's items plus the
    operations performed so far.
    """

    permission_classes = [AllowAny]

    def build_session(self, request):
        serializer = SplitRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return SplitCheckService.session_from_request(serializer.validated_data)


class SplitPreviewView(BaseSplitView):
    """Current tickets, totals, integrity report and commit payloads."""

    def post(self, request, *args, **kwargs):
        try:
            session = self.build_session(request)
        except UnknownOperationError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(SplitCheckService.preview(session))


class SplitCommitView(BaseSplitView):
    """
    Commit payload for the settlement layer.

    Returns either:
        - 200: {assignments, splitItems}
        - 400: invalid request
        - 409: integrity check failed (issues listed for staff)
    """

    def post(self, request, *args, **kwargs):
        try:
            session = self.build_session(request)
            payload = SplitCheckService.commit(session)
        except UnknownOperationError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except SplitIntegrityError as e:
            return Response(
                {"error": "Split does not balance", "issues": e.issues},
                status=status.HTTP_409_CONFLICT,
            )
        return Response(payload)
