"""Not-found suppression stage"""

import logging

from ...errors import DocumentNotFoundError
from ..base import CallNext, Stage
from ..context import OperationKind, OperationRequest
from ..results import OperationResult, ResultStatus

logger = logging.getLogger(__name__)


class NotFoundSuppressionStage(Stage):
    """Turns "key absent" into a caller-friendly outcome.

    GET of a missing key yields ``OperationResult.empty()``; DELETE of a
    missing key yields ``OperationResult.success()``. Absence is recognised
    whether deeper stages return NOT_FOUND or raise DocumentNotFoundError.
    PUT is left alone, and any other failure propagates unmodified.
    """

    async def invoke(self, request: OperationRequest, call_next: CallNext) -> OperationResult:
        try:
            result = await call_next(request)
        except DocumentNotFoundError:
            if request.kind is OperationKind.PUT:
                raise
            result = OperationResult.not_found()

        if result.status is not ResultStatus.NOT_FOUND:
            return result

        if request.kind is OperationKind.GET:
            logger.debug(f"Suppressed not-found on get: {request.namespace}/{request.key}")
            return OperationResult.empty()
        if request.kind is OperationKind.DELETE:
            logger.debug(f"Suppressed not-found on delete: {request.namespace}/{request.key}")
            return OperationResult.success()
        return result
