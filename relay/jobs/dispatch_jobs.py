"""Background jobs draining the push notification queue.

Scheduled after a notification is queued (PUSH_AUTO_DISPATCH) and executed by
RQ workers. Each job runs one dispatch batch.
"""

import structlog

from relay.exceptions import DispatchInProgressError, PushGatewayError
from relay.services.dispatch_service import PushDispatchService

logger = structlog.get_logger(__name__)


def process_push_queue_job(batch_size: int | None = None) -> dict:
    """Run one dispatch batch from an RQ worker.

    A run already in progress or a gateway credential problem is logged and
    reported in the returned dict rather than raised, so the job is not
    retried by RQ; the rows remain pending for the next run.

    Args:
        batch_size: Overrides PUSH_DISPATCH_BATCH_SIZE for this run.

    Returns:
        The dispatch summary, or ``{"success": False, "error": ...}``.
    """
    try:
        summary = PushDispatchService(batch_size=batch_size).process_pending()
    except DispatchInProgressError as e:
        logger.info("push_dispatch_job_skipped", reason=str(e))
        return {"success": False, "error": str(e)}
    except PushGatewayError as e:
        logger.error(
            "push_dispatch_job_gateway_error",
            error=str(e),
            error_type=type(e).__name__,
        )
        return {"success": False, "error": str(e)}

    result = summary.to_response()
    logger.info("push_dispatch_job_completed", **result)
    return result
