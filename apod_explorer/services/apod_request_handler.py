"""APOD Request Handler — single-pass validate → fetch → respond pipeline.

Invariants:
    - Phases: RECEIVED → VALIDATING → FETCHING → SUCCESS|FAILED → RESPONDED
    - No retries, no backtracking; each phase entered at most once
    - Validation failure never reaches the upstream client
    - Fetch failures classified exactly once via classify_failure
    - Every return value is an envelope echoing context.request_id
    - Exactly one structured outcome log line per handled request

Design Decisions:
    - Impure shell around pure core (date_validation, error_classification)
    - Returns (status, envelope) instead of raising: failures here are expected outcomes
"""

import logging
from datetime import date, datetime, timezone
from enum import Enum

from apod_explorer.core.date_validation import validate_apod_date
from apod_explorer.core.error_classification import classify_failure
from apod_explorer.core.request_context import RequestContext
from apod_explorer.core.service_stats import RequestCounter
from apod_explorer.core.upstream_result import (
    ApodFetched,
    UpstreamStatusFailure,
)
from apod_explorer.infrastructure.apod_client import ApodClient
from apod_explorer.schemas.envelope import ApodEnvelope, ErrorInfo

logger = logging.getLogger(__name__)


class RequestPhase(str, Enum):
    RECEIVED = "received"
    VALIDATING = "validating"
    FETCHING = "fetching"
    SUCCESS = "success"
    FAILED = "failed"
    RESPONDED = "responded"


class ApodRequestHandler:
    """Composes validator, upstream client and classifier; one per runtime.

    Holds no per-request state: the phase lives in handle()'s locals.
    """

    def __init__(self, client: ApodClient, counter: RequestCounter):
        self.client = client
        self.counter = counter

    async def handle(
        self,
        context: RequestContext,
        method: str,
        path: str,
        date: str | None = None,
        today: date | None = None,
    ) -> tuple[int, ApodEnvelope]:
        """Run the pipeline; today defaults to the current UTC date."""
        log_extra = {
            "request_id": context.request_id,
            "method": method,
            "path": path,
            "client_ip": context.client_ip,
            "date": date or "today",
        }

        phase = RequestPhase.VALIDATING
        today = today or datetime.now(timezone.utc).date()
        invalid = validate_apod_date(date, today)
        if invalid is not None:
            return self._respond(
                invalid.http_status,
                ApodEnvelope.failed(invalid.to_error_info(), context.request_id),
                log_extra | {
                    "phase": phase.value,
                    "error_type": invalid.error_type.value,
                },
            )

        # only requests that pass validation are counted
        self.counter.increment()
        phase = RequestPhase.FETCHING
        result = await self.client.fetch_apod(date)

        if isinstance(result, ApodFetched):
            return self._respond(
                200, ApodEnvelope.ok(result.data, context.request_id), log_extra,
            )

        classified = classify_failure(result)
        upstream_status = (
            result.status_code
            if isinstance(result, UpstreamStatusFailure) else None
        )
        error = ErrorInfo(
            message=classified.user_message,
            type=classified.error_type.value,
            status=classified.status_code,
        )
        return self._respond(
            classified.status_code,
            ApodEnvelope.failed(error, context.request_id),
            log_extra | {
                "phase": phase.value,
                "error_type": classified.error_type.value,
                "upstream_status": upstream_status,
            },
        )

    def _respond(
        self, status: int, envelope: ApodEnvelope, log_extra: dict,
    ) -> tuple[int, ApodEnvelope]:
        outcome = RequestPhase.SUCCESS if envelope.success else RequestPhase.FAILED
        extra = log_extra | {"outcome": outcome.value, "status_code": status}
        if envelope.success:
            title = envelope.data.get("title", "untitled")
            logger.info(f"APOD fetched: {title}", extra=extra)
        else:
            logger.warning(
                f"APOD request failed: {envelope.error.message}", extra=extra,
            )
        return status, envelope
