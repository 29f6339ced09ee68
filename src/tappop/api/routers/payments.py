"""Payment parameter API routes."""

from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, JSONResponse, Response
from prometheus_client import Counter, Gauge, Histogram

from ...application.dtos import (
    RenderRequestDTO,
    TransactionDetailsDTO,
    ValidationErrorDTO,
)
from ...application.validators import ParameterValidator
from ...domain.entities import RenderMode
from ...domain.errors import ValidationError
from ...rendering.renderer import OutputRenderer
from ..dependencies import get_output_renderer, get_parameter_validator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])

REQUEST_DURATION_BUCKETS = (
    [round(0.5 * i, 1) for i in range(1, 21)]
    + [float(x) for x in range(15, 55, 5)]
    + [float("inf")]
)

tap_payment_requests_total = Counter(
    "tap_payment_requests_total",
    "Total payment parameter requests processed",
    ["endpoint", "status"],
)
tap_payment_request_duration_milliseconds = Histogram(
    "tap_payment_request_duration_milliseconds",
    "Wall time to process a payment parameter request (ms)",
    ["endpoint", "status"],
    buckets=REQUEST_DURATION_BUCKETS,
)
tap_payment_requests_inprogress = Gauge(
    "tap_payment_requests_inprogress",
    "Number of payment parameter requests currently being processed",
)

T = TypeVar("T")


def _validation_error_response(error: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=ValidationErrorDTO(detail=error.message, field=error.field).model_dump(),
    )


def _instrumented(endpoint: str, handler: Callable[[], T]) -> T | JSONResponse:
    start_time = time.perf_counter()
    tap_payment_requests_inprogress.inc()
    status = "success"
    try:
        return handler()
    except ValidationError as e:
        status = "client_error"
        return _validation_error_response(e)
    except Exception:
        status = "server_error"
        logger.exception("Internal server error while processing %s request", endpoint)
        return JSONResponse(
            status_code=500,
            content={"detail": f"Internal server error while processing {endpoint}"},
        )
    finally:
        elapsed = (time.perf_counter() - start_time) * 1000
        tap_payment_requests_total.labels(endpoint=endpoint, status=status).inc()
        tap_payment_request_duration_milliseconds.labels(
            endpoint=endpoint, status=status
        ).observe(elapsed)
        tap_payment_requests_inprogress.dec()


@router.post(
    "/params",
    responses={400: {"model": ValidationErrorDTO}},
)
async def get_transaction_params(
    transaction: TransactionDetailsDTO,
    validator: ParameterValidator = Depends(get_parameter_validator),
) -> Response:
    """Validate a transaction and return its cleaned parameters for XHR use."""

    def handler() -> Response:
        params = validator.validate(transaction.model_dump())
        return Response(content=params.to_json(), media_type="application/json")

    return _instrumented("params", handler)


@router.post(
    "/render",
    response_class=HTMLResponse,
    responses={400: {"model": ValidationErrorDTO}},
)
async def render_transaction(
    request: RenderRequestDTO,
    mode: RenderMode = Query(RenderMode.BUTTON, description="Artifact shape"),
    validator: ParameterValidator = Depends(get_parameter_validator),
    renderer: OutputRenderer = Depends(get_output_renderer),
) -> Response:
    """Validate a transaction and render it as markup in the requested mode."""

    def handler() -> Response:
        if mode is RenderMode.SCRIPT_ONLY:
            artifact = renderer.render_sdk_only()
        else:
            params = validator.validate(request.transaction)
            artifact = renderer.render(
                params, mode, request.button_text, request.button_attributes
            )
        headers = {"X-Button-Id": artifact.button_id} if artifact.button_id else None
        return HTMLResponse(content=artifact.html, headers=headers)

    return _instrumented(f"render_{mode.value}", handler)
