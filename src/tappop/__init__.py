"""Validation and rendering of parameters for the TAP hosted payment popup."""

from .application.use_cases.payment_popup import PaymentPopup, quick_payment
from .application.validators import ParameterValidator, validate
from .domain.entities import (
    CallbackRef,
    CanonicalParameters,
    RenderArtifact,
    RenderMode,
)
from .domain.errors import ValidationError
from .env import get_cdn_url, set_cdn_url
from .rendering.renderer import OutputRenderer

__all__ = [
    "CallbackRef",
    "CanonicalParameters",
    "OutputRenderer",
    "ParameterValidator",
    "PaymentPopup",
    "RenderArtifact",
    "RenderMode",
    "ValidationError",
    "get_cdn_url",
    "quick_payment",
    "set_cdn_url",
    "validate",
]
