"""FastAPI dependencies for the payment API."""

from __future__ import annotations

from fastapi import Depends

from ..application.validators import ParameterValidator
from ..env import Settings, get_settings
from ..rendering.renderer import OutputRenderer


def get_parameter_validator() -> ParameterValidator:
    """Get parameter validator."""
    return ParameterValidator()


def get_output_renderer(
    settings: Settings = Depends(get_settings),
) -> OutputRenderer:
    """Get output renderer bound to the process-wide SDK location."""
    return OutputRenderer(button_id_prefix=settings.button_id_prefix)
