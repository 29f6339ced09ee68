"""Caller-facing payment popup API: validate once, render many times."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from ...domain.entities import CanonicalParameters
from ...rendering.renderer import OutputRenderer
from ..validators import ParameterValidator


class PaymentPopup:
    """Holds one validated transaction and renders it for the hosted SDK."""

    def __init__(
        self,
        renderer: Optional[OutputRenderer] = None,
        cdn_url: Optional[str] = None,
        validator: Optional[ParameterValidator] = None,
    ) -> None:
        self.renderer = renderer or OutputRenderer(cdn_url=cdn_url)
        self.validator = validator or ParameterValidator()
        self._params: Optional[CanonicalParameters] = None

    @property
    def cdn_url(self) -> str:
        return self.renderer.cdn_url

    @property
    def is_initialized(self) -> bool:
        return self._params is not None

    @property
    def params(self) -> CanonicalParameters:
        if self._params is None:
            raise RuntimeError("setup() must be called before using the payment popup")
        return self._params

    def setup(self, transaction_details: Mapping[str, Any]) -> PaymentPopup:
        """Validate and store the transaction parameters.

        Raises:
            ValidationError: If any rule fails; previously stored parameters
                are left untouched.
        """
        self._params = self.validator.validate(transaction_details)
        return self

    def render_sdk_only(self) -> str:
        """Render the SDK tag; does not require ``setup``."""
        return self.renderer.render_sdk_only().html

    def render_script(self) -> str:
        """Render the SDK tag and the inline setup script."""
        return self.renderer.render_script(self.params).html

    def render(
        self,
        button_text: str = "Pay Now",
        button_attributes: Optional[Mapping[Any, Any]] = None,
    ) -> str:
        """Render a self-contained pay button."""
        return self.renderer.render_button(
            self.params, button_text, button_attributes
        ).html

    def get_transaction_params_json(self) -> str:
        """Return the cleaned parameters as JSON, for XHR-style submission."""
        return self.params.to_json()


def quick_payment(
    transaction_details: Mapping[str, Any],
    button_text: str = "Pay Now",
    button_attributes: Optional[Mapping[Any, Any]] = None,
    cdn_url: Optional[str] = None,
) -> str:
    """Validate ``transaction_details`` and render a pay button in one call."""
    return (
        PaymentPopup(cdn_url=cdn_url)
        .setup(transaction_details)
        .render(button_text, button_attributes)
    )
