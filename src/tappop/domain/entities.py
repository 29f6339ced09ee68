"""Domain entities: canonical transaction parameters and render artifacts."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, NewType, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    field_serializer,
    field_validator,
)

# A JavaScript expression evaluated in the browser page, usually the name of a
# global function. It is never checked here: the caller must make sure it
# resolves where the artifact is embedded.
CallbackRef = NewType("CallbackRef", str)

Scalar = Union[int, float, str]


class RenderMode(str, Enum):
    """Shape of the artifact produced by the renderer."""

    SCRIPT_ONLY = "script_only"
    INLINE_AUTO = "inline_auto"
    BUTTON = "button"


class CanonicalParameters(BaseModel):
    """Validated, normalized transaction parameters.

    Attribute names are snake_case; the wire (SDK) names are the aliases.
    Numeric fields keep the type the caller supplied. ``custom_payload`` is
    stored as a read-only view, nested mappings and lists included.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api_key: Scalar = Field("", alias="apiKey")
    trans_id: Scalar = Field("", alias="transID")
    amount: Scalar = ""
    email: str = ""
    env: str = ""
    phone: Scalar = ""
    super_agent_fee: Scalar = Field("", alias="superAgentFee")
    save_payment_details: StrictBool = Field(False, alias="savePaymentDetails")
    customer_reference: Scalar = Field("", alias="customerReference")
    custom_payload: Mapping[str, Any] = Field(
        default_factory=lambda: MappingProxyType({}), alias="customPayload"
    )
    callback: Optional[CallbackRef] = Field(None, exclude=True)
    on_close: Optional[CallbackRef] = Field(None, alias="onClose", exclude=True)

    @field_validator("custom_payload", mode="after")
    @classmethod
    def freeze_custom_payload(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return _freeze(value)

    @field_serializer("custom_payload")
    def serialize_custom_payload(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return _thaw(value)

    def cleaned(self) -> dict[str, Any]:
        """Return the wire-named fields with empty values stripped.

        Drops ``""``, ``None``, ``False`` and empty mappings. Callback
        references are never part of the result.
        """
        return {
            key: value
            for key, value in self.model_dump(by_alias=True).items()
            if not _is_blank(value)
        }

    def to_json(self) -> str:
        """Serialize the cleaned parameters as compact JSON."""
        return json.dumps(self.cleaned(), ensure_ascii=False, separators=(",", ":"))


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


def _is_blank(value: Any) -> bool:
    if isinstance(value, Mapping):
        return not value
    return value is None or value is False or value == ""


class RenderArtifact(BaseModel):
    """Markup and script produced for one render call."""

    model_config = ConfigDict(frozen=True)

    html: str
    mode: RenderMode
    button_id: Optional[str] = None

    def __str__(self) -> str:
        return self.html
