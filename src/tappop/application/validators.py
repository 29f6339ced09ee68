"""Normalization and validation of raw transaction input.

The rules are pure functions evaluated in a fixed order; the first violated
rule aborts validation. Format checks on optional values run before the
required-field checks, so an invalid ``amount`` is reported as a format error
even when other required fields are also missing.
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Mapping
from typing import Any, Callable, NamedTuple, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import ValidationError as PydanticValidationError

from ..domain.entities import CanonicalParameters
from ..domain.errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_ENVS = ("production", "sandbox")

_DEFAULTS: dict[str, Any] = {
    "apiKey": "",
    "transID": "",
    "amount": "",
    "email": "",
    "env": "",
    "phone": "",
    "superAgentFee": "",
    "savePaymentDetails": False,
    "customerReference": "",
}

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def is_empty(value: Any) -> bool:
    """Return True for values treated as "not provided"."""
    if isinstance(value, Mapping):
        return not value
    return value is None or value is False or value == ""


def parse_number(value: Any) -> Optional[float]:
    """Parse an int, float or numeric string. Pure function.

    Returns:
        The value as a finite float, or None when it is not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and _NUMERIC_RE.match(value):
        number = float(value)
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def is_valid_email(value: Any) -> bool:
    """Check email syntax only; no deliverability lookups.

    Display-name forms such as ``Name <addr>`` and surrounding whitespace are
    rejected: the value is embedded in the SDK config exactly as given.
    """
    if not isinstance(value, str) or value != value.strip():
        return False
    try:
        validate_email(value, check_deliverability=False, allow_display_name=False)
    except EmailNotValidError:
        return False
    return True


def _valid_positive_number(value: Any) -> bool:
    number = parse_number(value)
    return number is not None and number > 0


def _valid_non_negative_number(value: Any) -> bool:
    number = parse_number(value)
    return number is not None and number >= 0


class Rule(NamedTuple):
    """A single validation rule: ``check`` returns True when the input passes."""

    field: str
    check: Callable[[dict[str, Any]], bool]
    message: str


def _saves_details(params: dict[str, Any]) -> bool:
    return params["savePaymentDetails"] is True


RULES: tuple[Rule, ...] = (
    Rule(
        "email",
        lambda p: is_empty(p["email"]) or is_valid_email(p["email"]),
        "Attribute email must be a valid email",
    ),
    Rule(
        "amount",
        lambda p: is_empty(p["amount"]) or _valid_positive_number(p["amount"]),
        "Attribute amount must be a valid positive number",
    ),
    Rule(
        "superAgentFee",
        lambda p: is_empty(p["superAgentFee"])
        or _valid_non_negative_number(p["superAgentFee"]),
        "Attribute superAgentFee must be a valid number",
    ),
    Rule(
        "apiKey",
        lambda p: not is_empty(p["apiKey"]),
        "Please provide your public key via the apiKey attribute",
    ),
    Rule(
        "amount",
        lambda p: not is_empty(p["amount"]),
        "Please provide transaction amount via the amount attribute",
    ),
    Rule(
        "email",
        lambda p: not is_empty(p["email"]),
        "Please provide customer email via the email attribute",
    ),
    Rule(
        "env",
        lambda p: not is_empty(p["env"]),
        "Please provide environment via the env attribute (production or sandbox)",
    ),
    Rule(
        "env",
        lambda p: p["env"] in ALLOWED_ENVS,
        'Attribute env must be either "production" or "sandbox"',
    ),
    Rule(
        "customerReference",
        lambda p: not _saves_details(p) or not is_empty(p["customerReference"]),
        "Please provide customerReference when savePaymentDetails is true",
    ),
    Rule(
        "phone",
        lambda p: not _saves_details(p) or not is_empty(p["phone"]),
        "Please provide phone when savePaymentDetails is true",
    ),
)


def normalize(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Apply defaults and merge the customer email into ``customPayload``.

    Keys supplied in the caller's ``customPayload`` win, including ``email``.

    Raises:
        ValidationError: If ``customPayload`` is present but not a mapping, or
            holds values that cannot be serialized as JSON.
    """
    params = {key: raw.get(key, default) for key, default in _DEFAULTS.items()}
    for key, default in _DEFAULTS.items():
        if params[key] is None:
            params[key] = default

    custom_payload = raw.get("customPayload") or {}
    if not isinstance(custom_payload, Mapping):
        raise ValidationError("customPayload", "Attribute customPayload must be an object")
    params["customPayload"] = {"email": params["email"], **custom_payload}
    try:
        json.dumps(params["customPayload"], allow_nan=False)
    except (TypeError, ValueError) as e:
        raise ValidationError(
            "customPayload", "Attribute customPayload must contain only JSON values"
        ) from e

    params["callback"] = raw.get("callback") or None
    params["onClose"] = raw.get("onClose") or None
    return params


def check_rules(params: dict[str, Any]) -> None:
    """Run the ordered rule chain over normalized params. Pure function.

    Raises:
        ValidationError: For the first rule that fails.
    """
    for rule in RULES:
        if not rule.check(params):
            raise ValidationError(rule.field, rule.message)


class ParameterValidator:
    """Turns raw transaction input into ``CanonicalParameters``."""

    def validate(self, raw: Mapping[str, Any]) -> CanonicalParameters:
        """Normalize and validate ``raw``.

        Raises:
            ValidationError: On the first violated rule; nothing is returned.
        """
        if not isinstance(raw, Mapping):
            raise ValidationError("transaction", "Transaction details must be an object")
        try:
            params = normalize(raw)
            check_rules(params)
        except ValidationError as e:
            logger.debug("Transaction parameters rejected on field %s", e.field)
            raise

        try:
            return CanonicalParameters.model_validate(params)
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "transaction"
            logger.debug("Transaction parameters rejected on field %s", field)
            raise ValidationError(
                field, f"Attribute {field} has an unsupported value"
            ) from e


def validate(raw: Mapping[str, Any]) -> CanonicalParameters:
    """Validate ``raw`` with a default ``ParameterValidator``."""
    return ParameterValidator().validate(raw)
