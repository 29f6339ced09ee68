"""Rendering of validated parameters into browser markup."""

from __future__ import annotations

import html
import json
import logging
import secrets
import string
from collections.abc import Mapping
from typing import Any, Optional

from ..domain.entities import CanonicalParameters, RenderArtifact, RenderMode
from ..env import check_button_id_prefix, get_cdn_url, get_settings
from . import templates

logger = logging.getLogger(__name__)

ID_ALPHABET = string.ascii_letters + string.digits

# Characters that could end the surrounding <script> element or open a
# comment. Inside a JSON string they decode to the same value.
_SCRIPT_UNSAFE = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"}


def script_data(value: Any) -> str:
    """Serialize ``value`` as a JSON literal safe to embed in a script block.

    Slashes and non-ASCII text are kept verbatim.
    """
    encoded = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    for char, escaped in _SCRIPT_UNSAFE.items():
        encoded = encoded.replace(char, escaped)
    return encoded


def format_attributes(attributes: Optional[Mapping[Any, Any]]) -> str:
    """Build a ``name="value"`` attribute string, escaping names and values."""
    if not attributes:
        return ""
    return "".join(
        f' {html.escape(str(name))}="{html.escape(str(value))}"'
        for name, value in attributes.items()
    )


class OutputRenderer:
    """Produces the SDK hand-off markup for a given render mode.

    Each instance carries its own SDK location, so renderers configured for
    different CDNs never interfere with each other.
    """

    def __init__(
        self,
        cdn_url: Optional[str] = None,
        button_id_prefix: Optional[str] = None,
        id_length: int = 5,
    ) -> None:
        self.cdn_url = cdn_url or get_cdn_url()
        self.button_id_prefix = (
            check_button_id_prefix(button_id_prefix)
            if button_id_prefix is not None
            else get_settings().button_id_prefix
        )
        self.id_length = id_length

    def generate_button_id(self) -> str:
        """Return a fresh DOM id: prefix plus random alphanumeric characters."""
        suffix = "".join(secrets.choice(ID_ALPHABET) for _ in range(self.id_length))
        return f"{self.button_id_prefix}{suffix}"

    def render(
        self,
        params: Optional[CanonicalParameters],
        mode: RenderMode | str,
        button_text: str = "Pay Now",
        button_attributes: Optional[Mapping[Any, Any]] = None,
    ) -> RenderArtifact:
        """Render ``params`` in the requested mode.

        ``params`` may be None only for ``RenderMode.SCRIPT_ONLY``.
        """
        mode = RenderMode(mode)
        if mode is RenderMode.SCRIPT_ONLY:
            return self.render_sdk_only()
        if params is None:
            raise ValueError(f"Render mode {mode.value} requires parameters")
        if mode is RenderMode.INLINE_AUTO:
            return self.render_script(params)
        return self.render_button(params, button_text, button_attributes)

    def render_sdk_only(self) -> RenderArtifact:
        """Render only the tag loading the SDK, with no configuration."""
        logger.debug("Rendering SDK tag only")
        return RenderArtifact(html=self._sdk_tag(), mode=RenderMode.SCRIPT_ONLY)

    def render_script(self, params: CanonicalParameters) -> RenderArtifact:
        """Render the SDK tag plus a script that publishes the config globally.

        Missing callbacks are emitted as ``null``.
        """
        markup = templates.INLINE_SCRIPT.substitute(
            sdk_tag=self._sdk_tag(),
            params=script_data(params.cleaned()),
            callback=params.callback or "null",
            on_close=params.on_close or "null",
        )
        logger.debug("Rendered inline setup script")
        return RenderArtifact(html=markup, mode=RenderMode.INLINE_AUTO)

    def render_button(
        self,
        params: CanonicalParameters,
        button_text: str = "Pay Now",
        button_attributes: Optional[Mapping[Any, Any]] = None,
    ) -> RenderArtifact:
        """Render the SDK tag, a pay button and its click handler.

        Missing callbacks are replaced by handlers that log to the console.
        """
        button_id = self.generate_button_id()
        markup = templates.BUTTON.substitute(
            sdk_tag=self._sdk_tag(),
            button_id=button_id,
            attributes=format_attributes(button_attributes),
            button_text=html.escape(str(button_text)),
            params=script_data(params.cleaned()),
            callback=params.callback or templates.DEFAULT_SUCCESS_HANDLER,
            on_close=params.on_close or templates.DEFAULT_CLOSE_HANDLER,
        )
        logger.debug("Rendered payment button %s", button_id)
        return RenderArtifact(html=markup, mode=RenderMode.BUTTON, button_id=button_id)

    def _sdk_tag(self) -> str:
        return templates.SDK_TAG.substitute(cdn_url=html.escape(self.cdn_url))
