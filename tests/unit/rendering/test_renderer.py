"""Unit tests for OutputRenderer."""

from __future__ import annotations

import json
import re
from typing import Any

import pytest

from tappop import env
from tappop.application.validators import ParameterValidator
from tappop.domain.entities import CanonicalParameters, RenderMode
from tappop.rendering.renderer import (
    ID_ALPHABET,
    OutputRenderer,
    format_attributes,
    script_data,
)

from tests.helpers.markup import TEST_CDN_URL, extract_params


@pytest.fixture
def params(valid_transaction: dict[str, Any]) -> CanonicalParameters:
    return ParameterValidator().validate(valid_transaction)


class TestScriptData:
    """Test script_data serialization."""

    def test_script_data_escapes_markup_characters(self) -> None:
        value = {"note": "</script><script>alert(1)</script> & more"}
        encoded = script_data(value)

        assert "</script>" not in encoded
        assert "<" not in encoded and ">" not in encoded and "&" not in encoded
        assert json.loads(encoded) == value

    def test_script_data_keeps_slashes_and_unicode(self) -> None:
        encoded = script_data({"url": "https://shop.example.com/x", "name": "Café"})
        assert encoded == '{"url":"https://shop.example.com/x","name":"Café"}'


class TestFormatAttributes:
    """Test format_attributes function."""

    def test_format_attributes_empty(self) -> None:
        assert format_attributes(None) == ""
        assert format_attributes({}) == ""

    def test_format_attributes_escapes_names_and_values(self) -> None:
        rendered = format_attributes({"data-x": 'a"b<c', 'on"click': "x"})

        assert rendered == ' data-x="a&quot;b&lt;c" on&quot;click="x"'


class TestOutputRenderer:
    """Test OutputRenderer modes."""

    def test_render_sdk_only_has_no_parameter_data(
        self, renderer: OutputRenderer, params: CanonicalParameters
    ) -> None:
        artifact = renderer.render(params, RenderMode.SCRIPT_ONLY)

        assert artifact.html == f'<script src="{TEST_CDN_URL}"></script>'
        assert artifact.mode is RenderMode.SCRIPT_ONLY
        assert "K1" not in artifact.html

    def test_render_sdk_only_without_parameters(self, renderer: OutputRenderer) -> None:
        artifact = renderer.render(None, "script_only")
        assert artifact.button_id is None

    def test_render_requires_parameters_for_other_modes(
        self, renderer: OutputRenderer
    ) -> None:
        with pytest.raises(ValueError, match="requires parameters"):
            renderer.render(None, RenderMode.BUTTON)

    def test_render_rejects_unknown_mode(
        self, renderer: OutputRenderer, params: CanonicalParameters
    ) -> None:
        with pytest.raises(ValueError):
            renderer.render(params, "popup")

    def test_render_script_embeds_cleaned_parameters(
        self, renderer: OutputRenderer, params: CanonicalParameters
    ) -> None:
        artifact = renderer.render(params, RenderMode.INLINE_AUTO)

        assert extract_params(artifact.html, "tapTransactionParams") == params.cleaned()
        assert "tapTransactionParams.callback = null;" in artifact.html
        assert "tapTransactionParams.onClose = null;" in artifact.html
        assert "window.tapTransactionParams = tapTransactionParams;" in artifact.html
        assert "TAPPaymentPop.setup(tapTransactionParams);" in artifact.html
        assert "openIframe" not in artifact.html
        assert artifact.button_id is None

    def test_render_script_references_callbacks_by_name(
        self, renderer: OutputRenderer, valid_transaction: dict[str, Any]
    ) -> None:
        params = ParameterValidator().validate(
            {
                **valid_transaction,
                "callback": "handlePaymentSuccess",
                "onClose": "handlePaymentClose",
            }
        )
        markup = renderer.render_script(params).html

        assert "tapTransactionParams.callback = handlePaymentSuccess;" in markup
        assert "tapTransactionParams.onClose = handlePaymentClose;" in markup

    def test_render_button_end_to_end(
        self, renderer: OutputRenderer, params: CanonicalParameters
    ) -> None:
        artifact = renderer.render(params, RenderMode.BUTTON, "Pay Now")
        markup = artifact.html

        assert f'<script src="{TEST_CDN_URL}"></script>' in markup
        assert f'<button id="{artifact.button_id}" type="button">Pay Now</button>' in markup
        assert extract_params(markup, "tapParams") == {
            "apiKey": "K1",
            "amount": 5000,
            "email": "a@b.com",
            "env": "sandbox",
            "customPayload": {"email": "a@b.com"},
        }
        assert f"document.getElementById('{artifact.button_id}')" in markup
        assert "TAPPaymentPop.setup(tapParams).openIframe();" in markup

    def test_render_button_substitutes_default_handlers(
        self, renderer: OutputRenderer, params: CanonicalParameters
    ) -> None:
        markup = renderer.render_button(params).html

        assert 'console.log("Payment successful", response);' in markup
        assert 'console.log("Payment closed");' in markup
        assert "= null;" not in markup

    def test_render_button_escapes_attributes_and_text(
        self, renderer: OutputRenderer, params: CanonicalParameters
    ) -> None:
        markup = renderer.render_button(
            params, "<b>Pay</b>", {"class": 'btn" onclick="x', "title": "a<b"}
        ).html

        assert 'class="btn&quot; onclick=&quot;x"' in markup
        assert 'title="a&lt;b"' in markup
        assert "&lt;b&gt;Pay&lt;/b&gt;</button>" in markup

    def test_button_ids_are_unique_and_well_formed(
        self, renderer: OutputRenderer, params: CanonicalParameters
    ) -> None:
        ids = {renderer.render_button(params).button_id for _ in range(20)}

        assert len(ids) > 1
        for button_id in ids:
            assert re.fullmatch(r"tap-pay-btn-[A-Za-z0-9]{5}", button_id)

    def test_generate_button_id_uses_configured_length(self) -> None:
        button_id = OutputRenderer(cdn_url=TEST_CDN_URL, id_length=8).generate_button_id()
        suffix = button_id[len("tap-pay-btn-") :]

        assert len(suffix) == 8
        assert all(char in ID_ALPHABET for char in suffix)

    def test_cdn_url_is_escaped(self, params: CanonicalParameters) -> None:
        renderer = OutputRenderer(cdn_url='https://cdn.example.com/sdk.js?a=1&b="2"')
        assert (
            renderer.render_sdk_only().html
            == '<script src="https://cdn.example.com/sdk.js?a=1&amp;b=&quot;2&quot;"></script>'
        )

    def test_renderer_defaults_to_process_wide_cdn_url(self) -> None:
        env.set_cdn_url("https://cdn.example.com/other.js")

        assert OutputRenderer().cdn_url == "https://cdn.example.com/other.js"

    def test_renderers_keep_their_own_cdn_url(self) -> None:
        first = OutputRenderer(cdn_url="https://one.example.com/sdk.js")
        env.set_cdn_url("https://two.example.com/sdk.js")

        assert first.cdn_url == "https://one.example.com/sdk.js"
        assert OutputRenderer().cdn_url == "https://two.example.com/sdk.js"
