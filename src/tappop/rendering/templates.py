"""Markup templates for the hosted SDK hand-off.

Placeholders are filled by ``OutputRenderer``; every value substituted here is
already escaped (markup) or serialized (script data).
"""

from __future__ import annotations

from string import Template

DEFAULT_SUCCESS_HANDLER = (
    'function(response) { console.log("Payment successful", response); }'
)
DEFAULT_CLOSE_HANDLER = 'function() { console.log("Payment closed"); }'

SDK_TAG = Template('<script src="$cdn_url"></script>')

INLINE_SCRIPT = Template(
    """$sdk_tag
<script>
(function() {
    var tapTransactionParams = $params;
    tapTransactionParams.callback = $callback;
    tapTransactionParams.onClose = $on_close;

    window.tapTransactionParams = tapTransactionParams;

    if (typeof TAPPaymentPop !== 'undefined') {
        TAPPaymentPop.setup(tapTransactionParams);
    }
})();
</script>"""
)

BUTTON = Template(
    """$sdk_tag
<button id="$button_id" type="button"$attributes>$button_text</button>
<script>
(function() {
    var tapButton = document.getElementById('$button_id');
    var tapParams = $params;
    tapParams.callback = $callback;
    tapParams.onClose = $on_close;

    tapButton.addEventListener('click', function() {
        if (typeof TAPPaymentPop !== 'undefined') {
            TAPPaymentPop.setup(tapParams).openIframe();
        } else {
            console.error('TAPPaymentPop SDK not loaded');
        }
    });
})();
</script>"""
)
