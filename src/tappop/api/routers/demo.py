"""Demo page showing the three ways of handing a payment to the hosted SDK."""

from __future__ import annotations

import uuid
from string import Template

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ...application.use_cases.payment_popup import PaymentPopup
from ...rendering.renderer import OutputRenderer
from ..dependencies import get_output_renderer

router = APIRouter(tags=["demo"])

DEMO_API_KEY = "TkdLb2VUMk46ZXRoWEdJSEF0Z24xOnB1WVUzd3dvS1c4bw=="

DEMO_PAGE = Template(
    """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>TAP Payment Example</title>
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
               max-width: 800px; margin: 50px auto; padding: 20px; background: #f5f5f5; }
        .payment-card { background: white; border-radius: 12px; padding: 30px;
                        box-shadow: 0 2px 10px rgba(0,0,0,0.1); margin-bottom: 30px; }
        .price { font-size: 2em; color: #2563eb; margin: 20px 0; }
        .pay-button { background: #2563eb; color: white; border: none; padding: 15px 40px;
                      font-size: 18px; border-radius: 8px; cursor: pointer; }
        .pay-button:hover { background: #1d4ed8; }
    </style>
</head>
<body>
    <h1>TAP Payment</h1>
    <p>Buttons below use the hosted JavaScript SDK.</p>

    <script>
    function handlePaymentSuccess(response) {
        console.log('Payment successful:', response);
        alert('Payment completed successfully!');
    }

    function handlePaymentClose() {
        console.log('Payment popup was closed');
    }
    </script>

    <div class="payment-card">
        <h2>Example 1: Quick Payment</h2>
        <p>Premium Subscription</p>
        <div class="price">&#8358;5,000.00</div>
        $quick_payment
    </div>

    <div class="payment-card">
        <h2>Example 2: Manual Setup</h2>
        <p>One-time Purchase</p>
        <div class="price">&#8358;10,000.00</div>
        $manual_setup
    </div>

    <div class="payment-card">
        <h2>Example 3: Dynamic JavaScript Setup</h2>
        <p>Enter amount:</p>
        <input type="number" id="custom-amount" value="1000" min="100">
        <br>
        <button id="dynamic-pay-btn" class="pay-button">Pay Custom Amount</button>
        $sdk_only
        <script>
        document.getElementById('dynamic-pay-btn').addEventListener('click', function() {
            var amount = document.getElementById('custom-amount').value;
            TAPPaymentPop.setup({
                apiKey: '$api_key',
                env: 'sandbox',
                transID: 'DYN_' + Date.now(),
                amount: parseFloat(amount),
                email: 'dynamic@example.com',
                callback: handlePaymentSuccess,
                onClose: handlePaymentClose
            }).openIframe();
        });
        </script>
    </div>
</body>
</html>"""
)


def _transaction_id(prefix: str) -> str:
    return f"{prefix}{uuid.uuid4().hex[:13]}"


@router.get("/", response_class=HTMLResponse)
async def demo_page(
    renderer: OutputRenderer = Depends(get_output_renderer),
) -> HTMLResponse:
    """Render the demo page with freshly generated transaction ids."""
    quick = (
        PaymentPopup(renderer=renderer)
        .setup(
            {
                "apiKey": DEMO_API_KEY,
                "transID": _transaction_id("TXN_"),
                "amount": 5000,
                "email": "customer@example.com",
                "phone": "08012345678",
                "env": "sandbox",
                "callback": "handlePaymentSuccess",
                "onClose": "handlePaymentClose",
            }
        )
        .render("Pay ₦5,000", {"class": "pay-button"})
    )

    manual = PaymentPopup(renderer=renderer)
    manual.setup(
        {
            "apiKey": DEMO_API_KEY,
            "transID": _transaction_id("ORDER_"),
            "amount": 10000,
            "email": "buyer@example.com",
            "env": "sandbox",
            "customPayload": {
                "orderId": "ORD-12345",
                "productName": "Premium Widget",
            },
            "callback": "handlePaymentSuccess",
            "onClose": "handlePaymentClose",
        }
    )

    page = DEMO_PAGE.substitute(
        quick_payment=quick,
        manual_setup=manual.render("Complete Purchase", {"class": "pay-button"}),
        sdk_only=manual.render_sdk_only(),
        api_key=DEMO_API_KEY,
    )
    return HTMLResponse(content=page)
