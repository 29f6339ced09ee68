from __future__ import annotations

import json
import os
import uuid
from typing import Any, Dict

import httpx


def print_response(label: str, r: httpx.Response) -> None:
    try:
        data = r.json()
        pretty = json.dumps(data, indent=2, ensure_ascii=False)
        print(f"{label}: {r.status_code}\n{pretty}")
    except ValueError:
        print(f"{label}: {r.status_code}\n{r.text}")


def build_transaction() -> Dict[str, Any]:
    return {
        "apiKey": os.environ.get("TAP_API_KEY", "pk_test_demo"),
        "transID": f"ORDER_{uuid.uuid4().hex[:12]}",
        "amount": 2500,
        "email": "buyer@example.com",
        "env": "sandbox",
        "customPayload": {"orderId": "ORD-12345"},
        "callback": "handlePaymentSuccess",
    }


def main() -> None:
    base_url = os.environ.get("TAP_API_BASE_URL", "http://localhost:8000")
    transaction = build_transaction()

    with httpx.Client(base_url=base_url, timeout=10.0) as client:
        r = client.post("/api/v1/payments/params", json=transaction)
        print_response("Transaction params", r)

        r = client.post(
            "/api/v1/payments/render",
            params={"mode": "button"},
            json={
                "transaction": transaction,
                "button_text": "Pay Now",
                "button_attributes": {"class": "pay-button"},
            },
        )
        print_response("Button markup", r)
        if r.status_code == 200:
            print(f"Button id: {r.headers.get('x-button-id')}")

        # Missing env is rejected before anything is rendered
        invalid = {k: v for k, v in transaction.items() if k != "env"}
        r = client.post("/api/v1/payments/params", json=invalid)
        print_response("Invalid transaction", r)


if __name__ == "__main__":
    main()
