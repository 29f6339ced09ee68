"""Data Transfer Objects for the payment HTTP surface."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TransactionDetailsDTO(BaseModel):
    """Raw, loosely typed transaction input as posted by a client.

    Fields are not validated here; the parameter validator owns the rules.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "apiKey": "pk_test_123",
                "transID": "ORDER_1001",
                "amount": 5000,
                "email": "customer@example.com",
                "env": "sandbox",
                "callback": "handlePaymentSuccess",
            }
        },
    )


class RenderRequestDTO(BaseModel):
    """DTO for rendering a transaction as markup."""

    transaction: dict[str, Any] = Field(default_factory=dict)
    button_text: str = Field("Pay Now", max_length=200)
    button_attributes: dict[str, str] = Field(default_factory=dict)


class ValidationErrorDTO(BaseModel):
    """DTO for returning a rejected transaction."""

    detail: str
    field: str
