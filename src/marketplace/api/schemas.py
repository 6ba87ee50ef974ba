"""Pydantic request/response schemas for the Marketplace API.

These are external contracts: separate from internal Protean commands.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
class RegisterUserRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"username": "jane", "role": "Buyer"}]}}

    username: str = Field(..., min_length=1, max_length=100)
    role: Literal["Buyer", "Seller"] = "Buyer"


class UpdateUserRequest(BaseModel):
    username: str | None = Field(None, min_length=1, max_length=100)
    role: Literal["Buyer", "Seller"] | None = None


class DepositRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"user_id": "user-001", "amount": 100}]}}

    user_id: str
    amount: int = Field(..., ge=1)


class ResetDepositRequest(BaseModel):
    user_id: str


class UserIdResponse(BaseModel):
    user_id: str


class UserResponse(BaseModel):
    user_id: str
    username: str
    role: str
    balance: int
    status: str


class BalanceResponse(BaseModel):
    user_id: str
    balance: int


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class ListProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"seller_id": "user-002", "name": "Cola", "cost": 10, "stock": 5}]}
    }

    seller_id: str
    name: str = Field(..., min_length=1, max_length=255)
    cost: int = Field(..., ge=0)
    stock: int = Field(0, ge=0)


class ChangeCostRequest(BaseModel):
    cost: int = Field(..., ge=0)


class RestockRequest(BaseModel):
    quantity: int = Field(..., ge=1)


class ProductIdResponse(BaseModel):
    product_id: str


class ProductResponse(BaseModel):
    product_id: str
    seller_id: str
    name: str
    cost: int
    stock: int


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"product_id": "prod-001", "quantity": 2, "buyer_id": "user-001"}]}
    }

    product_id: str
    quantity: int = Field(..., ge=1)
    buyer_id: str


class BasketSchema(BaseModel):
    product_id: str
    quantity: int
    unit_cost: int
    total_cost: int


class OrderResponse(BaseModel):
    order_id: str
    buyer_id: str
    basket: BasketSchema
    created_at: datetime | None = None


class SettlementFailureSchema(BaseModel):
    step: str
    error_type: str
    reason: str


class SettlementSchema(BaseModel):
    outcome: str
    failures: list[SettlementFailureSchema] = []


class PlaceOrderResponse(BaseModel):
    order: OrderResponse
    settlement: SettlementSchema


class StatusResponse(BaseModel):
    status: str = "ok"
