"""FastAPI routes for the Marketplace: users, deposits, products and orders."""

from fastapi import APIRouter, Depends, Request
from protean.utils.globals import current_domain

from marketplace.api.schemas import (
    BalanceResponse,
    BasketSchema,
    ChangeCostRequest,
    DepositRequest,
    ListProductRequest,
    OrderResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    ProductIdResponse,
    ProductResponse,
    RegisterUserRequest,
    ResetDepositRequest,
    RestockRequest,
    SettlementFailureSchema,
    SettlementSchema,
    StatusResponse,
    UpdateUserRequest,
    UserIdResponse,
    UserResponse,
)
from marketplace.errors import UserNotFound
from marketplace.order.placement import OrderPlacementService
from marketplace.order.repository import OrderStore
from marketplace.product.listing import ChangeProductCost, ListProduct, RestockProduct
from marketplace.product.product import Product
from marketplace.user.account import CloseUser, UpdateUser
from marketplace.user.deposit import Deposit, ResetDeposit
from marketplace.user.registration import RegisterUser
from marketplace.user.user import User


def get_order_placement(request: Request) -> OrderPlacementService:
    return request.app.state.order_placement


def get_order_store(request: Request) -> OrderStore:
    return request.app.state.order_store


def _user_response(user) -> UserResponse:
    return UserResponse(
        user_id=str(user.id),
        username=user.username,
        role=user.role,
        balance=user.balance,
        status=user.status,
    )


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        buyer_id=str(order.buyer_id),
        basket=BasketSchema(
            product_id=str(order.basket.product_id),
            quantity=order.basket.quantity,
            unit_cost=order.basket.unit_cost,
            total_cost=order.basket.total_cost,
        ),
        created_at=order.created_at,
    )


# ---------------------------------------------------------------------------
# User Router
# ---------------------------------------------------------------------------
user_router = APIRouter(tags=["users"])


@user_router.post("/users", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    command = RegisterUser(username=body.username, role=body.role)
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@user_router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(user_id: str) -> UserResponse:
    user = current_domain.repository_for(User).get(user_id)
    if not user.is_active:
        raise UserNotFound(f"User {user_id} not found")
    return _user_response(user)


@user_router.put("/users/{user_id}", response_model=StatusResponse)
async def update_user(user_id: str, body: UpdateUserRequest) -> StatusResponse:
    command = UpdateUser(user_id=user_id, username=body.username, role=body.role)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@user_router.delete("/users/{user_id}", response_model=StatusResponse)
async def close_user(user_id: str) -> StatusResponse:
    current_domain.process(CloseUser(user_id=user_id), asynchronous=False)
    return StatusResponse()


@user_router.post("/deposit", response_model=BalanceResponse)
async def deposit(body: DepositRequest) -> BalanceResponse:
    command = Deposit(user_id=body.user_id, amount=body.amount)
    balance = current_domain.process(command, asynchronous=False)
    return BalanceResponse(user_id=body.user_id, balance=balance)


@user_router.post("/reset", response_model=BalanceResponse)
async def reset_deposit(body: ResetDepositRequest) -> BalanceResponse:
    balance = current_domain.process(ResetDeposit(user_id=body.user_id), asynchronous=False)
    return BalanceResponse(user_id=body.user_id, balance=balance)


@user_router.get("/users/{user_id}/orders", response_model=list[OrderResponse])
async def list_user_orders(user_id: str, orders: OrderStore = Depends(get_order_store)) -> list[OrderResponse]:
    return [_order_response(order) for order in orders.find_by_buyer(user_id)]


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def list_product(body: ListProductRequest) -> ProductIdResponse:
    command = ListProduct(
        seller_id=body.seller_id,
        name=body.name,
        cost=body.cost,
        stock=body.stock,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return ProductResponse(
        product_id=str(product.id),
        seller_id=str(product.seller_id),
        name=product.name,
        cost=product.cost,
        stock=product.stock,
    )


@product_router.put("/{product_id}/cost", response_model=StatusResponse)
async def change_product_cost(product_id: str, body: ChangeCostRequest) -> StatusResponse:
    current_domain.process(ChangeProductCost(product_id=product_id, cost=body.cost), asynchronous=False)
    return StatusResponse()


@product_router.post("/{product_id}/restock", response_model=StatusResponse)
async def restock_product(product_id: str, body: RestockRequest) -> StatusResponse:
    current_domain.process(RestockProduct(product_id=product_id, quantity=body.quantity), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    placement: OrderPlacementService = Depends(get_order_placement),
) -> PlaceOrderResponse:
    result = await placement.place_order(
        product_id=body.product_id,
        quantity=body.quantity,
        buyer_id=body.buyer_id,
    )
    return PlaceOrderResponse(
        order=_order_response(result.order),
        settlement=SettlementSchema(
            outcome=result.settlement.outcome.value,
            failures=[
                SettlementFailureSchema(step=f.step.value, error_type=f.error_type, reason=f.reason)
                for f in result.settlement.failures
            ],
        ),
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, orders: OrderStore = Depends(get_order_store)) -> OrderResponse:
    return _order_response(orders.get_order(order_id))
