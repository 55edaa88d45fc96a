"""FastAPI routes for the Ordering domain — checkout, tracking and the admin console."""

import json
from dataclasses import asdict

from fastapi import APIRouter, Depends, Header, HTTPException, Response
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from ordering.admin import get_admin_auth
from ordering.api.schemas import (
    DashboardResponse,
    OrderConfirmationResponse,
    OrderDetailResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    OrderSummaryResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    SessionResponse,
    SignInRequest,
    StatusResponse,
    TrackingResponse,
    TrackingStepResponse,
    UpdateOrderStatusRequest,
)
from ordering.checkout.validation import validate_mobile
from ordering.config import get_settings
from ordering.order.messaging import build_whatsapp_url
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.order.status import UpdateOrderStatus
from ordering.order.tracking import is_cancelled, tracking_steps


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------
def _iso(value):
    return value.isoformat() if value else None


def _order_fields(order, lifecycle) -> dict:
    return {
        "order_id": str(order.id),
        "customer_name": order.customer_name,
        "mobile": order.mobile,
        "delivery_type": order.delivery_type,
        "address": order.address or None,
        "delivery_slot": order.delivery_slot,
        "items": [
            OrderItemResponse(
                product_id=str(item.product_id),
                product_name=item.product_name,
                unit=item.unit,
                quantity=item.quantity,
                unit_price=item.unit_price,
                subtotal=item.subtotal,
                cutting_preference=item.cutting_preference,
            )
            for item in order.items
        ],
        "subtotal": order.subtotal,
        "delivery_charge": order.delivery_charge or 0.0,
        "total_amount": order.total_amount,
        "status": order.status,
        "status_label": lifecycle.label(order.status),
        "created_at": _iso(order.created_at),
        "updated_at": _iso(order.updated_at),
    }


def _order_summary(order, lifecycle) -> OrderSummaryResponse:
    return OrderSummaryResponse(
        order_id=str(order.id),
        customer_name=order.customer_name,
        mobile=order.mobile,
        delivery_type=order.delivery_type,
        item_count=len(order.items),
        total_amount=order.total_amount,
        status=order.status,
        status_label=lifecycle.label(order.status),
        created_at=_iso(order.created_at),
    )


def _get_order(order_id: str) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found") from None


# ---------------------------------------------------------------------------
# Admin auth dependency
# ---------------------------------------------------------------------------
def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_admin(authorization: str | None = Header(default=None)) -> str:
    token = _bearer_token(authorization)
    if not get_admin_auth().is_admin(token):
        raise HTTPException(
            status_code=401,
            detail="Admin sign-in required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(body: PlaceOrderRequest, response: Response) -> PlaceOrderResponse:
    command = PlaceOrder(
        idempotency_token=body.idempotency_token,
        customer_name=body.customer_name,
        mobile=body.mobile,
        delivery_type=body.delivery_type,
        address=body.address,
        delivery_slot=body.delivery_slot,
        items=json.dumps([line.to_line_dict() for line in body.items]),
        subtotal=body.subtotal,
        delivery_charge=body.delivery_charge,
        total_amount=body.total_amount,
    )
    result = current_domain.process(command, asynchronous=False)
    if not result.created:
        response.status_code = 200
    return PlaceOrderResponse(order_id=result.order_id, created=result.created)


@order_router.get("/track", response_model=TrackingResponse)
async def track_order(mobile: str) -> TrackingResponse:
    error = validate_mobile(mobile)
    if error:
        raise ValidationError({"mobile": [error]})

    order = current_domain.repository_for(Order).latest_for_mobile(mobile)
    if order is None:
        raise HTTPException(status_code=404, detail="No orders found for this mobile number")

    lifecycle = get_settings().lifecycle
    return TrackingResponse(
        order=OrderResponse(**_order_fields(order, lifecycle)),
        cancelled=is_cancelled(order, lifecycle),
        steps=[TrackingStepResponse(**asdict(step)) for step in tracking_steps(order, lifecycle)],
    )


@order_router.get("/{order_id}", response_model=OrderConfirmationResponse)
async def get_order(order_id: str) -> OrderConfirmationResponse:
    order = _get_order(order_id)
    settings = get_settings()
    return OrderConfirmationResponse(
        **_order_fields(order, settings.lifecycle),
        whatsapp_url=build_whatsapp_url(order, settings),
    )


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.post("/session", status_code=201, response_model=SessionResponse)
async def sign_in(body: SignInRequest) -> SessionResponse:
    token = get_admin_auth().sign_in(body.email, body.password)
    if token is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return SessionResponse(token=token)


@admin_router.delete("/session", response_model=StatusResponse)
async def sign_out(token: str = Depends(require_admin)) -> StatusResponse:
    get_admin_auth().sign_out(token)
    return StatusResponse()


@admin_router.get("/orders", response_model=OrderListResponse)
async def list_orders(
    status: str | None = None,
    mobile: str | None = None,
    cursor: str | None = None,
    _token: str = Depends(require_admin),
) -> OrderListResponse:
    settings = get_settings()
    if status and status != "all" and not settings.lifecycle.knows(status):
        raise ValidationError({"status": [f"Unknown status {status!r}"]})

    page_size = settings.mobile_search_limit if mobile else settings.admin_page_size
    page = current_domain.repository_for(Order).list_orders(
        status=status,
        mobile=mobile,
        after_cursor=cursor,
        page_size=page_size,
    )
    return OrderListResponse(
        orders=[_order_summary(order, settings.lifecycle) for order in page.orders],
        next_cursor=page.next_cursor,
    )


@admin_router.get("/orders/{order_id}", response_model=OrderDetailResponse)
async def get_order_detail(order_id: str, _token: str = Depends(require_admin)) -> OrderDetailResponse:
    order = _get_order(order_id)
    lifecycle = get_settings().lifecycle
    return OrderDetailResponse(
        **_order_fields(order, lifecycle),
        allowed_statuses=list(lifecycle.allowed_from(order.status)),
    )


@admin_router.put("/orders/{order_id}/status", response_model=StatusResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    _token: str = Depends(require_admin),
) -> StatusResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status)
    try:
        new_status = current_domain.process(command, asynchronous=False)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found") from None
    return StatusResponse(status=new_status)


@admin_router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(_token: str = Depends(require_admin)) -> DashboardResponse:
    settings = get_settings()
    summary = current_domain.repository_for(Order).today_summary(
        states=settings.lifecycle.states,
        timezone=settings.timezone,
    )
    return DashboardResponse(day=summary.day, total=summary.total, by_status=summary.by_status)
