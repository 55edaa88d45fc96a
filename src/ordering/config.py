"""Shop configuration — read from the environment once per process."""

import os
from dataclasses import dataclass, field

from ordering.order.lifecycle import STANDARD, OrderLifecycle
from ordering.pricing.rules import CURRENCY_SYMBOL, DeliveryPolicy

DEFAULT_DELIVERY_SLOTS = (
    "Morning (7AM – 10AM)",
    "Afternoon (12PM – 3PM)",
    "Evening (4PM – 7PM)",
)


@dataclass(frozen=True)
class ShopSettings:
    name: str = "Bismi Broilers"
    whatsapp_number: str = "918681087082"
    currency_symbol: str = CURRENCY_SYMBOL
    minimum_order_amount: float = 100.0
    delivery_policy: DeliveryPolicy = field(default_factory=DeliveryPolicy)
    delivery_slots: tuple = DEFAULT_DELIVERY_SLOTS
    admin_page_size: int = 15
    mobile_search_limit: int = 50
    timezone: str = "Asia/Kolkata"
    lifecycle: OrderLifecycle = field(default_factory=OrderLifecycle.builtin)


def _float(environ, key, default):
    raw = environ.get(key)
    if raw in (None, ""):
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None


def _int(environ, key, default):
    raw = environ.get(key)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{key} must be at least 1, got {value}")
    return value


def load_settings(environ=None) -> ShopSettings:
    """Build settings from ``environ`` (defaults to ``os.environ``)."""
    environ = os.environ if environ is None else environ

    policy = DeliveryPolicy(
        kind=environ.get("DELIVERY_POLICY", "free"),
        fee=_float(environ, "DELIVERY_FEE", 0.0),
        free_above=_float(environ, "FREE_DELIVERY_ABOVE", None),
    )

    lifecycle_file = environ.get("ORDER_LIFECYCLE_FILE")
    if lifecycle_file:
        lifecycle = OrderLifecycle.from_json_file(lifecycle_file)
    else:
        lifecycle = OrderLifecycle.builtin(environ.get("ORDER_LIFECYCLE", STANDARD))

    slots = environ.get("DELIVERY_SLOTS")
    delivery_slots = tuple(s.strip() for s in slots.split("|") if s.strip()) if slots else DEFAULT_DELIVERY_SLOTS

    return ShopSettings(
        name=environ.get("SHOP_NAME", "Bismi Broilers"),
        whatsapp_number=environ.get("SHOP_WHATSAPP", "918681087082"),
        minimum_order_amount=_float(environ, "MINIMUM_ORDER_AMOUNT", 100.0),
        delivery_policy=policy,
        delivery_slots=delivery_slots,
        admin_page_size=_int(environ, "ADMIN_PAGE_SIZE", 15),
        mobile_search_limit=_int(environ, "MOBILE_SEARCH_LIMIT", 50),
        timezone=environ.get("SHOP_TIMEZONE", "Asia/Kolkata"),
        lifecycle=lifecycle,
    )


_settings_instance = None


def get_settings() -> ShopSettings:
    """Return the process settings (singleton), loading them on first use."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = load_settings()
    return _settings_instance


def use_settings(settings: ShopSettings) -> None:
    """Install ``settings`` as the process settings."""
    global _settings_instance
    _settings_instance = settings


def reset_settings():
    """Reset the settings singleton (useful for testing)."""
    global _settings_instance
    _settings_instance = None
