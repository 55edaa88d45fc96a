"""Pre-filled WhatsApp message linking a placed order to the shop's chat."""

from urllib.parse import quote

from ordering.pricing.rules import PricingUnit, format_currency


def _quantity_text(item) -> str:
    if item.unit == PricingUnit.KG.value:
        return f"{item.quantity:g} kg"
    pieces = int(item.quantity)
    return f"{pieces} pc" if pieces == 1 else f"{pieces} pcs"


def order_summary_text(order, settings) -> str:
    lines = [
        f"Hi {settings.name}! I just placed order #{order.id}. My name is {order.customer_name}.",
        "",
    ]
    for item in order.items:
        line = f"- {item.product_name} x {_quantity_text(item)}"
        if item.cutting_preference:
            line += f" ({item.cutting_preference})"
        lines.append(f"{line}: {format_currency(item.subtotal, settings.currency_symbol)}")
    lines.append("")
    lines.append(f"Total: {format_currency(order.total_amount, settings.currency_symbol)}")
    lines.append("Please confirm.")
    return "\n".join(lines)


def build_whatsapp_url(order, settings) -> str:
    return f"https://wa.me/{settings.whatsapp_number}?text={quote(order_summary_text(order, settings), safe='')}"
