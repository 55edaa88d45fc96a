"""Cart reducer — every cart mutation is a pure function of (lines, command).

Lines are held as a tuple in insertion order. Nothing in this module performs
I/O; the CartStore persists whatever the reducer returns.
"""

from dataclasses import dataclass

from ordering.cart.lines import CartLine


@dataclass(frozen=True)
class AddLine:
    line: CartLine


@dataclass(frozen=True)
class UpdateQuantity:
    product_id: str
    quantity: float


@dataclass(frozen=True)
class RemoveLine:
    product_id: str


@dataclass(frozen=True)
class ClearCart:
    pass


@dataclass(frozen=True)
class Hydrate:
    lines: tuple


CartCommand = AddLine | UpdateQuantity | RemoveLine | ClearCart | Hydrate


def _index_of(lines, product_id) -> int | None:
    for index, line in enumerate(lines):
        if line.product_id == str(product_id):
            return index
    return None


def _add(lines, line):
    index = _index_of(lines, line.product_id)
    if index is None:
        return lines + (line,)

    existing = lines[index]
    if existing.unit != line.unit:
        raise ValueError(
            f"Product {line.product_id} is already in the cart priced per {existing.unit}, not per {line.unit}"
        )
    # The price locked when the line was first added stays in force.
    merged = existing.with_quantity(existing.quantity + line.quantity)
    return lines[:index] + (merged,) + lines[index + 1 :]


def _update_quantity(lines, product_id, quantity):
    index = _index_of(lines, product_id)
    if index is None:
        return lines
    updated = lines[index].with_quantity(quantity)
    return lines[:index] + (updated,) + lines[index + 1 :]


def _remove(lines, product_id):
    return tuple(line for line in lines if line.product_id != str(product_id))


def reduce(lines: tuple, command: CartCommand) -> tuple:
    """Return the cart lines after applying ``command``."""
    if isinstance(command, AddLine):
        return _add(lines, command.line)
    if isinstance(command, UpdateQuantity):
        return _update_quantity(lines, command.product_id, command.quantity)
    if isinstance(command, RemoveLine):
        return _remove(lines, command.product_id)
    if isinstance(command, ClearCart):
        return ()
    if isinstance(command, Hydrate):
        return tuple(command.lines)
    raise TypeError(f"Unknown cart command: {command!r}")
