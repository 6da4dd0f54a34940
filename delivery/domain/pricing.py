"""
Order pricing.

Prices are whole integers in the restaurant's minor currency unit. A line
is the dish price plus the extras of the options the customer picked; the
order total is the sum of its lines. No tax, discount or rounding applies.
"""
from typing import Iterable, Optional, Sequence

from delivery.domain.schemas import DishOption, OrderItemOptionInput


def _find_by_name(candidates, name: Optional[str]):
    if not candidates:
        return None
    return next((candidate for candidate in candidates if candidate.name == name), None)


def price_option(definitions: Sequence[DishOption], requested: OrderItemOptionInput) -> int:
    """Extra charged for one requested option. Unknown names cost nothing."""
    option = _find_by_name(definitions, requested.name)
    if option is None:
        return 0

    # Flat add-on: the requested choice, if any, is ignored.
    if option.extra:
        return option.extra

    choice = _find_by_name(option.choices, requested.choice)
    if choice is not None and choice.extra:
        return choice.extra
    return 0


def price_line(
    dish_price: int,
    definitions: Sequence[DishOption],
    requested_options: Iterable[OrderItemOptionInput],
) -> int:
    return dish_price + sum(price_option(definitions, requested) for requested in requested_options)


def order_total(line_prices: Iterable[int]) -> int:
    return sum(line_prices)
