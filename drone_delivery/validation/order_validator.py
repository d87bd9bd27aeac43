"""Order validation rules."""
import re
from datetime import datetime
from typing import Optional, Sequence

from drone_delivery.constants import MAX_PIZZAS_PER_ORDER, ORDER_CHARGE_IN_PENCE
from drone_delivery.domain.order import (
    Order,
    OrderStatus,
    OrderValidationCode,
    Pizza,
    Restaurant,
)

CARD_NUMBER_PATTERN = re.compile(r"^\d{16}$")
CVV_PATTERN = re.compile(r"^\d{3}$")
EXPIRY_PATTERN = re.compile(r"^(0[1-9]|1[0-2])/\d{2}$")


def find_restaurant_for_pizza(pizza: Pizza, restaurants: Sequence[Restaurant]) -> Optional[Restaurant]:
    """Restaurant whose menu has the pizza, or None."""
    for restaurant in restaurants:
        if restaurant.serves(pizza.name):
            return restaurant
    return None


def find_restaurant(order: Order, restaurants: Sequence[Restaurant]) -> Optional[Restaurant]:
    """Restaurant serving the first pizza of an order, or None."""
    if order is None or not order.pizzas_in_order:
        return None
    return find_restaurant_for_pizza(order.pizzas_in_order[0], restaurants)


class OrderValidator:
    """Runs the validation rules over an order, stopping at the first failure."""

    def is_card_invalid(self, order: Order) -> bool:
        number = order.credit_card_information.credit_card_number
        return number is None or not CARD_NUMBER_PATTERN.match(number)

    def is_cvv_invalid(self, order: Order) -> bool:
        cvv = order.credit_card_information.cvv
        return cvv is None or not CVV_PATTERN.match(cvv)

    def is_expiry_date_invalid(self, order: Order) -> bool:
        """Invalid if unparsable or the card expired before the order month."""
        expiry = order.credit_card_information.credit_card_expiry
        if expiry is None or not EXPIRY_PATTERN.match(expiry):
            return True
        card_expiry = datetime.strptime(expiry, "%m/%y")
        order_month = (order.order_date.year, order.order_date.month)
        return order_month > (card_expiry.year, card_expiry.month)

    def is_max_pizza_count_exceeded(self, order: Order) -> bool:
        return len(order.pizzas_in_order) > MAX_PIZZAS_PER_ORDER

    def is_any_pizza_undefined(self, order: Order, restaurants: Sequence[Restaurant]) -> bool:
        return any(find_restaurant_for_pizza(p, restaurants) is None for p in order.pizzas_in_order)

    def are_pizzas_from_multiple_restaurants(self, order: Order,
                                             restaurants: Sequence[Restaurant]) -> bool:
        names = set()
        for pizza in order.pizzas_in_order:
            restaurant = find_restaurant_for_pizza(pizza, restaurants)
            if restaurant is not None:
                names.add(restaurant.name)
        return len(names) > 1

    def is_restaurant_closed(self, order: Order, restaurants: Sequence[Restaurant]) -> bool:
        restaurant = find_restaurant(order, restaurants)
        if restaurant is None:
            return True
        weekday = order.order_date.strftime("%A").upper()
        return weekday not in restaurant.opening_days

    def is_total_incorrect(self, order: Order, restaurants: Sequence[Restaurant]) -> bool:
        restaurant = find_restaurant(order, restaurants)
        if restaurant is None:
            return True

        total = ORDER_CHARGE_IN_PENCE
        for pizza in order.pizzas_in_order:
            price = restaurant.menu_price(pizza.name)
            if price is None:
                return True
            total += price
        return total != order.price_total_in_pence

    def validate_order(self, order: Order, restaurants: Sequence[Restaurant]) -> Order:
        """Validate an order in place.

        The order is marked INVALID with the code of the first failing rule,
        or VALID_BUT_NOT_DELIVERED with NO_ERROR if every rule passes.

        Args:
            order: Order to validate (updated in place)
            restaurants: Known restaurants

        Returns:
            The same order object
        """
        order.order_status = OrderStatus.INVALID
        order.order_validation_code = OrderValidationCode.NO_ERROR

        rules = [
            (lambda: self.is_card_invalid(order), OrderValidationCode.CARD_NUMBER_INVALID),
            (lambda: self.is_cvv_invalid(order), OrderValidationCode.CVV_INVALID),
            (lambda: self.is_expiry_date_invalid(order), OrderValidationCode.EXPIRY_DATE_INVALID),
            (lambda: self.is_max_pizza_count_exceeded(order), OrderValidationCode.MAX_PIZZA_COUNT_EXCEEDED),
            (lambda: self.is_any_pizza_undefined(order, restaurants), OrderValidationCode.PIZZA_NOT_DEFINED),
            (lambda: self.are_pizzas_from_multiple_restaurants(order, restaurants),
             OrderValidationCode.PIZZA_FROM_MULTIPLE_RESTAURANTS),
            (lambda: self.is_restaurant_closed(order, restaurants), OrderValidationCode.RESTAURANT_CLOSED),
            (lambda: self.is_total_incorrect(order, restaurants), OrderValidationCode.TOTAL_INCORRECT),
        ]

        for check, code in rules:
            if check():
                order.order_validation_code = code
                return order

        order.order_status = OrderStatus.VALID_BUT_NOT_DELIVERED
        return order
