"""Order, pizza and restaurant domain models."""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional

from drone_delivery.domain.coordinate import Coordinate


class OrderStatus(str, Enum):
    """Lifecycle state of an order."""
    UNDEFINED = "UNDEFINED"
    VALID = "VALID"
    INVALID = "INVALID"
    VALID_BUT_NOT_DELIVERED = "VALID_BUT_NOT_DELIVERED"
    DELIVERED = "DELIVERED"


class OrderValidationCode(str, Enum):
    """Reason an order passed or failed validation."""
    UNDEFINED = "UNDEFINED"
    NO_ERROR = "NO_ERROR"
    CARD_NUMBER_INVALID = "CARD_NUMBER_INVALID"
    EXPIRY_DATE_INVALID = "EXPIRY_DATE_INVALID"
    CVV_INVALID = "CVV_INVALID"
    TOTAL_INCORRECT = "TOTAL_INCORRECT"
    PRICE_FOR_PIZZA_INVALID = "PRICE_FOR_PIZZA_INVALID"
    MAX_PIZZA_COUNT_EXCEEDED = "MAX_PIZZA_COUNT_EXCEEDED"
    PIZZA_NOT_DEFINED = "PIZZA_NOT_DEFINED"
    PIZZA_FROM_MULTIPLE_RESTAURANTS = "PIZZA_FROM_MULTIPLE_RESTAURANTS"
    RESTAURANT_CLOSED = "RESTAURANT_CLOSED"


@dataclass
class Pizza:
    """A menu item or an ordered pizza."""
    name: str
    price_in_pence: int

    def to_dict(self) -> dict:
        return {"name": self.name, "priceInPence": self.price_in_pence}

    @classmethod
    def from_dict(cls, data: dict) -> "Pizza":
        return cls(name=data["name"], price_in_pence=int(data.get("priceInPence", 0)))


@dataclass
class CreditCardInformation:
    """Payment details attached to an order."""
    credit_card_number: Optional[str] = None
    credit_card_expiry: Optional[str] = None  # MM/YY
    cvv: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "CreditCardInformation":
        data = data or {}
        return cls(
            credit_card_number=data.get("creditCardNumber"),
            credit_card_expiry=data.get("creditCardExpiry"),
            cvv=data.get("cvv")
        )


@dataclass
class Restaurant:
    """A restaurant the drone collects pizzas from."""
    name: str
    location: Coordinate
    opening_days: List[str] = field(default_factory=list)  # e.g. "MONDAY"
    menu: List[Pizza] = field(default_factory=list)

    def serves(self, pizza_name: str) -> bool:
        """Check if a pizza with this name is on the menu."""
        return any(item.name == pizza_name for item in self.menu)

    def menu_price(self, pizza_name: str) -> Optional[int]:
        """Menu price of a pizza, or None if not served."""
        for item in self.menu:
            if item.name == pizza_name:
                return item.price_in_pence
        return None

    @classmethod
    def from_dict(cls, data: dict) -> "Restaurant":
        """Create restaurant from the REST service representation."""
        return cls(
            name=data["name"],
            location=Coordinate.from_dict(data["location"]),
            opening_days=[day.upper() for day in data.get("openingDays", [])],
            menu=[Pizza.from_dict(p) for p in data.get("menu", [])]
        )


@dataclass
class Order:
    """A customer order for a given day."""
    order_no: str
    order_date: date
    price_total_in_pence: int
    pizzas_in_order: List[Pizza] = field(default_factory=list)
    credit_card_information: CreditCardInformation = field(default_factory=CreditCardInformation)
    order_status: OrderStatus = OrderStatus.UNDEFINED
    order_validation_code: OrderValidationCode = OrderValidationCode.UNDEFINED

    @classmethod
    def from_dict(cls, data: dict) -> "Order":
        """Create order from the REST service representation."""
        return cls(
            order_no=data["orderNo"],
            order_date=date.fromisoformat(data["orderDate"]),
            price_total_in_pence=int(data.get("priceTotalInPence", 0)),
            pizzas_in_order=[Pizza.from_dict(p) for p in data.get("pizzasInOrder") or []],
            credit_card_information=CreditCardInformation.from_dict(data.get("creditCardInformation")),
            order_status=OrderStatus(data.get("orderStatus") or OrderStatus.UNDEFINED.value),
            order_validation_code=OrderValidationCode(
                data.get("orderValidationCode") or OrderValidationCode.UNDEFINED.value
            )
        )
