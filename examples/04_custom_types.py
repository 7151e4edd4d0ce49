"""
Example 04: Custom Types, Markers and Naming

This example demonstrates custom type converters, property markers and
converting camelCase JSON keys to snake_case attributes.
"""

from json_mapper import (
    DateFormat,
    ReplaceNullWithDefault,
    SnakeCasePropertyNameConverter,
    mapper_builder,
    replace_property,
)
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Annotated
from pydantic import BaseModel


class Money:
    """Value object built by a custom converter"""

    def __init__(self, amount, currency="EUR"):
        self.amount = Decimal(str(amount))
        self.currency = currency

    def __repr__(self):
        return f"Money({self.amount} {self.currency})"


@replace_property("display_name", replaces="title")
@dataclass
class Product:
    display_name: str = ""
    unit_price: Money | None = None
    stock_level: Annotated[int, ReplaceNullWithDefault()] = 0
    released_on: Annotated[date, DateFormat("%d.%m.%Y")] | None = None


class Supplier(BaseModel):
    """Pydantic models are valid targets too"""
    company_name: str
    contact_email: str = ""


def main():
    mapper = (
        mapper_builder()
        .name_converter(SnakeCasePropertyNameConverter())
        .custom_type(Money, lambda value: Money(value["amount"], value["currency"]))
        .build()
    )

    print("=== Custom Types and Markers ===\n")

    product = mapper.map(
        {
            "title": "Desk Lamp",
            "unitPrice": {"amount": "24.90", "currency": "USD"},
            "stockLevel": None,
            "releasedOn": "01.09.2023",
        },
        Product,
    )
    print(f"Product: {product}\n")

    supplier = mapper.map({"companyName": "Acme", "contactEmail": "hi@acme.test"}, Supplier)
    print(f"Supplier: {supplier!r}")


if __name__ == "__main__":
    main()
