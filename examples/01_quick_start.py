"""
Example 01: Quick Start

This example demonstrates mapping a decoded JSON document onto dataclasses
with json_mapper's JsonMapper.
"""

from json_mapper import JsonMapper
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import json


class Role(Enum):
    """User role"""
    ADMIN = "admin"
    MEMBER = "member"


@dataclass
class Address:
    """Postal address value object"""
    street: str = ""
    city: str = ""


@dataclass
class User:
    """User entity"""
    id: int
    name: str
    role: Role = Role.MEMBER
    active: bool = True
    address: Address | None = None
    signed_up: datetime | None = None
    tags: list[str] = field(default_factory=list)


PAYLOAD = """
{
    "id": "42",
    "name": "Alice",
    "role": "admin",
    "active": "1",
    "address": {"street": "1 Main St", "city": "Springfield"},
    "signed_up": "2024-03-01T09:00:00+0000",
    "tags": ["early-adopter", "beta"]
}
"""


def main():
    mapper = JsonMapper()

    print("=== Quick Start ===\n")

    # map: Scalars are coerced to the declared types
    user = mapper.map(json.loads(PAYLOAD), User)
    print(f"User: {user}")
    print(f"id is {type(user.id).__name__}, active is {type(user.active).__name__}")
    print(f"Lives in {user.address.city}\n")

    # map without a target returns the input unchanged
    raw = json.loads(PAYLOAD)
    print(f"Pass-through: {mapper.map(raw) is raw}\n")

    # A list of objects yields a list of instances, in input order
    users = mapper.map([{"id": 1, "name": "Bob"}, {"id": 2, "name": "Carol"}], User)
    for item in users:
        print(f"  - {item.id}: {item.name} ({item.role.value})")


if __name__ == "__main__":
    main()
