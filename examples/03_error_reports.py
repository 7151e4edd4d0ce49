"""
Example 03: Error Reports and Strict Mode

This example demonstrates collecting mapping errors in a report (lenient
mode) and failing fast on the first error (strict mode).
"""

from json_mapper import JsonMapper, MapperConfiguration, MappingViolation
from dataclasses import dataclass, field


@dataclass
class Item:
    sku: str
    quantity: int = 1


@dataclass
class Cart:
    owner: str
    items: list[Item] = field(default_factory=list)


PAYLOAD = {
    "items": [
        {"sku": "A-1", "quantity": "2"},
        {"sku": "B-2", "quantity": "lots"},
    ],
    "coupon": "SPRING",
}


def main():
    mapper = JsonMapper()

    print("=== Lenient Mode ===\n")

    # map_with_report: Errors are collected, mapping continues
    result = mapper.map_with_report(PAYLOAD, Cart)
    print(f"Value: {result.value}")
    print(f"{result.report.error_count()} error(s):")
    for error in result.report:
        print(f"  - {error.path}: {error.message}")
    print()

    print("=== Strict Mode ===\n")

    # Strict mode raises on the first unknown, missing or mistyped property
    strict = MapperConfiguration.strict()
    try:
        mapper.map(PAYLOAD, Cart, configuration=strict)
    except MappingViolation as e:
        print(f"{type(e).__name__} at {e.path}: {e}\n")

    # Unknown keys can be ignored in lenient mode
    relaxed = MapperConfiguration().with_ignore_unknown_properties()
    result = mapper.map_with_report(PAYLOAD, Cart, configuration=relaxed)
    print(f"Ignoring unknown keys leaves {result.report.error_count()} error(s)")


if __name__ == "__main__":
    main()
