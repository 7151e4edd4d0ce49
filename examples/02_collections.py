"""
Example 02: Collections and Polymorphism

This example demonstrates collection classes, keyed mappings and resolving
the concrete class of a polymorphic payload with a class map.
"""

from json_mapper import mapper_builder
from collections import UserList
from dataclasses import dataclass, field


@dataclass
class Shape:
    """Base shape"""
    kind: str = ""


@dataclass
class Circle(Shape):
    radius: float = 0.0


@dataclass
class Rectangle(Shape):
    width: float = 0.0
    height: float = 0.0


class Shapes(UserList[Shape]):
    """Collection class wrapping mapped shapes"""

    def kinds(self):
        return [shape.kind for shape in self]


@dataclass
class Canvas:
    name: str = ""
    shapes: Shapes = field(default_factory=Shapes)
    layers: dict[str, list[int]] = field(default_factory=dict)


def pick_shape(payload):
    """Class resolver: choose the concrete shape from the "kind" key"""
    return {"circle": Circle, "rectangle": Rectangle}.get(payload.get("kind"), Shape)


def main():
    mapper = mapper_builder().class_map(Shape, pick_shape).build()

    print("=== Collections and Polymorphism ===\n")

    canvas = mapper.map(
        {
            "name": "sketch",
            "shapes": [
                {"kind": "circle", "radius": 1.5},
                {"kind": "rectangle", "width": 2, "height": "3"},
            ],
            "layers": {"background": [1, 2], "foreground": ["3"]},
        },
        Canvas,
    )
    print(f"Canvas: {canvas.name}")
    print(f"Shapes ({type(canvas.shapes).__name__}): {canvas.shapes.kinds()}")
    for shape in canvas.shapes:
        print(f"  - {shape}")
    print(f"Layers: {canvas.layers}\n")

    # Root level collection class
    shapes = mapper.map([{"kind": "circle", "radius": 2}], Shape, Shapes)
    print(f"Root collection: {type(shapes).__name__} {list(shapes)}")


if __name__ == "__main__":
    main()
