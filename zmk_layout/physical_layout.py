"""
Module containing classes pertaining to the physical layout of a keyboard,
i.e. a sequence of keys each represented by its position, dimensions
and rotation in centi-key units (100 units = 1u).
"""

from dataclasses import dataclass
from functools import cached_property

from pydantic import BaseModel, model_validator


@dataclass(frozen=True, slots=True)
class Frame:
    """Simple class representing a key rectangle in output units, with its top left corner at (x, y)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:  # pylint: disable=missing-function-docstring
        return self.x + self.width

    @property
    def max_y(self) -> float:  # pylint: disable=missing-function-docstring
        return self.y + self.height

    def __mul__(self, other: int | float) -> "Frame":
        return Frame(other * self.x, other * self.y, other * self.width, other * self.height)

    def __rmul__(self, other: int | float) -> "Frame":
        return self.__mul__(other)


class KeyPosition(BaseModel, frozen=True, extra="forbid"):
    """
    Represents the geometry of a physical key, as given by a `&key_physical_attrs` record.
    `x` and `y` are the top left corner and `rotation` is in degrees (CW if positive) around
    (`rotation_x`, `rotation_y`). `index` is the position of the record in the layout.
    """

    width: int
    height: int
    x: int
    y: int
    rotation: int = 0
    rotation_x: int = 0
    rotation_y: int = 0
    index: int

    @property
    def frame(self) -> Frame:
        """Return the unrotated key rectangle in centi-key units."""
        return Frame(self.x, self.y, self.width, self.height)


class PhysicalLayout(BaseModel, frozen=True):
    """Represents the physical layout of keys on the keyboard, as a sequence of keys."""

    name: str
    display_name: str
    keys: list[KeyPosition]

    def __len__(self) -> int:
        return len(self.keys)

    @cached_property
    def width(self) -> int:
        """Return overall width of layout in centi-key units."""
        return max((k.x + k.width for k in self.keys), default=0)

    @cached_property
    def height(self) -> int:
        """Return overall height of layout in centi-key units."""
        return max((k.y + k.height for k in self.keys), default=0)

    @property
    def rotated_keys(self) -> list[KeyPosition]:
        """Return keys that have a non-zero rotation."""
        return [k for k in self.keys if k.rotation]

    @model_validator(mode="after")
    def check_indices(self):
        """Validate that key indices are contiguous from zero, in order."""
        for ind, key in enumerate(self.keys):
            assert key.index == ind, f"Key index {key.index} found at position {ind} of physical layout {self.name!r}"
        return self
