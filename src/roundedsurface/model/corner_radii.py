"""Corner radii of a rounded rectangle and the focused-corner icon lookup."""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class CornerIcon(StrEnum):
    """Icon shown next to the radii fields, one per focused corner."""
    TOP_LEFT = "border-radius-top-left"
    TOP_RIGHT = "border-radius-top-right"
    BOTTOM_LEFT = "border-radius-bottom-left"
    BOTTOM_RIGHT = "border-radius-bottom-right"
    NONE_SELECTED = "border-radius-none-selected"


@dataclass(frozen=True)
class CornerRadii:
    """
    Radius of each corner of the rectangle.

    Values are stored as given. They are only clamped when a surface is built,
    see `clamped`.
    """
    top_left: float = 0.0
    top_right: float = 0.0
    bottom_left: float = 0.0
    bottom_right: float = 0.0

    @classmethod
    def uniform(cls, radius: float) -> CornerRadii:
        return cls(radius, radius, radius, radius)

    def __getitem__(self, corner: tuple[bool, bool]) -> float:
        """Look up a radius by (is_right, is_top)."""
        return self.get_corner_size(corner)

    def get_corner_size(self, corner: tuple[bool, bool]) -> float:
        match corner:
            case (False, False):
                return self.bottom_left
            case (False, True):
                return self.top_left
            case (True, False):
                return self.bottom_right
            case (True, True):
                return self.top_right
            case _:
                raise KeyError(f"Invalid corner key {corner!r}, expected (is_right, is_top).")

    def clamped(self, max_radius: float) -> CornerRadii:
        """Return a copy with every radius limited to [0, max_radius]."""
        max_radius = max(0.0, max_radius)
        return CornerRadii(
            top_left=min(max(self.top_left, 0.0), max_radius),
            top_right=min(max(self.top_right, 0.0), max_radius),
            bottom_left=min(max(self.bottom_left, 0.0), max_radius),
            bottom_right=min(max(self.bottom_right, 0.0), max_radius),
        )

    def max(self) -> float:
        return max(self.top_left, self.top_right, self.bottom_left, self.bottom_right)


FIELD_SUFFIXES: dict[str, CornerIcon] = {
    "topLeft": CornerIcon.TOP_LEFT,
    "topRight": CornerIcon.TOP_RIGHT,
    "bottomLeft": CornerIcon.BOTTOM_LEFT,
    "bottomRight": CornerIcon.BOTTOM_RIGHT,
}


def field_name(property_name: str, suffix: str) -> str:
    """Control name of one radius field, e.g. 'cornerRadii-topLeft'."""
    return f"{property_name}-{suffix}"


def icon_for_focused_field(focused_field: str | None, property_name: str) -> CornerIcon:
    """
    Pick the icon for the currently focused radius field.

    Args:
        focused_field: Name of the control that has keyboard focus (may be None).
        property_name: Name of the radii property the fields belong to.
    """
    for suffix, icon in FIELD_SUFFIXES.items():
        if focused_field == field_name(property_name, suffix):
            return icon
    return CornerIcon.NONE_SELECTED
