from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Tuple


class GestureMode(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    ZOOMING = "zooming"


class DrawRect(NamedTuple):
    """Position of the scaled content relative to the viewport origin."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass
class ViewportState:
    """
    The mutable viewport entity. Owned by a single ZoomViewModel.
    right/bottom are derived from scale and offset, never stored.
    """
    content_width: int = 0
    content_height: int = 0
    viewport_width: int = 0
    viewport_height: int = 0

    scale: float = 0.0
    scale_fit: float = 0.0
    scale_min: float = 1.0
    scale_max: float = 3.0

    offset_x: float = 0.0
    offset_y: float = 0.0

    mode: GestureMode = GestureMode.IDLE
    last_pointer: Tuple[float, float] = (0.0, 0.0)
    start_pointer: Tuple[float, float] = (0.0, 0.0)

    # Set only by ZoomViewModel; at most one in flight
    active_animation: Optional[object] = field(default=None, repr=False)

    @property
    def scaled_width(self) -> float:
        return self.scale * self.content_width

    @property
    def scaled_height(self) -> float:
        return self.scale * self.content_height

    @property
    def right(self) -> float:
        return self.offset_x + self.scaled_width

    @property
    def bottom(self) -> float:
        return self.offset_y + self.scaled_height

    def has_content(self) -> bool:
        return self.content_width > 0 and self.content_height > 0

    def is_renderable(self) -> bool:
        return self.has_content() and self.scale > 0

    def exceeds_viewport(self) -> bool:
        """True when the scaled content is larger than the viewport on either axis."""
        return (
            self.scaled_width > self.viewport_width
            or self.scaled_height > self.viewport_height
        )
