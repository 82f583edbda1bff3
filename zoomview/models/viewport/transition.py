from abc import ABC, abstractmethod
from typing import Tuple

from .bounds import map_point_to_content
from .viewport_state import DrawRect, ViewportState


class ZoomTransition(ABC):
    """
    A fixed-step scale transition driven one frame at a time.

    The owner calls step() once per scheduled frame until it returns True.
    Targets are clamped into [scale_min, scale_max] at creation time.
    """
    name = "transition"

    def __init__(self, state: ViewportState, target_scale: float, steps: int):
        self.steps = max(1, steps)
        self.steps_taken = 0
        self.start_scale = state.scale
        self.target_scale = max(state.scale_min, min(state.scale_max, target_scale))
        self.zoom_in = self.target_scale > self.start_scale
        self._scale_step = (self.target_scale - self.start_scale) / self.steps
        self.finished = False

    def _advance_scale(self, state: ViewportState) -> None:
        self.steps_taken += 1
        if self.steps_taken >= self.steps:
            state.scale = self.target_scale
        elif self.zoom_in:
            state.scale = min(state.scale + self._scale_step, self.target_scale)
        else:
            state.scale = max(state.scale + self._scale_step, self.target_scale)

    def step(self, state: ViewportState) -> bool:
        """Applies one frame. Returns True once the target scale is reached."""
        if self.finished:
            return True
        self._apply(state)
        self.finished = state.scale == self.target_scale
        return self.finished

    @abstractmethod
    def _apply(self, state: ViewportState) -> None:
        pass


class OriginalScaleTransition(ZoomTransition):
    """
    Zooms to scale 1 and brings the tapped content point to the viewport center.
    """
    name = "original_scale"

    def __init__(
        self,
        state: ViewportState,
        rect: DrawRect,
        tap: Tuple[float, float],
        steps: int,
        target_scale: float = 1.0,
    ):
        super().__init__(state, target_scale, steps)
        content_x, content_y = map_point_to_content(tap, rect, state.scale)

        self.target_offset = (
            state.viewport_width / 2 - content_x * self.target_scale,
            state.viewport_height / 2 - content_y * self.target_scale,
        )
        self._offset_step = (
            (self.target_offset[0] - state.offset_x) / self.steps,
            (self.target_offset[1] - state.offset_y) / self.steps,
        )

    def _apply(self, state: ViewportState) -> None:
        state.offset_x += self._offset_step[0]
        state.offset_y += self._offset_step[1]
        self._advance_scale(state)

        # Snap away accumulated rounding drift
        if state.scale == self.target_scale:
            state.offset_x, state.offset_y = self.target_offset


class ScaleFitTransition(ZoomTransition):
    """Zooms to the fit scale keeping the tapped content point under the tap."""
    name = "scale_fit"

    def __init__(
        self,
        state: ViewportState,
        rect: DrawRect,
        tap: Tuple[float, float],
        steps: int,
    ):
        super().__init__(state, state.scale_fit, steps)
        self.tap = tap
        self.anchor = map_point_to_content(tap, rect, state.scale)

    def _apply(self, state: ViewportState) -> None:
        self._advance_scale(state)
        state.offset_x = self.tap[0] - self.anchor[0] * state.scale
        state.offset_y = self.tap[1] - self.anchor[1] * state.scale
