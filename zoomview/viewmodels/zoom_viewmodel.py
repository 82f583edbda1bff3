from functools import partial
from typing import Optional, Tuple, Type

from PyQt6.QtCore import QObject, pyqtSignal

from ..models.viewport.bounds import compute_bounds, compute_scale_fit
from ..models.viewport.errors import InvalidConfiguration
from ..models.viewport.transition import (
    OriginalScaleTransition,
    ScaleFitTransition,
    ZoomTransition,
)
from ..models.viewport.viewport_state import DrawRect, GestureMode, ViewportState
from ..utils.frame_scheduler import FrameScheduler, QtFrameScheduler
from ..utils.logging import get_logger

Point = Tuple[float, float]


class ZoomViewModel(QObject):
    """
    Owns the viewport state and turns drags, pinches and double taps into
    scale/offset updates. All calls are expected on the UI thread.
    """
    redraw_requested = pyqtSignal()
    gesture_claimed = pyqtSignal()
    scale_changed = pyqtSignal(float)
    animation_started = pyqtSignal(str)
    animation_finished = pyqtSignal()

    DEFAULT_SCALE_MAX = 3.0

    # Per-update pinch factor clamp
    FACTOR_MIN = 0.95
    FACTOR_MAX = 1.05

    DOUBLE_TAP_STEPS = 10

    def __init__(self, scheduler: FrameScheduler | None = None):
        super().__init__()
        self._logger = get_logger("ZoomVM")
        self._scheduler = scheduler if scheduler is not None else QtFrameScheduler()
        self._state = ViewportState(scale_max=self.DEFAULT_SCALE_MAX)
        self._scale_min_explicit = False
        self._factor_min = self.FACTOR_MIN
        self._factor_max = self.FACTOR_MAX

        # Bumped on every cancel; stale scheduled steps compare against it
        self._animation_token = 0

    @property
    def state(self) -> ViewportState:
        return self._state

    def get_scale(self) -> float:
        return self._state.scale

    def get_scale_fit(self) -> float:
        return self._state.scale_fit

    def get_mode(self) -> GestureMode:
        return self._state.mode

    def is_animating(self) -> bool:
        return self._state.active_animation is not None

    # --- Sizes --------------------------------------------------------------

    def set_content_size(self, width: int, height: int):
        """Replaces the content dimensions and re-fits in one step."""
        self._state.content_width = int(width)
        self._state.content_height = int(height)
        self._logger.info(f"Content size set to {width}x{height}")
        self._refit()

    def set_viewport_size(self, width: int, height: int):
        self._state.viewport_width = max(0, int(width))
        self._state.viewport_height = max(0, int(height))
        self._logger.debug(f"Viewport size set to {width}x{height}")
        self._refit()

    def _refit(self):
        self.cancel_animation()
        s = self._state
        s.mode = GestureMode.IDLE

        fit = compute_scale_fit(
            s.content_width,
            s.content_height,
            s.viewport_width,
            s.viewport_height,
            s.scale_max,
        )

        if fit is None:
            s.scale_fit = 0.0
            s.scale = 0.0
            s.offset_x = s.offset_y = 0.0
            self._logger.debug("No renderable content")
        else:
            s.scale_fit = fit
            start = min(fit, 1.0)
            if not self._scale_min_explicit:
                s.scale_min = start
            s.scale = self._clamp_scale(start) if fit > 0 else 0.0
            s.offset_x = (s.viewport_width - s.scaled_width) / 2
            s.offset_y = (s.viewport_height - s.scaled_height) / 2

        self.scale_changed.emit(s.scale)
        self.redraw_requested.emit()

    # --- Rendering ----------------------------------------------------------

    def get_draw_rect(self) -> Optional[DrawRect]:
        """
        Returns the clamped/centered rectangle to draw the content into,
        or None when there is nothing to draw. Corrects the stored offset.
        """
        s = self._state
        if not s.has_content():
            return None

        rect = compute_bounds(
            s.scale,
            s.offset_x,
            s.offset_y,
            (s.content_width, s.content_height),
            (s.viewport_width, s.viewport_height),
        )
        s.offset_x, s.offset_y = rect.left, rect.top
        return rect

    # --- Drag ---------------------------------------------------------------

    def on_pointer_down(self, point: Point):
        s = self._state
        s.last_pointer = s.start_pointer = (float(point[0]), float(point[1]))
        if s.mode is not GestureMode.ZOOMING:
            s.mode = GestureMode.DRAGGING

    def on_pointer_move(self, point: Point):
        s = self._state
        if s.mode is GestureMode.DRAGGING:
            dx = point[0] - s.last_pointer[0]
            dy = point[1] - s.last_pointer[1]
            if dx or dy:
                self.cancel_animation()
            s.offset_x += dx
            s.offset_y += dy
            s.last_pointer = (float(point[0]), float(point[1]))

        if self.should_claim_gesture():
            self.gesture_claimed.emit()
        self.redraw_requested.emit()

    def on_pointer_up(self):
        self._state.mode = GestureMode.IDLE
        self.redraw_requested.emit()

    def should_claim_gesture(self) -> bool:
        """True while the content can be panned or is zoomed away from fit."""
        s = self._state
        if not s.is_renderable():
            return False
        return s.exceeds_viewport() or s.scale != s.scale_fit

    # --- Pinch --------------------------------------------------------------

    def on_scale_gesture_begin(self):
        self.cancel_animation()
        self._state.mode = GestureMode.ZOOMING
        self._logger.debug("Scale gesture started")

    def on_scale_gesture_update(self, focal: Point, factor: float) -> float:
        """
        Applies one pinch update around the focal point.
        Returns the factor that was actually applied after clamping.
        """
        if not self._state.is_renderable():
            return 1.0
        self.cancel_animation()
        return self._scale_around(focal, self.clamp_factor(factor))

    def on_scale_gesture_end(self):
        self._state.mode = GestureMode.IDLE
        self._logger.debug(f"Scale gesture ended at {self._state.scale:.4f}")

    def clamp_factor(self, factor: float) -> float:
        # NaN and non-positive factors fall through to the minimum
        if not factor > 0:
            return self._factor_min
        return max(self._factor_min, min(self._factor_max, factor))

    def zoom_by(self, factor: float, focal: Point | None = None) -> float:
        """Scales around focal (default: viewport center) without the per-update clamp."""
        if not factor > 0:
            raise ValueError(f"Zoom factor must be positive, got {factor}")
        if not self._state.is_renderable():
            return 1.0
        self.cancel_animation()
        return self._scale_around(focal or self._viewport_center(), factor)

    def _scale_around(self, focal: Point, factor: float) -> float:
        s = self._state
        pre_scale = s.scale
        anchor_x = (focal[0] - s.offset_x) / pre_scale
        anchor_y = (focal[1] - s.offset_y) / pre_scale

        s.scale = self._clamp_scale(pre_scale * factor)
        effective = s.scale / pre_scale

        s.offset_x = focal[0] - anchor_x * s.scale
        s.offset_y = focal[1] - anchor_y * s.scale

        if s.scale != pre_scale:
            self.scale_changed.emit(s.scale)
        self.redraw_requested.emit()
        return effective

    def _clamp_scale(self, scale: float) -> float:
        s = self._state
        return max(s.scale_min, min(s.scale_max, scale))

    def _viewport_center(self) -> Point:
        s = self._state
        return (s.viewport_width / 2, s.viewport_height / 2)

    # --- Double tap ---------------------------------------------------------

    def on_double_tap(self, point: Point):
        s = self._state
        if not s.is_renderable():
            return

        if (
            s.content_width == s.viewport_width
            and s.content_height == s.viewport_height
        ):
            self._logger.debug("Double tap ignored, content matches viewport")
            return

        if (
            s.content_width < s.viewport_width
            and s.content_height < s.viewport_height
        ):
            to_original = s.scale != 1
        else:
            to_original = s.scale == s.scale_fit

        if to_original:
            self.animate_to_original(point)
        else:
            self.animate_to_fit(point)

    def animate_to_original(self, point: Point | None = None):
        self._start_transition(OriginalScaleTransition, point)

    def animate_to_fit(self, point: Point | None = None):
        self._start_transition(ScaleFitTransition, point)

    def _start_transition(self, kind: Type[ZoomTransition], point: Point | None):
        s = self._state
        if not s.is_renderable():
            return

        self.cancel_animation()
        rect = self.get_draw_rect()
        tap = point or self._viewport_center()
        transition = kind(s, rect, (float(tap[0]), float(tap[1])), self.DOUBLE_TAP_STEPS)

        s.active_animation = transition
        token = self._animation_token
        self._logger.info(
            f"Starting {transition.name} transition "
            f"{transition.start_scale:.4f} -> {transition.target_scale:.4f}"
        )
        self.animation_started.emit(transition.name)
        self._schedule_step(token)

    def _schedule_step(self, token: int):
        self._scheduler.schedule(partial(self._run_animation_step, token))

    def _run_animation_step(self, token: int):
        s = self._state
        transition = s.active_animation
        if token != self._animation_token or transition is None:
            return

        finished = transition.step(s)
        self.scale_changed.emit(s.scale)
        self.redraw_requested.emit()

        if finished:
            s.active_animation = None
            self._logger.info(
                f"Transition {transition.name} finished after "
                f"{transition.steps_taken} steps"
            )
            self.animation_finished.emit()
        else:
            self._schedule_step(token)

    def cancel_animation(self):
        """Stops any in-flight transition; already scheduled steps become no-ops."""
        if self._state.active_animation is not None:
            self._logger.debug("Cancelling active transition")
            self._state.active_animation = None
        self._animation_token += 1

    # --- Configuration ------------------------------------------------------

    def get_scale_min(self) -> float:
        return self._state.scale_min

    def set_scale_min(self, value: float):
        value = float(value)
        if not value > 0:
            self._reject(f"scale_min must be positive, got {value}")
        if value > self._state.scale_max:
            self._reject(
                f"scale_min {value} exceeds scale_max {self._state.scale_max}"
            )
        self._state.scale_min = value
        self._scale_min_explicit = True
        self._clamp_current_scale()

    def reset_scale_min(self):
        """Drops an explicit scale_min and returns to the fit-derived value."""
        s = self._state
        self._scale_min_explicit = False
        s.scale_min = min(s.scale_fit, 1.0) if s.has_content() else 1.0
        s.scale_min = min(s.scale_min, s.scale_max)
        self._clamp_current_scale()

    def get_scale_max(self) -> float:
        return self._state.scale_max

    def set_scale_max(self, value: float):
        value = float(value)
        s = self._state
        if not value > 0:
            self._reject(f"scale_max must be positive, got {value}")
        if self._scale_min_explicit and s.scale_min > value:
            self._reject(f"scale_max {value} is below scale_min {s.scale_min}")

        s.scale_max = value
        if not self._scale_min_explicit:
            s.scale_min = min(s.scale_min, value)

        fit = compute_scale_fit(
            s.content_width,
            s.content_height,
            s.viewport_width,
            s.viewport_height,
            value,
        )
        if fit is not None:
            s.scale_fit = fit
        self._clamp_current_scale()

    def set_factor_range(self, low: float, high: float):
        """Sets the per-update pinch factor clamp."""
        if not (low > 0 and high > 0):
            self._reject(f"Factor range must be positive, got ({low}, {high})")
        if low > high:
            self._reject(f"Factor range is inverted: ({low}, {high})")
        self._factor_min = float(low)
        self._factor_max = float(high)

    def get_factor_range(self) -> Tuple[float, float]:
        return (self._factor_min, self._factor_max)

    def _clamp_current_scale(self):
        # A running transition holds a target clamped to the old range
        self.cancel_animation()
        s = self._state
        if not s.is_renderable():
            return
        clamped = self._clamp_scale(s.scale)
        if clamped != s.scale:
            self._scale_around(self._viewport_center(), clamped / s.scale)

    def _reject(self, message: str):
        self._logger.warning(f"Rejected configuration: {message}")
        raise InvalidConfiguration(message)
