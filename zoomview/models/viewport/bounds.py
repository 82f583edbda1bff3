from typing import Optional, Tuple

from .viewport_state import DrawRect


def compute_scale_fit(
    content_width: int,
    content_height: int,
    viewport_width: int,
    viewport_height: int,
    scale_max: float,
) -> Optional[float]:
    """
    Returns the scale at which the content fits the viewport, capped by scale_max.
    None means there is no renderable content. A zero viewport gives 0.0.
    """
    if content_width <= 0 or content_height <= 0:
        return None

    viewport_width = max(0, viewport_width)
    viewport_height = max(0, viewport_height)

    scale_x = viewport_width / content_width
    scale_y = viewport_height / content_height
    return min(scale_x, scale_y, scale_max)


def _clamp_axis(offset: float, scaled_size: float, viewport_size: float) -> float:
    if scaled_size <= viewport_size:
        return (viewport_size - scaled_size) / 2
    if offset > 0:
        return 0.0
    if offset + scaled_size < viewport_size:
        return viewport_size - scaled_size
    return offset


def compute_bounds(
    scale: float,
    offset_x: float,
    offset_y: float,
    content_size: Tuple[int, int],
    viewport_size: Tuple[int, int],
) -> DrawRect:
    """
    Applies the centering/clamping rule and returns the draw rectangle.

    An axis where the scaled content fits is centered, discarding any drag offset.
    Otherwise the offset is clamped so no empty space shows at either edge.
    left/top of the result are the corrected offsets.
    """
    content_w, content_h = content_size
    viewport_w, viewport_h = viewport_size

    scaled_w = scale * content_w
    scaled_h = scale * content_h

    left = _clamp_axis(offset_x, scaled_w, viewport_w)
    top = _clamp_axis(offset_y, scaled_h, viewport_h)

    return DrawRect(left, top, left + scaled_w, top + scaled_h)


def map_point_to_content(
    point: Tuple[float, float],
    rect: DrawRect,
    scale: float,
) -> Tuple[float, float]:
    """
    Maps a viewport point into unscaled content coordinates.
    Points outside the rect are snapped onto its nearest edge first.
    """
    x, y = point

    if x < rect.left:
        inside_x = 0.0
    elif x > rect.right:
        inside_x = rect.right - rect.left
    else:
        inside_x = x - rect.left

    if y < rect.top:
        inside_y = 0.0
    elif y > rect.bottom:
        inside_y = rect.bottom - rect.top
    else:
        inside_y = y - rect.top

    return (inside_x / scale, inside_y / scale)
