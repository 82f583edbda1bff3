import math

import pytest

from zoomview.models.viewport.errors import InvalidConfiguration
from zoomview.models.viewport.viewport_state import GestureMode
from zoomview.viewmodels.zoom_viewmodel import ZoomViewModel


# --- Fit ---------------------------------------------------------------------

def test_initial_fit_for_large_content(make_vm):
    vm = make_vm((4000, 3000), (1000, 800), scale_max=3)
    assert vm.get_scale_fit() == pytest.approx(0.25)
    assert vm.get_scale() == pytest.approx(0.25)
    assert vm.get_scale_min() == pytest.approx(0.25)

def test_initial_scale_caps_at_one_for_small_content(make_vm):
    vm = make_vm((200, 100), (1000, 800))
    assert vm.get_scale_fit() == pytest.approx(3.0)
    assert vm.get_scale() == 1.0
    assert vm.get_scale_min() == 1.0

@pytest.mark.parametrize("content,viewport,scale_max", [
    ((4000, 3000), (1000, 800), 3.0),
    ((640, 480), (1920, 1080), 2.0),
    ((1080, 1920), (800, 600), 5.0),
    ((1, 1), (300, 300), 10.0),
])
def test_fit_formula(make_vm, content, viewport, scale_max):
    vm = make_vm(content, viewport, scale_max=scale_max)
    expected = min(viewport[0] / content[0], viewport[1] / content[1], scale_max)
    assert vm.get_scale_fit() == pytest.approx(expected)
    assert vm.get_scale() == pytest.approx(min(expected, 1))

def test_refit_on_viewport_change_resets_scale(make_vm):
    vm = make_vm((4000, 3000), (1000, 800))
    vm.zoom_by(2.0)
    vm.set_viewport_size(2000, 1500)
    assert vm.get_scale() == pytest.approx(0.5)
    assert vm.get_scale_min() == pytest.approx(0.5)

def test_no_content_has_no_draw_rect(make_vm):
    vm = make_vm((0, 0), (1000, 800))
    assert vm.get_draw_rect() is None
    vm.on_double_tap((10, 10))
    assert vm.on_scale_gesture_update((10, 10), 1.05) == 1.0

def test_zero_viewport_gives_empty_rect(make_vm):
    vm = make_vm((400, 300), (0, 0))
    rect = vm.get_draw_rect()
    assert rect is not None
    assert rect.is_empty()

def test_initial_rect_is_centered(make_vm):
    vm = make_vm((4000, 3000), (1000, 800))
    rect = vm.get_draw_rect()
    assert (rect.left, rect.top, rect.right, rect.bottom) == pytest.approx((0, 25, 1000, 775))

def test_draw_rect_idempotent(make_vm):
    vm = make_vm((4000, 3000), (1000, 800))
    vm.zoom_by(3.0, (100, 100))
    vm.state.offset_x += 5000
    assert vm.get_draw_rect() == vm.get_draw_rect()


# --- Drag --------------------------------------------------------------------

def test_drag_applies_delta(make_vm):
    vm = make_vm((4000, 3000), (1000, 800))
    vm.state.offset_x, vm.state.offset_y = -500.0, -300.0
    vm.on_pointer_down((100, 100))
    vm.on_pointer_move((130, 115))
    assert vm.get_mode() is GestureMode.DRAGGING
    assert vm.state.offset_x == pytest.approx(-470)
    assert vm.state.offset_y == pytest.approx(-285)
    assert vm.state.start_pointer == (100, 100)
    assert vm.state.last_pointer == (130, 115)

def test_drag_uses_last_pointer(make_vm):
    vm = make_vm((4000, 3000), (1000, 800))
    vm.on_pointer_down((0, 0))
    vm.on_pointer_move((10, 0))
    vm.on_pointer_move((25, 5))
    assert vm.state.offset_x == pytest.approx(25)
    assert vm.state.offset_y == pytest.approx(25 + 5)

def test_drag_offset_corrected_before_next_delta(make_vm):
    vm = make_vm((4000, 3000), (1000, 800))
    vm.zoom_by(4.0, (0, 0))
    vm.on_pointer_down((500, 500))
    vm.on_pointer_move((900, 500))
    assert vm.get_draw_rect().left == 0
    vm.on_pointer_move((850, 500))
    assert vm.state.offset_x == pytest.approx(-50)

def test_pointer_up_returns_to_idle(make_vm):
    vm = make_vm()
    vm.on_pointer_down((1, 1))
    vm.on_pointer_up()
    assert vm.get_mode() is GestureMode.IDLE
    before = (vm.state.offset_x, vm.state.offset_y)
    vm.on_pointer_move((200, 200))
    assert (vm.state.offset_x, vm.state.offset_y) == before

def test_every_move_requests_redraw(make_vm, recorder):
    vm = make_vm()
    redraws = recorder(vm.redraw_requested)
    vm.on_pointer_move((5, 5))
    vm.on_pointer_down((5, 5))
    vm.on_pointer_move((6, 6))
    assert redraws.count == 2

def test_gesture_claimed_only_when_pannable(make_vm, recorder):
    vm = make_vm((4000, 3000), (1000, 800))
    claims = recorder(vm.gesture_claimed)
    vm.on_pointer_down((0, 0))
    vm.on_pointer_move((1, 1))
    assert claims.count == 0
    assert not vm.should_claim_gesture()

    vm.zoom_by(2.0)
    vm.on_pointer_move((2, 2))
    assert claims.count == 1
    assert vm.should_claim_gesture()


# --- Pinch -------------------------------------------------------------------

def test_pinch_example(make_vm):
    vm = make_vm((4000, 3000), (1000, 800))
    vm.state.offset_x, vm.state.offset_y = 0.0, 0.0
    vm.on_scale_gesture_begin()
    applied = vm.on_scale_gesture_update((500, 400), 1.05)
    assert applied == pytest.approx(1.05)
    assert vm.get_scale() == pytest.approx(0.2625)
    # 400 - 1600 * 0.2625
    assert (vm.state.offset_x, vm.state.offset_y) == pytest.approx((-25, -20))

def test_pinch_sets_and_clears_zoom_mode(make_vm):
    vm = make_vm()
    vm.on_pointer_down((10, 10))
    vm.on_scale_gesture_begin()
    assert vm.get_mode() is GestureMode.ZOOMING
    offset = (vm.state.offset_x, vm.state.offset_y)
    vm.on_pointer_move((80, 80))
    assert (vm.state.offset_x, vm.state.offset_y) == offset
    vm.on_scale_gesture_end()
    assert vm.get_mode() is GestureMode.IDLE

@pytest.mark.parametrize("raw,expected", [
    (2.0, 1.05),
    (0.5, 0.95),
    (1.01, 1.01),
    (0.0, 0.95),
    (-3.0, 0.95),
    (float("nan"), 0.95),
])
def test_factor_clamp(raw, expected):
    vm = ZoomViewModel()
    assert vm.clamp_factor(raw) == pytest.approx(expected)

def _content_point(vm, focal):
    s = vm.state
    return ((focal[0] - s.offset_x) / s.scale, (focal[1] - s.offset_y) / s.scale)

@pytest.mark.parametrize("factor", [1.05, 0.95, 3.0, 0.01, 1.0])
@pytest.mark.parametrize("focal", [(0, 0), (500, 400), (999, 10)])
def test_pinch_keeps_anchor(make_vm, factor, focal):
    vm = make_vm((4000, 3000), (1000, 800))
    vm.zoom_by(1.5, (300, 300))
    vm.get_draw_rect()
    before = _content_point(vm, focal)
    vm.on_scale_gesture_begin()
    vm.on_scale_gesture_update(focal, factor)
    after = _content_point(vm, focal)
    assert after == pytest.approx(before)

def test_pinch_clamps_at_scale_max_and_keeps_anchor(make_vm):
    vm = make_vm((4000, 3000), (1000, 800), scale_max=3)
    vm.zoom_by(2.9 / 0.25, (250, 250))
    focal = (600, 300)
    before = _content_point(vm, focal)
    applied = vm.on_scale_gesture_update(focal, 1.05)
    assert vm.get_scale() == 3
    assert applied == pytest.approx(3 / 2.9)
    assert _content_point(vm, focal) == pytest.approx(before)

def test_pinch_clamps_at_scale_min(make_vm):
    vm = make_vm((4000, 3000), (1000, 800))
    applied = vm.on_scale_gesture_update((500, 400), 0.95)
    assert vm.get_scale() == pytest.approx(0.25)
    assert applied == pytest.approx(1.0)

def test_custom_factor_range(make_vm):
    vm = make_vm((4000, 3000), (1000, 800))
    vm.set_factor_range(0.5, 2.0)
    vm.on_scale_gesture_update((0, 0), 4.0)
    assert vm.get_scale() == pytest.approx(0.5)


# --- Configuration -----------------------------------------------------------

def test_scale_min_above_max_rejected(make_vm):
    vm = make_vm()
    with pytest.raises(InvalidConfiguration):
        vm.set_scale_min(5.0)
    assert vm.get_scale_min() == pytest.approx(0.25)

def test_scale_max_below_explicit_min_rejected(make_vm):
    vm = make_vm()
    vm.set_scale_min(0.5)
    with pytest.raises(InvalidConfiguration):
        vm.set_scale_max(0.4)
    assert vm.get_scale_max() == 3.0

@pytest.mark.parametrize("value", [0, -1, float("nan")])
def test_non_positive_scale_rejected(make_vm, value):
    vm = make_vm()
    with pytest.raises(InvalidConfiguration):
        vm.set_scale_min(value)
    with pytest.raises(InvalidConfiguration):
        vm.set_scale_max(value)

def test_inverted_factor_range_rejected():
    vm = ZoomViewModel()
    with pytest.raises(InvalidConfiguration):
        vm.set_factor_range(1.2, 0.9)
    assert vm.get_factor_range() == (0.95, 1.05)

def test_explicit_scale_min_survives_refit(make_vm):
    vm = make_vm((4000, 3000), (1000, 800))
    vm.set_scale_min(0.1)
    vm.set_viewport_size(500, 400)
    assert vm.get_scale_min() == pytest.approx(0.1)
    assert vm.get_scale() == pytest.approx(0.125)

    vm.reset_scale_min()
    assert vm.get_scale_min() == pytest.approx(0.125)

def test_raising_scale_min_clamps_current_scale(make_vm):
    vm = make_vm((4000, 3000), (1000, 800))
    vm.set_scale_min(0.5)
    assert vm.get_scale() == pytest.approx(0.5)

def test_lowering_scale_max_recaps_fit(make_vm):
    vm = make_vm((200, 100), (1000, 800))
    assert vm.get_scale_fit() == pytest.approx(3.0)
    vm.set_scale_max(2.0)
    assert vm.get_scale_fit() == pytest.approx(2.0)
    vm.set_scale_max(0.5)
    assert vm.get_scale() == pytest.approx(0.5)
    assert vm.get_scale_min() <= vm.get_scale() <= vm.get_scale_max()

def test_zoom_by_rejects_non_positive(make_vm):
    vm = make_vm()
    with pytest.raises(ValueError):
        vm.zoom_by(0)
    assert not math.isnan(vm.get_scale())
