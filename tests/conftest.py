import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from zoomview.utils.frame_scheduler import ManualFrameScheduler
from zoomview.viewmodels.zoom_viewmodel import ZoomViewModel


@pytest.fixture
def scheduler():
    return ManualFrameScheduler()


@pytest.fixture
def make_vm(scheduler):
    """Builds a view model already sized for the given content and viewport."""
    def _make(content=(4000, 3000), viewport=(1000, 800), scale_max=None):
        vm = ZoomViewModel(scheduler)
        if scale_max is not None:
            vm.set_scale_max(scale_max)
        vm.set_viewport_size(*viewport)
        vm.set_content_size(*content)
        return vm
    return _make


class SignalRecorder:
    """Counts emissions of a bound pyqtSignal and keeps their arguments."""
    def __init__(self, signal):
        self.calls = []
        signal.connect(self._record)

    def _record(self, *args):
        self.calls.append(args)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def recorder():
    return SignalRecorder
