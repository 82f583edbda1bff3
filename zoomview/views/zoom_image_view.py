from PyQt6.QtWidgets import QWidget
from PyQt6.QtGui import QImage, QPainter, QPaintEvent
from PyQt6.QtCore import Qt, QEvent, QRectF, pyqtSignal

from ..viewmodels.zoom_viewmodel import ZoomViewModel
from ..utils.frame_scheduler import FrameScheduler


class ZoomImageView(QWidget):
    """
    Hosts a ZoomViewModel: translates Qt input into engine calls and
    paints the content into the rectangle the engine reports.
    """
    parent_intercept_disallowed = pyqtSignal()

    WHEEL_ZOOM_STEP = 1.1

    def __init__(self, parent=None, scheduler: FrameScheduler | None = None):
        super().__init__(parent)
        self.engine = ZoomViewModel(scheduler)
        self._image: QImage | None = None

        self.engine.redraw_requested.connect(self.update)
        self.engine.gesture_claimed.connect(self.parent_intercept_disallowed.emit)

        self.grabGesture(Qt.GestureType.PinchGesture)
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setAutoFillBackground(True)
        self.setStyleSheet("background-color: #1E1E1E;")

    def set_image(self, image: QImage, width: int | None = None, height: int | None = None):
        """Replaces the displayed content. Size defaults to the image's own."""
        self._image = image
        self.engine.set_content_size(
            width if width is not None else image.width(),
            height if height is not None else image.height(),
        )

    def clear(self):
        self._image = None
        self.engine.set_content_size(0, 0)

    def has_image(self) -> bool:
        return self._image is not None

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.engine.set_viewport_size(self.width(), self.height())

    # --- Input --------------------------------------------------------------

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self.engine.on_pointer_down((pos.x(), pos.y()))

    def mouseMoveEvent(self, event):
        if event.buttons() & Qt.MouseButton.LeftButton:
            pos = event.position()
            self.engine.on_pointer_move((pos.x(), pos.y()))

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.engine.on_pointer_up()

    def mouseDoubleClickEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self.engine.on_double_tap((pos.x(), pos.y()))

    def wheelEvent(self, event):
        if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            notches = event.angleDelta().y() / 120.0
            if notches:
                pos = event.position()
                self.engine.zoom_by(self.WHEEL_ZOOM_STEP ** notches, (pos.x(), pos.y()))
            event.accept()
            return
        super().wheelEvent(event)

    def event(self, event):
        if event.type() == QEvent.Type.Gesture:
            pinch = event.gesture(Qt.GestureType.PinchGesture)
            if pinch is not None:
                self._handle_pinch(pinch)
                return True
        return super().event(event)

    def _handle_pinch(self, pinch):
        state = pinch.state()
        if state == Qt.GestureState.GestureStarted:
            self.engine.on_scale_gesture_begin()
        elif state == Qt.GestureState.GestureUpdated:
            center = self.mapFromGlobal(pinch.centerPoint())
            self.engine.on_scale_gesture_update(
                (center.x(), center.y()),
                pinch.scaleFactor(),
            )
        elif state in (Qt.GestureState.GestureFinished, Qt.GestureState.GestureCanceled):
            self.engine.on_scale_gesture_end()

    # --- Painting -----------------------------------------------------------

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        rect = self.engine.get_draw_rect()

        if self._image is not None and rect is not None and not rect.is_empty():
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
            painter.drawImage(
                QRectF(rect.left, rect.top, rect.width, rect.height),
                self._image,
            )
        elif self._image is None:
            painter.setPen(Qt.GlobalColor.gray)
            painter.drawText(
                self.rect(),
                Qt.AlignmentFlag.AlignCenter,
                "Open an image to start",
            )
        painter.end()
