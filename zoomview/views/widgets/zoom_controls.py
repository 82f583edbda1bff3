from PyQt6.QtWidgets import QWidget, QHBoxLayout, QPushButton, QLabel
from PyQt6.QtCore import pyqtSignal

class ZoomControls(QWidget):
    """
    Zoom toolbar: -/+ buttons, fit and original-size shortcuts, scale readout.
    """
    zoom_in_clicked = pyqtSignal()
    zoom_out_clicked = pyqtSignal()
    fit_requested = pyqtSignal()
    original_requested = pyqtSignal()

    def __init__(self):
        super().__init__()
        self._setup_ui()

    def _setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)
        layout.setSpacing(5)

        self._btn_out = QPushButton("−")
        self._btn_out.setFixedSize(30, 30)
        self._btn_out.setToolTip("Zoom Out (Ctrl+-)")
        self._btn_out.clicked.connect(self.zoom_out_clicked.emit)

        self._label = QLabel("—")
        self._label.setFixedWidth(70)

        self._btn_in = QPushButton("+")
        self._btn_in.setFixedSize(30, 30)
        self._btn_in.setToolTip("Zoom In (Ctrl++)")
        self._btn_in.clicked.connect(self.zoom_in_clicked.emit)

        self._btn_fit = QPushButton("Fit")
        self._btn_fit.setToolTip("Fit to Window (Ctrl+0)")
        self._btn_fit.clicked.connect(self.fit_requested.emit)

        self._btn_original = QPushButton("1:1")
        self._btn_original.setToolTip("Original Size (Ctrl+1)")
        self._btn_original.clicked.connect(self.original_requested.emit)

        layout.addWidget(self._btn_out)
        layout.addWidget(self._label)
        layout.addWidget(self._btn_in)
        layout.addWidget(self._btn_fit)
        layout.addWidget(self._btn_original)
        layout.addStretch()

    def update_scale_display(self, scale: float, scale_min: float, scale_max: float):
        """Shows the scale as a percentage and disables buttons at the limits."""
        if scale <= 0:
            self._label.setText("—")
        else:
            self._label.setText(f"{scale * 100:.0f}%")

        self._btn_out.setEnabled(scale > scale_min)
        self._btn_in.setEnabled(0 < scale < scale_max)

    def scale_text(self) -> str:
        return self._label.text()
