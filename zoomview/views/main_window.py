import asyncio
from PyQt6.QtWidgets import QMainWindow, QToolBar, QFileDialog
from PyQt6.QtGui import QKeySequence, QShortcut, QImage
from PyQt6.QtCore import Qt

from .zoom_image_view import ZoomImageView
from .widgets.zoom_controls import ZoomControls
from ..models.content.content_source import ContentSource
from ..models.content.image_file_source import ImageFileSource
from ..models.content.pdf_page_source import PdfPageSource
from ..viewmodels.content_viewmodel import ContentViewModel
from ..utils.logging import get_logger, sanitize_path_for_log


class MainWindow(QMainWindow):
    BUTTON_ZOOM_STEP = 1.25

    IMAGE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.tif *.tiff *.webp)"
    PDF_FILTER = "PDF Documents (*.pdf)"

    def __init__(self):
        super().__init__()
        self.setWindowTitle("ZoomView")
        self.resize(1024, 768)

        self._logger = get_logger("MainWindow")

        # --- ViewModels ---
        self.content_vm = ContentViewModel()

        # --- Central Widget ---
        self.viewer = ZoomImageView()
        self.setCentralWidget(self.viewer)
        self.engine = self.viewer.engine

        # --- UI Setup ---
        self._setup_menu()
        self._setup_zoom_ui()
        self._setup_shortcuts()

        # --- Connections: Content ---
        self.content_vm.load_started.connect(self._handle_load_started)
        self.content_vm.content_loaded.connect(self._handle_content_loaded)
        self.content_vm.load_failed.connect(self._handle_load_failed)

        # --- Connections: Zoom ---
        self.engine.scale_changed.connect(self._update_zoom_display)

    def _setup_menu(self):
        file_menu = self.menuBar().addMenu("&File")

        open_image = file_menu.addAction("Open &Image…")
        open_image.setShortcut(QKeySequence.StandardKey.Open)
        open_image.triggered.connect(self._prompt_open_image)

        open_pdf = file_menu.addAction("Open &PDF…")
        open_pdf.triggered.connect(self._prompt_open_pdf)

        file_menu.addSeparator()
        quit_action = file_menu.addAction("&Quit")
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)

    def _setup_zoom_ui(self):
        toolbar = QToolBar("Zoom")
        toolbar.setMovable(False)
        self.addToolBar(Qt.ToolBarArea.TopToolBarArea, toolbar)

        self.zoom_controls = ZoomControls()
        toolbar.addWidget(self.zoom_controls)

        self.zoom_controls.zoom_in_clicked.connect(self._zoom_in)
        self.zoom_controls.zoom_out_clicked.connect(self._zoom_out)
        self.zoom_controls.fit_requested.connect(self.engine.animate_to_fit)
        self.zoom_controls.original_requested.connect(self.engine.animate_to_original)

        self._update_zoom_display()

    def _setup_shortcuts(self):
        QShortcut(QKeySequence("Ctrl++"), self).activated.connect(self._zoom_in)
        QShortcut(QKeySequence("Ctrl+="), self).activated.connect(self._zoom_in)
        QShortcut(QKeySequence("Ctrl+-"), self).activated.connect(self._zoom_out)
        QShortcut(QKeySequence("Ctrl+0"), self).activated.connect(self.engine.animate_to_fit)
        QShortcut(QKeySequence("Ctrl+1"), self).activated.connect(self.engine.animate_to_original)

    # --- Zoom Handlers ---

    def _zoom_in(self):
        self.engine.zoom_by(self.BUTTON_ZOOM_STEP)

    def _zoom_out(self):
        self.engine.zoom_by(1 / self.BUTTON_ZOOM_STEP)

    def _update_zoom_display(self, *_):
        self.zoom_controls.update_scale_display(
            self.engine.get_scale(),
            self.engine.get_scale_min(),
            self.engine.get_scale_max(),
        )

    # --- File Loading ---

    def _prompt_open_image(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open Image", "", self.IMAGE_FILTER)
        if path:
            self.load_file(path)

    def _prompt_open_pdf(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open PDF", "", self.PDF_FILTER)
        if path:
            self.load_file(path)

    def load_file(self, file_path: str):
        """Opens an image, or the first page of a PDF."""
        if file_path.lower().endswith(".pdf"):
            source = PdfPageSource(file_path)
        else:
            source = ImageFileSource(file_path)
        self._logger.info(f"Opening: {sanitize_path_for_log(file_path)}")
        self.load_source(source)

    def load_source(self, source: ContentSource):
        asyncio.create_task(self.content_vm.load_content(source))

    def _handle_load_started(self, name: str):
        self.statusBar().showMessage(f"Loading {name}…")

    def _handle_content_loaded(self, image: QImage, width: int, height: int):
        self.viewer.set_image(image, width, height)
        source = self.content_vm.get_source()
        name = source.describe() if source else "image"
        self.setWindowTitle(f"ZoomView - {name}")
        self.statusBar().showMessage(f"{name}: {width}×{height}", 5000)
        self._update_zoom_display()

    def _handle_load_failed(self, msg: str):
        self._logger.warning(f"Load failed: {msg}")
        self.statusBar().showMessage(f"Could not open file: {msg}")

    def closeEvent(self, event):
        self.viewer.engine.cancel_animation()
        self.content_vm.close()
        super().closeEvent(event)
