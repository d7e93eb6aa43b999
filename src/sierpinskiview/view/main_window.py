"""
Main Application Window
=======================
The GUI container holding the zoom header, the fractal canvas and the
status bar.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (View -> Reset View) and canvas
   signals to the labels that report them.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QLabel, QMainWindow, QVBoxLayout, QWidget

from sierpinskiview.config import DEFAULT_SETTINGS, RenderSettings
from sierpinskiview.controller.renderer import FrameReport
from sierpinskiview.view.canvas import SierpinskiCanvas

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Sierpinski Viewer"


class MainWindow(QMainWindow):
    def __init__(self, settings: RenderSettings = DEFAULT_SETTINGS) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(900, 760)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(8, 8, 8, 8)

        # --- 1. ZOOM HEADER ---
        self.zoom_label = QLabel()
        self.zoom_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.zoom_label.setStyleSheet("QLabel { font-size: 18px; font-weight: bold; }")
        main_layout.addWidget(self.zoom_label)

        # --- 2. CANVAS ---
        self.canvas = SierpinskiCanvas(settings)
        self.canvas.setFixedSize(800, 600)
        main_layout.addWidget(self.canvas, 1, Qt.AlignmentFlag.AlignCenter)

        # --- SIGNAL CONNECTIONS ---
        self.canvas.zoom_changed.connect(self.on_zoom_changed)
        self.canvas.frame_rendered.connect(self.on_frame_rendered)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        self.on_zoom_changed(self.canvas.view_transform.zoom)
        self.statusBar().showMessage("Scroll to zoom, drag to pan.")

    def _create_actions(self) -> None:
        self.act_reset_view = QAction("Reset View", self)
        self.act_reset_view.setShortcut(QKeySequence("Ctrl+0"))
        self.act_reset_view.triggered.connect(self.canvas.reset_view)

        self.act_exit = QAction("Exit", self)
        self.act_exit.setShortcut(QKeySequence.StandardKey.Quit)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("File")
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("View")
        view_menu.addAction(self.act_reset_view)

    # --- SLOTS ---

    def on_zoom_changed(self, zoom: float) -> None:
        self.zoom_label.setText(f"Zoom: {zoom:.2f}")

    def on_frame_rendered(self, report: FrameReport) -> None:
        if not report.ready:
            return
        self.statusBar().showMessage(
            f"{report.leaf_count} triangles drawn, {report.stats.culled} culled"
        )
