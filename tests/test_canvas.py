"""
Tests for the SierpinskiCanvas widget (offscreen).
"""

import pytest
from PySide6.QtCore import QEvent, QPoint, QPointF, Qt
from PySide6.QtGui import QMouseEvent, QWheelEvent
from PySide6.QtWidgets import QApplication

from sierpinskiview.controller.renderer import FrameStatus
from sierpinskiview.view.canvas import SierpinskiCanvas
from sierpinskiview.view.main_window import MainWindow


@pytest.fixture
def canvas(qapp):
    widget = SierpinskiCanvas()
    widget.resize(800, 600)
    yield widget
    widget.close()
    widget.deleteLater()


def test_initial_frame(canvas):
    report = canvas.render_now()

    assert report.status is FrameStatus.DRAWN
    assert report.leaf_count > 0
    assert canvas.last_report is report

    image = canvas.frame()
    assert image is not None
    assert (image.width(), image.height()) == (800, 600)
    # canvas center is the centroid of the root: the big central hole
    assert image.pixelColor(400, 300).name() == "#ffffff"
    # bottom-left corner of the triangle is always filled
    assert image.pixelColor(102, 472).name() == "#000000"


def test_wheel_inside_zooms_and_schedules_redraw(canvas):
    zooms = []
    canvas.zoom_changed.connect(zooms.append)

    assert canvas.zoom_at(400, 300, -120) is True

    assert canvas.view_transform.zoom == pytest.approx(1.1)
    assert zooms == [pytest.approx(1.1)]
    assert canvas.scheduler.is_pending()


def test_wheel_outside_is_ignored(canvas):
    canvas.scheduler.cancel()

    assert canvas.zoom_at(-5, 10, -120) is False
    assert canvas.zoom_at(900, 10, -120) is False

    assert canvas.view_transform.zoom == 1.0
    assert not canvas.scheduler.is_pending()


def test_burst_of_input_renders_once(canvas):
    frames = []
    canvas.frame_rendered.connect(frames.append)
    canvas.scheduler.cancel()

    for _ in range(10):
        canvas.pan_by(3.0, -1.0)
        canvas.zoom_at(200, 150, -120)

    assert canvas.scheduler.flush() is True
    assert len(frames) == 1
    assert canvas.view_transform.offset.x != 0.0


def test_pan_off_screen_draws_blank_frame(canvas):
    canvas.pan_by(10_000.0, 0.0)
    report = canvas.render_now()

    assert report.ready
    assert report.leaf_count == 0
    assert report.stats.culled == 1
    assert canvas.frame().pixelColor(102, 472).name() == "#ffffff"


def test_reset_view(canvas):
    canvas.pan_by(50.0, 50.0)
    canvas.zoom_at(10, 10, -120)
    canvas.reset_view()

    assert canvas.view_transform.zoom == 1.0
    assert canvas.view_transform.offset.x == 0.0
    assert canvas.view_transform.offset.y == 0.0


def test_main_window_reports_zoom_and_frames(qapp):
    window = MainWindow()
    try:
        assert window.zoom_label.text() == "Zoom: 1.00"

        window.canvas.zoom_at(400, 300, -120)
        assert window.zoom_label.text() == "Zoom: 1.10"

        report = window.canvas.render_now()
        assert window.statusBar().currentMessage().startswith(f"{report.leaf_count} triangles drawn")

        window.act_reset_view.trigger()
        assert window.zoom_label.text() == "Zoom: 1.00"
    finally:
        window.close()
        window.deleteLater()


def _wheel(canvas, x, y, angle_y):
    event = QWheelEvent(
        QPointF(x, y),
        QPointF(canvas.mapToGlobal(QPoint(int(x), int(y)))),
        QPoint(0, 0),
        QPoint(0, angle_y),
        Qt.MouseButton.NoButton,
        Qt.KeyboardModifier.NoModifier,
        Qt.ScrollPhase.NoScrollPhase,
        False,
    )
    QApplication.sendEvent(canvas, event)
    return event


def _mouse(canvas, kind, x, y, button=Qt.MouseButton.LeftButton):
    held = Qt.MouseButton.NoButton if kind == QEvent.Type.MouseButtonRelease else Qt.MouseButton.LeftButton
    event = QMouseEvent(
        kind,
        QPointF(x, y),
        QPointF(canvas.mapToGlobal(QPoint(int(x), int(y)))),
        button,
        held,
        Qt.KeyboardModifier.NoModifier,
    )
    QApplication.sendEvent(canvas, event)
    return event


def test_pointer_just_outside_is_ignored(canvas):
    """Fractional positions left of / below the widget are outside."""
    canvas.scheduler.cancel()

    assert canvas.zoom_at(-0.5, 10, -120) is False
    assert canvas.zoom_at(10, 600.5, -120) is False
    assert canvas.view_transform.zoom == 1.0
    assert canvas.zoom_at(800, 600, -120) is True  # edges count as inside


def test_wheel_forward_zooms_in(canvas):
    """Qt's positive angleDelta (wheel away from the user) zooms in."""
    event = _wheel(canvas, 400, 300, 120)

    assert event.isAccepted()
    assert canvas.view_transform.zoom == pytest.approx(1.1)
    assert canvas.view_transform.offset.x == pytest.approx(0.0)


def test_wheel_backward_zooms_out_towards_pointer(canvas):
    before = canvas.view_transform.screen_to_world((100, 50), canvas.canvas_size())
    _wheel(canvas, 100, 50, -120)

    assert canvas.view_transform.zoom == pytest.approx(0.9)
    after = canvas.view_transform.screen_to_world((100, 50), canvas.canvas_size())
    assert after == pytest.approx(before)


def test_horizontal_wheel_is_ignored(canvas):
    event = _wheel(canvas, 400, 300, 0)

    assert not event.isAccepted()
    assert canvas.view_transform.zoom == 1.0


def test_drag_pans_and_switches_cursor(canvas):
    assert canvas.cursor().shape() == Qt.CursorShape.OpenHandCursor

    _mouse(canvas, QEvent.Type.MouseButtonPress, 100, 100)
    assert canvas.cursor().shape() == Qt.CursorShape.ClosedHandCursor

    _mouse(canvas, QEvent.Type.MouseMove, 130, 90, button=Qt.MouseButton.NoButton)
    _mouse(canvas, QEvent.Type.MouseMove, 135, 120, button=Qt.MouseButton.NoButton)
    assert canvas.view_transform.offset.x == pytest.approx(35.0)
    assert canvas.view_transform.offset.y == pytest.approx(20.0)

    _mouse(canvas, QEvent.Type.MouseButtonRelease, 135, 120)
    assert canvas.cursor().shape() == Qt.CursorShape.OpenHandCursor

    _mouse(canvas, QEvent.Type.MouseMove, 300, 300, button=Qt.MouseButton.NoButton)
    assert canvas.view_transform.offset.x == pytest.approx(35.0)


def test_leave_ends_drag(canvas):
    _mouse(canvas, QEvent.Type.MouseButtonPress, 100, 100)
    QApplication.sendEvent(canvas, QEvent(QEvent.Type.Leave))

    assert canvas.cursor().shape() == Qt.CursorShape.OpenHandCursor
    _mouse(canvas, QEvent.Type.MouseMove, 200, 200, button=Qt.MouseButton.NoButton)
    assert canvas.view_transform.offset.x == 0.0
    assert canvas.view_transform.offset.y == 0.0


def test_right_button_does_not_drag(canvas):
    _mouse(canvas, QEvent.Type.MouseButtonPress, 100, 100, button=Qt.MouseButton.RightButton)
    _mouse(canvas, QEvent.Type.MouseMove, 150, 150, button=Qt.MouseButton.NoButton)

    assert canvas.view_transform.offset.x == 0.0
    assert canvas.cursor().shape() == Qt.CursorShape.OpenHandCursor


def test_back_buffer_matches_device_pixel_ratio(canvas):
    canvas.render_now()
    image = canvas.frame()
    dpr = canvas.devicePixelRatioF()

    assert image.devicePixelRatio() == pytest.approx(dpr)
    assert image.width() == round(800 * dpr)
    assert image.height() == round(600 * dpr)


def test_surface_draws_at_device_resolution(qapp):
    """A 2x back buffer reports logical size and fills physical pixels."""
    from PySide6.QtGui import QImage, QPainter

    from sierpinskiview.controller.renderer import draw_frame
    from sierpinskiview.model.subdivision import AdaptiveSubdivider
    from sierpinskiview.model.view_transform import ViewTransform
    from sierpinskiview.view.surface import QPainterSurface

    image = QImage(1600, 1200, QImage.Format.Format_ARGB32_Premultiplied)
    image.setDevicePixelRatio(2.0)
    painter = QPainter(image)
    try:
        surface = QPainterSurface(painter, image)
        assert (surface.width(), surface.height()) == (800, 600)
        report = draw_frame(surface, ViewTransform(), AdaptiveSubdivider())
    finally:
        painter.end()

    assert report.ready
    # logical (102, 472) covers physical (204..205, 944..945)
    assert image.pixelColor(205, 945).name() == "#000000"
    assert image.pixelColor(800, 600).name() == "#ffffff"
