from __future__ import annotations

import threading

from PySide6.QtCore import QObject, Qt, Signal
from PySide6.QtGui import QImage, QPainter
from PySide6.QtWidgets import QSizePolicy, QWidget

from fractinator.core.render_loop import Frame
from fractinator.utils.image_ops import to_rgba_bytes


def qimage_from_pil(pil_img) -> QImage:
    data, w, h = to_rgba_bytes(pil_img)
    # copy so the QImage owns its pixels once ``data`` goes away
    return QImage(data, w, h, QImage.Format_RGBA8888).copy()


class QtSurface(QObject):
    """Host surface backed by a widget. Frames are handed to the GUI thread by signal."""

    frame_ready = Signal(QImage)

    def __init__(self, width: int, height: int):
        super().__init__()
        self.width = width
        self.height = height
        self._alive = True
        self._lock = threading.Lock()

    def acquire_frame(self):
        with self._lock:
            if not self._alive:
                return None
        return Frame(self.width, self.height)

    def publish(self, frame: Frame) -> None:
        self.frame_ready.emit(qimage_from_pil(frame.image))

    def tear_down(self) -> None:
        with self._lock:
            self._alive = False


class FractalCanvas(QWidget):
    # canvas widget: owns a surface while it is shown
    def __init__(self, view, parent=None):
        super().__init__(parent)
        self.view = view
        self.surface = None
        self._qimage = None
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMinimumSize(320, 240)
        self.setAttribute(Qt.WA_OpaquePaintEvent, True)

    def attach(self) -> None:
        if self.surface is not None:
            return
        w, h = max(1, self.width()), max(1, self.height())
        self.surface = QtSurface(w, h)
        self.surface.frame_ready.connect(self._on_frame)
        self.view.on_surface_ready(self.surface, w, h)

    def detach(self) -> None:
        if self.surface is None:
            return
        self.surface.tear_down()
        self.view.on_surface_gone()
        self.surface = None

    def showEvent(self, e):
        super().showEvent(e)
        self.attach()

    def hideEvent(self, e):
        self.detach()
        super().hideEvent(e)

    def resizeEvent(self, e):
        super().resizeEvent(e)
        if self.surface is not None:
            self.view.input.set_viewport(self.width(), self.height(), self.surface.width, self.surface.height)

    def _on_frame(self, qimg: QImage):
        self._qimage = qimg
        self.update()

    def paintEvent(self, e):
        p = QPainter(self)
        if self._qimage is None:
            p.fillRect(self.rect(), Qt.black)
        else:
            p.drawImage(self.rect(), self._qimage)
        p.end()

    def _pointer(self, e):
        pos = e.position()
        self.view.on_pointer_event(pos.x(), pos.y())
        e.accept()

    def mousePressEvent(self, e):
        self._pointer(e)

    def mouseMoveEvent(self, e):
        self._pointer(e)

    def mouseReleaseEvent(self, e):
        self._pointer(e)
