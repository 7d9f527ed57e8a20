# -*- coding: utf-8 -*-
"""
Fractal Animator
Branching-line and nested-triangle animations, driven from the menu bar.
"""
import sys, argparse, logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QLabel, QPushButton, QVBoxLayout, QStackedWidget,
    QMessageBox, QFileDialog, QInputDialog
)

from fractinator.core import commands as cmd
from fractinator.core.capture import capture_frames, save_gif
from fractinator.core.config import load_config
from fractinator.core.errors import ConfigError
from fractinator.core.music import MusicPlayer
from fractinator.core.view import AnimationView, make_engine
from fractinator.utils.qt_surface import FractalCanvas

ABOUT_TEXT = (
    "Touch or drag on the animation to move its center.\n\n"
    "Branching: lines reach out from the center, each one forking into two, "
    "until the iteration cap restarts the growth over the old drawing.\n\n"
    "Triangles: triangles nested inside triangles, growing or shrinking forever "
    "while they spin."
)

BRANCHING_MENU = (
    ("Change color", cmd.CHANGE_COLOR, "C"),
    ("Rainbow", cmd.TOGGLE_RAINBOW, "R"),
    (None, None, None),
    ("Faster", cmd.FASTER, "+"),
    ("Slower", cmd.SLOWER, "-"),
    ("More iterations", cmd.BIGGER, "]"),
    ("Fewer iterations", cmd.SMALLER, "["),
    ("Longer lines", cmd.LONGER_LINES, "L"),
    ("Shorter lines", cmd.SHORTER_LINES, "Shift+L"),
    (None, None, None),
    ("Reset", cmd.RESET, "Backspace"),
)

TRIANGLE_MENU = (
    ("Fill", cmd.TOGGLE_FILL, "F"),
    ("Persistent", cmd.TOGGLE_PERSIST, "P"),
    ("Reverse", cmd.TOGGLE_REVERSE, "V"),
    ("Equilateral / right", cmd.TOGGLE_SHAPE_FAMILY, "E"),
    (None, None, None),
    ("Faster", cmd.FASTER, "+"),
    ("Slower", cmd.SLOWER, "-"),
    ("More spin", cmd.SPIN_UP, "S"),
    ("Less spin", cmd.SPIN_DOWN, "Shift+S"),
    (None, None, None),
    ("Crazy mode", cmd.TOGGLE_CRAZY, "Z"),
    ("Seizure mode", cmd.TOGGLE_SEIZURE, "X"),
    ("Reset", cmd.RESET, "Backspace"),
)

log = logging.getLogger("fractal_animator")


class HomePage(QWidget):
    # start screen: pick an animation
    def __init__(self, on_pick):
        super().__init__()
        lay = QVBoxLayout(self)
        lay.addStretch()
        title = QLabel("Fractal Animator", alignment=Qt.AlignCenter)
        title.setStyleSheet("font-size: 28px; color: #FFFFFF;")
        lay.addWidget(title)
        for text, mode in (("branching", "branching"), ("triangles", "triangle")):
            b = QPushButton(text)
            b.setFixedHeight(44)
            b.clicked.connect(lambda _=False, m=mode: on_pick(m))
            lay.addWidget(b)
        lay.addStretch()
        self.setStyleSheet("QWidget { background: #3F3F3F; } QPushButton { background: #FFFFFF; color: #000000; border-radius: 22px; }")


class MainWindow(QMainWindow):
    def __init__(self, cfg):
        super().__init__()
        self.cfg = cfg
        self.setWindowTitle("Fractal Animator")
        self.resize(cfg["window"]["width"], cfg["window"]["height"])
        self.setMinimumSize(480, 360)

        self.music = MusicPlayer(cfg["audio"]["track_dir"], volume=cfg["audio"]["volume"])
        self.views = {}
        self.canvases = {}
        self.mode_menus = {}

        self.stack = QStackedWidget()
        self.home = HomePage(self.show_mode)
        self.stack.addWidget(self.home)
        for kind in ("branching", "triangle"):
            view = AnimationView(make_engine(kind, cfg), music=self.music, name=kind)
            canvas = FractalCanvas(view)
            self.views[kind] = view
            self.canvases[kind] = canvas
            self.stack.addWidget(canvas)
        self.setCentralWidget(self.stack)

        self._build_menus()
        start = cfg["window"]["mode"]
        if start in self.views:
            self.show_mode(start)
        else:
            self.show_home()

    @property
    def current_view(self):
        w = self.stack.currentWidget()
        return getattr(w, "view", None)

    def _build_menus(self):
        bar = self.menuBar()
        m = bar.addMenu("&Fractal")
        self._add_action(m, "Home", self.show_home, "Esc")
        self._add_action(m, "Branching", lambda: self.show_mode("branching"), "1")
        self._add_action(m, "Triangles", lambda: self.show_mode("triangle"), "2")
        m.addSeparator()
        self._add_action(m, "Export GIF…", self.on_export, "Ctrl+E")
        m.addSeparator()
        self._add_action(m, "About", self.on_about)
        self._add_action(m, "Exit", self.close, "Ctrl+Q")

        for kind, items in (("branching", BRANCHING_MENU), ("triangle", TRIANGLE_MENU)):
            menu = bar.addMenu("&Branching" if kind == "branching" else "&Triangles")
            for text, name, key in items:
                if text is None:
                    menu.addSeparator()
                    continue
                self._add_action(menu, text, lambda _=False, k=kind, n=name: self.views[k].command(n), key)
            self.mode_menus[kind] = menu

        m = bar.addMenu("&Music")
        self._add_action(m, "Music on / off", self.on_toggle_music, "M")
        self._add_action(m, "Next track", self.on_skip_track, "N")

    def _add_action(self, menu, text, slot, key=None):
        act = QAction(text, self)
        if key:
            act.setShortcut(QKeySequence(key))
        act.triggered.connect(slot)
        menu.addAction(act)
        return act

    def _sync_menus(self):
        view = self.current_view
        for kind, menu in self.mode_menus.items():
            menu.menuAction().setVisible(view is not None and view.name == kind)

    def show_home(self):
        self.stack.setCurrentWidget(self.home)
        self._sync_menus()

    def show_mode(self, kind):
        self.stack.setCurrentWidget(self.canvases[kind])
        self._sync_menus()
        log.info("showing %s", kind)

    def on_toggle_music(self):
        view = self.current_view or self.views["branching"]
        if not self.music.available:
            QMessageBox.information(self, "music", "No audio device or no tracks found.")
            return
        view.toggle_music()

    def on_skip_track(self):
        for view in self.views.values():
            view.skip_track()

    def on_about(self):
        QMessageBox.about(self, "About", ABOUT_TEXT)

    def on_export(self):
        view = self.current_view
        if view is None:
            QMessageBox.information(self, "export", "Pick an animation first.")
            return
        frames, ok = QInputDialog.getInt(self, "Export GIF", "frames:", 60, 1, 1000)
        if not ok:
            return
        fn, _ = QFileDialog.getSaveFileName(self, "Export GIF", f"{view.name}.gif", "GIF (*.gif)")
        if not fn:
            return
        # a fresh engine keeps the live one untouched
        engine = make_engine(view.name, self.cfg)
        canvas = self.canvases[view.name]
        try:
            images = capture_frames(engine, canvas.width(), canvas.height(), frames)
            save_gif(images, fn, engine.interval_ms)
        except Exception as e:
            log.exception("export failed")
            QMessageBox.warning(self, "error", f"Export failed:\n{e}")

    def closeEvent(self, e):
        for view in self.views.values():
            view.close()
        super().closeEvent(e)


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Branching and triangle fractal animations.")
    ap.add_argument("--config", help="JSON file with overrides (default: $FRACTINATOR_CONFIG)")
    ap.add_argument("--mode", choices=("menu", "branching", "triangle"), help="animation to open at start")
    ap.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    if args.mode:
        cfg["window"]["mode"] = args.mode
    level = (args.log_level or cfg["logging"]["level"]).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app = QApplication(sys.argv[:1])
    w = MainWindow(cfg)
    w.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
