import random

import pytest

from fractinator.core.branching import BranchingEngine
from fractinator.core.capture import capture_frames, save_gif
from fractinator.core.triangles import TriangleEngine


def test_capture_keeps_independent_frames():
    engine = TriangleEngine(rng=random.Random(4))
    frames = capture_frames(engine, 120, 80, 40)
    assert len(frames) == 40
    assert all(im.size == (120, 80) for im in frames)
    assert engine.frames == 40
    assert frames[0].tobytes() != frames[-1].tobytes()


def test_save_gif(tmp_path):
    iio = pytest.importorskip("imageio.v3")
    engine = BranchingEngine(rng=random.Random(4))
    engine.params.line_length.value = 10
    frames = capture_frames(engine, 200, 200, 4)
    out = save_gif(frames, str(tmp_path / "tree.gif"), engine.interval_ms)
    assert (tmp_path / "tree.gif").stat().st_size > 0
    assert iio.imread(out, index=None).shape[0] == 4


def test_save_gif_refuses_empty(tmp_path):
    with pytest.raises(ValueError):
        save_gif([], str(tmp_path / "x.gif"), 10)
