import os
import random
import time

import numpy as np
import pytest
import soundfile as sf

from fractinator.core import music
from fractinator.core.music import MusicPlayer, read_wav


class FakeSoundDevice:
    def __init__(self):
        self.played = []
        self.stops = 0

    def play(self, data, rate):
        self.played.append((data, rate))

    def stop(self):
        self.stops += 1


def _wav(path, seconds=0.02, rate=8000, channels=1, subtype="PCM_16"):
    wave = np.sin(np.linspace(0, 40, int(rate * seconds))) * 0.6
    samples = np.repeat(wave[:, None], channels, axis=1)
    sf.write(str(path), samples, rate, subtype=subtype)
    return str(path)


@pytest.fixture
def tracks(tmp_path):
    for name in ("drums_a.wav", "drums_b.wav", "noise_a.wav"):
        _wav(tmp_path / name)
    (tmp_path / "readme.txt").write_text("not a track")
    return tmp_path


@pytest.fixture
def fake_sd(monkeypatch):
    fake = FakeSoundDevice()
    monkeypatch.setattr(music, "sd", fake)
    return fake


def test_read_wav_scales_to_unit_range(tmp_path):
    data, rate = read_wav(_wav(tmp_path / "t.wav"))
    assert rate == 8000
    assert data.shape[1] == 1
    assert np.abs(data).max() <= 1.0


def test_read_wav_handles_24_bit_stereo(tmp_path):
    data, rate = read_wav(_wav(tmp_path / "t24.wav", rate=44100, channels=2, subtype="PCM_24"))
    assert rate == 44100
    assert data.shape == (882, 2)
    assert data.dtype == np.float32
    assert np.abs(data).max() == pytest.approx(0.6, abs=0.01)


def test_24_bit_tracks_keep_the_chain_going(tmp_path, fake_sd):
    for name in ("drums_a.wav", "noise_a.wav"):
        _wav(tmp_path / name, rate=44100, channels=2, subtype="PCM_24")
    player = MusicPlayer(str(tmp_path))
    player.play()
    deadline = time.monotonic() + 5
    while len(fake_sd.played) < 2 and time.monotonic() < deadline:
        time.sleep(0.01)
    player.stop()
    assert len(fake_sd.played) >= 2


def test_tracks_alternate_drums_and_noise(tracks, fake_sd):
    player = MusicPlayer(str(tracks))
    assert player.available
    names = [os.path.basename(player.next_track()) for _ in range(5)]
    assert names == ["drums_a.wav", "noise_a.wav", "drums_b.wav", "noise_a.wav", "drums_a.wav"]


def test_shuffle_resets_cursors(tracks, fake_sd):
    player = MusicPlayer(str(tracks), rng=random.Random(2))
    player.next_track()
    player.next_track()
    player.shuffle()
    assert player.current_drum == 0 and player.current_noise == 0
    assert sorted(player.drum_tracks) == sorted(str(tracks / n) for n in ("drums_a.wav", "drums_b.wav"))


def test_play_chains_tracks_until_stopped(tracks, fake_sd):
    player = MusicPlayer(str(tracks), volume=0.5)
    player.play()
    deadline = time.monotonic() + 5
    while len(fake_sd.played) < 3 and time.monotonic() < deadline:
        time.sleep(0.01)
    player.stop()
    assert len(fake_sd.played) >= 3
    assert player.now_playing is None
    n = len(fake_sd.played)
    time.sleep(0.1)
    assert len(fake_sd.played) == n
    data, rate = fake_sd.played[0]
    assert rate == 8000
    assert np.abs(data).max() <= 0.5


def test_skip_restarts_with_next_track(tracks, fake_sd):
    player = MusicPlayer(str(tracks))
    player.next_track()
    player.skip()
    assert fake_sd.stops >= 1
    assert player.now_playing.endswith("noise_a.wav")
    player.stop()


def test_without_backend_everything_is_a_noop(tracks, monkeypatch):
    monkeypatch.setattr(music, "sd", None)
    player = MusicPlayer(str(tracks))
    assert not player.available
    player.play()
    player.skip()
    player.stop()
    assert player.now_playing is None


def test_missing_track_dir(tmp_path, fake_sd):
    player = MusicPlayer(str(tmp_path / "nowhere"))
    assert not player.available
    player.play()
    assert fake_sd.played == []
