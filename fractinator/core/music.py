from __future__ import annotations

import glob
import logging
import os
import random
import threading
from typing import List, Optional

import soundfile as sf

try:
    import sounddevice as sd  # type: ignore
except Exception:  # pragma: no cover
    sd = None  # type: ignore

logger = logging.getLogger(__name__)

VOLUME = 0.047


def read_wav(path: str):
    """Load a wav file as float32 samples shaped (frames, channels)."""
    data, rate = sf.read(path, dtype="float32", always_2d=True)
    return data, rate


class MusicPlayer:
    """Alternates drum and noise tracks, one after another, until stopped.

    Tracks are ``drums_*.wav`` and ``noise_*.wav`` files in ``track_dir``.
    Without an audio backend or without tracks every call is a no-op.
    """

    def __init__(self, track_dir: Optional[str] = None, volume: float = VOLUME, rng=None):
        self.track_dir = track_dir
        self.volume = volume
        self.rng = rng if rng is not None else random.Random()
        self.drum_tracks: List[str] = []
        self.noise_tracks: List[str] = []
        self.current_drum = 0
        self.current_noise = 0
        self.drums_next = True
        self.now_playing: Optional[str] = None
        self._timer: Optional[threading.Timer] = None
        self._active = False
        self._lock = threading.Lock()
        self.prepare_tracks()

    @property
    def available(self) -> bool:
        return sd is not None and bool(self.drum_tracks or self.noise_tracks)

    def prepare_tracks(self) -> None:
        if not self.track_dir or not os.path.isdir(self.track_dir):
            if self.track_dir:
                logger.warning("music: track directory %s not found", self.track_dir)
            return
        self.drum_tracks = sorted(glob.glob(os.path.join(self.track_dir, "drums_*.wav")))
        self.noise_tracks = sorted(glob.glob(os.path.join(self.track_dir, "noise_*.wav")))
        logger.info("music: %d drum / %d noise track(s)", len(self.drum_tracks), len(self.noise_tracks))

    def shuffle(self) -> None:
        self.stop()
        self.current_drum = 0
        self.current_noise = 0
        self.rng.shuffle(self.drum_tracks)
        self.rng.shuffle(self.noise_tracks)

    def next_track(self) -> Optional[str]:
        """Pick the next file, alternating drums and noise."""
        if not (self.drum_tracks or self.noise_tracks):
            return None
        use_drums = self.drums_next if (self.drum_tracks and self.noise_tracks) else bool(self.drum_tracks)
        if use_drums:
            path = self.drum_tracks[self.current_drum]
            self.current_drum = (self.current_drum + 1) % len(self.drum_tracks)
        else:
            path = self.noise_tracks[self.current_noise]
            self.current_noise = (self.current_noise + 1) % len(self.noise_tracks)
        self.drums_next = not self.drums_next
        return path

    def play(self) -> None:
        if sd is None:
            logger.warning("music: sounddevice is not available")
            return
        with self._lock:
            self._active = True
            self._play_next()

    def _play_next(self) -> None:
        # caller holds the lock
        path = self.next_track()
        if path is None:
            return
        try:
            data, rate = read_wav(path)
            sd.play(data * self.volume, rate)
        except Exception as e:
            logger.warning("music: cannot play %s: %s", path, e)
            return
        self.now_playing = path
        self._timer = threading.Timer(len(data) / float(rate), self._on_complete)
        self._timer.daemon = True
        self._timer.start()

    def _on_complete(self) -> None:
        with self._lock:
            if not self._active:
                return
            self._play_next()

    def skip(self) -> None:
        self.stop()
        self.play()

    def stop(self) -> None:
        with self._lock:
            self._active = False
            timer, self._timer = self._timer, None
            self.now_playing = None
        if timer is not None:
            timer.cancel()
        if sd is not None:
            try:
                sd.stop()
            except Exception as e:
                logger.warning("music: stop failed: %s", e)
