"""
Pytest configuration and fixtures for ptistitch tests.
"""
import io
import pytest
import numpy as np
import soundfile as sf

from ptistitch.core.clip import AudioClip
from ptistitch.core.composer import SliceComposer
from ptistitch.core.config import SliceConfig
from ptistitch.core.messages import MessageLog
from ptistitch.core.playback import PlaybackController

TEST_SR = 8000


def sine(seconds: float, freq: float = 440.0, amplitude: float = 0.5, sr: int = TEST_SR) -> np.ndarray:
    t = np.arange(int(seconds * sr), dtype=np.float32) / sr
    return (amplitude * np.sin(2 * np.pi * freq * t)).astype(np.float32)


def wav_bytes(data: np.ndarray, sr: int = TEST_SR) -> bytes:
    """Encode float samples as an in-memory 32-bit float WAV."""
    buf = io.BytesIO()
    sf.write(buf, data, sr, format="WAV", subtype="FLOAT")
    return buf.getvalue()


class FakeStream:
    """Stands in for sounddevice.OutputStream."""

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.started = False
        self.stopped = False
        self.closed = False

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    def close(self):
        self.closed = True

    def finish(self):
        self.kwargs["finished_callback"]()


class FakeStreamFactory:
    def __init__(self):
        self.streams = []

    def __call__(self, **kwargs):
        stream = FakeStream(**kwargs)
        self.streams.append(stream)
        return stream


@pytest.fixture
def sample_mono_audio() -> np.ndarray:
    """Generate 1 second of mono sine wave audio."""
    return sine(1.0)


@pytest.fixture
def stream_factory() -> FakeStreamFactory:
    return FakeStreamFactory()


@pytest.fixture
def playback(stream_factory) -> PlaybackController:
    return PlaybackController(stream_factory=stream_factory)


@pytest.fixture
def messages() -> MessageLog:
    return MessageLog()


@pytest.fixture
def make_composer(messages, playback):
    """Build a composer at the test samplerate, optionally with other limits."""
    created = []

    def factory(decoder=None, **limits) -> SliceComposer:
        composer = SliceComposer(
            notify=messages,
            config=SliceConfig(**limits),
            samplerate=TEST_SR,
            decoder=decoder,
            playback=playback,
        )
        created.append(composer)
        return composer

    yield factory
    for composer in created:
        composer.close()


@pytest.fixture
def composer(make_composer) -> SliceComposer:
    return make_composer()


@pytest.fixture
def kick_wav() -> bytes:
    """Half a second of 110 Hz sine."""
    return wav_bytes(sine(0.5, freq=110.0))


@pytest.fixture
def snare_wav() -> bytes:
    """A quarter second of 880 Hz sine."""
    return wav_bytes(sine(0.25, freq=880.0))


@pytest.fixture
def padded_clip() -> AudioClip:
    """Half a second of silence on each side of half a second of sine."""
    silence = np.zeros(TEST_SR // 2, dtype=np.float32)
    return AudioClip(np.concatenate([silence, sine(0.5), silence]), TEST_SR)
