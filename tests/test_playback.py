"""
Tests for PlaybackController.
"""
import numpy as np

from ptistitch.core.clip import AudioClip
from ptistitch.core.config import AUDIO_CONFIG, PlaybackState
from ptistitch.core.playback import PlaybackController
from ptistitch.core.slice import AudioFile
from conftest import TEST_SR, FakeStream


def make_file(frames: int = 4096, value: float = 0.5) -> AudioFile:
    clip = AudioClip(np.full(frames, value, dtype=np.float32), TEST_SR)
    return AudioFile(name="test", original_audio=clip, audio=clip)


class TestPlaybackController:
    """Tests for single-voice preview."""

    def test_initial_state(self, playback):
        assert playback.state is PlaybackState.STOPPED
        assert not playback.is_playing
        assert playback.current_clip is None

    def test_play_opens_stream(self, playback, stream_factory):
        file = make_file()
        stream = playback.play(file)

        assert stream is stream_factory.streams[0]
        assert stream.started
        assert stream.kwargs["samplerate"] == TEST_SR
        assert stream.kwargs["channels"] == AUDIO_CONFIG.playback_channels
        assert playback.is_playing
        assert playback.current_clip is file.audio

    def test_new_voice_preempts(self, playback, stream_factory):
        first = playback.play(make_file())
        second = playback.play(make_file())

        assert first.stopped and first.closed
        assert not second.stopped
        assert len(stream_factory.streams) == 2
        assert playback.is_playing

    def test_stop(self, playback):
        stream = playback.play(make_file())
        playback.stop()
        assert stream.stopped and stream.closed
        assert playback.state is PlaybackState.STOPPED
        assert playback.current_clip is None

    def test_stop_is_idempotent(self, playback):
        playback.stop()
        playback.stop()
        assert playback.state is PlaybackState.STOPPED

    def test_callback_streams_clip(self, playback):
        file = make_file(frames=3000, value=0.25)
        stream = playback.play(file)
        callback = stream.kwargs["callback"]

        out = np.ones((1024, 1), dtype=np.float32)
        callback(out, 1024, None, None)
        assert np.allclose(out[:, 0], 0.25)
        assert playback.current_frame == 1024

    def test_finished_stream_resets_state(self, playback):
        stream = playback.play(make_file())
        stream.finish()
        assert playback.state is PlaybackState.STOPPED
        assert playback.current_clip is None

    def test_stale_finish_ignored(self, playback):
        first = playback.play(make_file())
        second = playback.play(make_file())
        first.finish()
        assert playback.is_playing
        assert playback.current_clip is not None
        second.finish()
        assert not playback.is_playing

    def test_state_callback(self, stream_factory):
        states = []
        controller = PlaybackController(stream_factory=stream_factory, on_state_changed=states.append)
        controller.play(make_file())
        controller.stop()
        assert states == [PlaybackState.PLAYING, PlaybackState.STOPPED]

    def test_cleanup_drops_callback(self, stream_factory):
        states = []
        controller = PlaybackController(stream_factory=stream_factory, on_state_changed=states.append)
        controller.play(make_file())
        controller.cleanup()
        assert states == [PlaybackState.PLAYING, PlaybackState.STOPPED]
        controller.stop()
        assert states == [PlaybackState.PLAYING, PlaybackState.STOPPED]

    def test_failed_start_releases_stream(self, stream_factory):
        class BrokenStream(FakeStream):
            def start(self):
                raise RuntimeError("device unavailable")

        streams = []

        def broken_factory(**kwargs):
            stream = BrokenStream(**kwargs)
            streams.append(stream)
            return stream

        states = []
        controller = PlaybackController(stream_factory=broken_factory, on_state_changed=states.append)
        assert controller.play(make_file()) is None
        assert controller.state is PlaybackState.STOPPED
        assert controller.current_clip is None
        assert streams[0].closed
        assert states == []

        controller._stream_factory = stream_factory
        file = make_file()
        assert controller.play(file) is stream_factory.streams[0]
        assert controller.current_clip is file.audio

    def test_failed_factory_stays_stopped(self):
        def failing_factory(**kwargs):
            raise OSError("no output device")

        controller = PlaybackController(stream_factory=failing_factory)
        assert controller.play(make_file()) is None
        assert controller.state is PlaybackState.STOPPED
        assert controller.current_clip is None
