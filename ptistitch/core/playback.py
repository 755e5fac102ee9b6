"""
Playback controller for ptistitch.
Previews one slice or layer at a time through a sounddevice output stream.
"""
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Callable, Optional
import numpy as np

from .config import AUDIO_CONFIG, PlaybackState
from .types import OutputStream

if TYPE_CHECKING:
    from .clip import AudioClip
    from .slice import AudioFile

logger = logging.getLogger("PtiStitch")

StreamFactory = Callable[..., OutputStream]


def open_output_stream(**kwargs: Any) -> OutputStream:
    """Default stream factory, backed by ``sounddevice.OutputStream``."""
    import sounddevice as sd
    return sd.OutputStream(**kwargs)


class PlaybackController:
    """
    Single-voice preview player.
    Starting a new voice always stops the previous one first.
    """
    __slots__ = (
        '_stream', '_stream_factory', '_clip', '_current_frame', '_state',
        '_on_state_changed', '_disposed'
    )

    def __init__(
        self,
        stream_factory: Optional[StreamFactory] = None,
        on_state_changed: Optional[Callable[[PlaybackState], None]] = None
    ) -> None:
        """
        Initialize playback controller.

        Args:
            stream_factory: Builds the output stream, called with sounddevice
                ``OutputStream`` keyword arguments
            on_state_changed: Callback for state changes
        """
        self._stream: Optional[OutputStream] = None
        self._stream_factory = stream_factory or open_output_stream
        self._clip: Optional["AudioClip"] = None
        self._current_frame: int = 0
        self._state = PlaybackState.STOPPED
        self._on_state_changed = on_state_changed
        self._disposed: bool = False

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state == PlaybackState.PLAYING

    @property
    def current_clip(self) -> Optional["AudioClip"]:
        """Clip bound to the active voice, if any."""
        return self._clip

    @property
    def current_frame(self) -> int:
        return self._current_frame

    def _set_state(self, state: PlaybackState) -> None:
        if self._state != state:
            self._state = state
            if self._on_state_changed and not self._disposed:
                self._on_state_changed(state)

    def play(self, file: "AudioFile") -> Optional[OutputStream]:
        """
        Start a voice bound to ``file.audio``, preempting any active one.

        Returns:
            The started output stream, or None if it could not be started
        """
        self.stop()
        clip = file.audio
        self._clip = clip
        self._current_frame = 0

        def playback_callback(outdata: np.ndarray, frames: int, time: object, status: object) -> None:
            start = self._current_frame
            chunk = clip.data[start:start + frames]
            outdata.fill(0)
            outdata[:len(chunk), 0] = chunk
            self._current_frame = start + len(chunk)
            if len(chunk) < frames:
                import sounddevice as sd
                raise sd.CallbackStop()

        stream: Optional[OutputStream] = None
        try:
            stream = self._stream_factory(
                samplerate=clip.samplerate,
                channels=AUDIO_CONFIG.playback_channels,
                blocksize=AUDIO_CONFIG.playback_blocksize,
                dtype="float32",
                callback=playback_callback,
                finished_callback=lambda: self._on_finished(stream),
            )
            self._stream = stream
            stream.start()
        except Exception as e:
            logger.error("Failed to start preview: %s", e, exc_info=True)
            self._stream = None
            self._clip = None
            if stream is not None:
                try:
                    stream.close()
                except Exception as close_error:
                    logger.warning("Error closing stream: %s", close_error)
            self._set_state(PlaybackState.STOPPED)
            return None

        self._set_state(PlaybackState.PLAYING)
        logger.info("Preview started: %s (%.2fs)", file.name, clip.duration)
        return stream

    def _on_finished(self, stream: OutputStream) -> None:
        # Only the voice that is still current may reset state.
        if stream is self._stream and not self._disposed:
            self._stream = None
            self._clip = None
            self._set_state(PlaybackState.STOPPED)

    def stop(self) -> None:
        """Stop and release the active voice. Does nothing when idle."""
        stream, self._stream = self._stream, None
        self._clip = None
        if stream is not None:
            try:
                stream.stop()
                stream.close()
            except Exception as e:
                logger.warning("Error stopping stream: %s", e)
            logger.info("Preview stopped")
        self._set_state(PlaybackState.STOPPED)

    def cleanup(self) -> None:
        """Clean up resources."""
        self.stop()
        self._disposed = True
        self._on_state_changed = None
