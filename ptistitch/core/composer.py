"""
SliceComposer: the ordered slice list of a kit and every edit made to it.

Structural edits to the slice list and to layer lists are serialized by two
FIFO mutexes. Trimming is not: a trim on a layer that overlaps an
add_layer/remove_layer on the same slice can recompose from a stale layer
list. A later recomposition of that slice brings it back in line.
"""
from __future__ import annotations
from typing import Optional

from .clip import AudioClip
from .config import AUDIO_CONFIG, SLICE_CONFIG, SliceConfig, TrimOption
from .errors import CapacityExceeded, DurationExceeded, MinimumViolation, SliceRejected
from .loader import load_audio_file
from .messages import MessageLog
from .mutex import Mutex
from .playback import PlaybackController
from .slice import AudioFile, Layer, Slice
from .types import DecodeFunc, NotifyFunc, OutputStream
from . import dsp
from ..pti import codec
from ..utils.logger import logger


class SliceComposer:
    """
    Owns the slices of one kit, the current selection and the preview voice.
    Create one per session and call :meth:`close` when done.
    """

    def __init__(
        self,
        notify: Optional[NotifyFunc] = None,
        config: SliceConfig = SLICE_CONFIG,
        samplerate: int = AUDIO_CONFIG.default_samplerate,
        decoder: Optional[DecodeFunc] = None,
        playback: Optional[PlaybackController] = None,
    ) -> None:
        self.config = config
        self.samplerate = samplerate
        self.notify: NotifyFunc = notify if notify is not None else MessageLog()
        self.slices: list[Slice] = []
        self.edit_slice: Optional[Slice] = None
        self.playback = playback or PlaybackController()
        self._decoder = decoder
        self._slice_mutex = Mutex()
        self._layer_mutex = Mutex()
        logger.info("SliceComposer initialized")

    # --- Derived state ---

    @property
    def total_slices(self) -> int:
        return len(self.slices)

    @property
    def max_slices_reached(self) -> bool:
        return self.total_slices >= self.config.max_slices

    @property
    def total_duration(self) -> float:
        """Sum of every slice's trimmed duration, in seconds."""
        return sum(s.audio.duration for s in self.slices)

    @property
    def duration_exceeded(self) -> bool:
        return self.total_duration > self.config.max_duration

    # --- Loading ---

    def _reject(self, rejection: SliceRejected) -> None:
        logger.debug("%s: %s", type(rejection).__name__, rejection.message)
        self.notify(rejection.message, rejection.severity, self.config.message_timeout_ms)

    async def _load(self, name: str, data: bytes) -> AudioFile:
        return await load_audio_file(
            name,
            data,
            decoder=self._decoder,
            samplerate=self.samplerate,
            max_duration=self.config.max_duration,
        )

    # --- Slice management ---

    async def add_slice(self, name: str, data: bytes) -> Optional[Slice]:
        """
        Load a source and append it as a new single-layer slice.

        Capacity and total duration are checked against the kit as it is
        before the source is loaded.

        Returns:
            The new slice, or None if it was rejected
        """
        release = await self._slice_mutex.lock()
        try:
            if self.max_slices_reached:
                raise CapacityExceeded(
                    f'Rejected "{name}", max. {self.config.max_slices} slices reached.')
            if self.duration_exceeded:
                raise DurationExceeded(
                    f'Rejected "{name}", total duration > {self.config.max_duration:g}s.')
            audio_file = await self._load(name, data)
            new_slice = Slice.from_file(audio_file)
            self.slices.append(new_slice)
            logger.info(f"Added slice {new_slice.name} ({self.total_slices}/{self.config.max_slices})")
            return new_slice
        except SliceRejected as rejection:
            self._reject(rejection)
            return None
        finally:
            release()

    def _index(self, slice_: Slice) -> int:
        for i, s in enumerate(self.slices):
            if s is slice_:
                return i
        return -1

    def move_slice_up(self, slice_: Slice) -> None:
        idx = self._index(slice_)
        if idx > 0:
            self.slices[idx - 1], self.slices[idx] = self.slices[idx], self.slices[idx - 1]

    def move_slice_down(self, slice_: Slice) -> None:
        idx = self._index(slice_)
        if 0 <= idx < len(self.slices) - 1:
            self.slices[idx + 1], self.slices[idx] = self.slices[idx], self.slices[idx + 1]

    def remove_slice(self, slice_: Slice) -> bool:
        """Remove a slice. Its layers keep a now unresolvable slice id."""
        idx = self._index(slice_)
        if idx < 0:
            return False
        del self.slices[idx]
        if self.edit_slice is slice_:
            self.edit_slice = None
        logger.info(f"Removed slice {slice_.name}")
        return True

    def set_edit_slice(self, slice_: Optional[Slice]) -> None:
        self.edit_slice = slice_

    def resolve_slice(self, layer: Layer) -> Optional[Slice]:
        """Slice a layer belongs to, or None once that slice is gone."""
        for s in self.slices:
            if s.id == layer.slice_id:
                return s
        return None

    # --- Layer management ---

    async def add_layer(self, slice_: Slice, name: str, data: bytes) -> Optional[Layer]:
        """
        Load a source and stack it onto ``slice_``.

        Returns:
            The new layer, or None if it was rejected
        """
        release = await self._layer_mutex.lock()
        try:
            if len(slice_.layers) >= self.config.max_layers:
                raise CapacityExceeded(
                    f'Rejected "{name}", max. {self.config.max_layers} layers reached.')
            audio_file = await self._load(name, data)
            layer = Layer.from_file(audio_file, slice_.id)
            slice_.layers.append(layer)
            self.recompose(slice_)
            return layer
        except SliceRejected as rejection:
            self._reject(rejection)
            return None
        finally:
            release()

    async def remove_layer(self, slice_: Slice, layer: Layer) -> bool:
        """Remove a layer, keeping at least one. Returns True if removed."""
        release = await self._layer_mutex.lock()
        try:
            if len(slice_.layers) <= 1:
                raise MinimumViolation(
                    "Cannot remove layer, a slice must have at least one layer.")
            remaining = [l for l in slice_.layers if l is not layer]
            if len(remaining) == len(slice_.layers):
                return False
            slice_.layers = remaining
            self.recompose(slice_)
            return True
        except SliceRejected as rejection:
            self._reject(rejection)
            return False
        finally:
            release()

    def recompose(self, slice_: Slice) -> None:
        """Rebuild a slice's audio and name from its current layers."""
        combined = dsp.combine([layer.audio.data for layer in slice_.layers])
        slice_.original_audio = AudioClip(combined, self.samplerate)
        slice_.audio = self._apply_trim(slice_.original_audio, slice_.trim)
        slice_.name = self.config.name_separator.join(layer.name for layer in slice_.layers)
        logger.debug(f"Recomposed {slice_.name}: {len(slice_.layers)} layer(s), {slice_.duration:.2f}s")

    # --- Trimming ---

    @staticmethod
    def _apply_trim(clip: AudioClip, option: TrimOption) -> AudioClip:
        if option is TrimOption.NONE:
            return clip
        trimmed = dsp.trim_silence(
            clip.data,
            trim_start=option in (TrimOption.START, TrimOption.BOTH),
            trim_end=option in (TrimOption.END, TrimOption.BOTH),
        )
        return AudioClip(trimmed, clip.samplerate)

    def trim_audio(self, file: AudioFile, option: TrimOption | str) -> None:
        """
        Trim silence off ``file`` starting from its untrimmed audio.
        Trimming a layer recomposes its slice if that slice still exists.
        """
        option = TrimOption(option)
        file.trim = option
        file.audio = self._apply_trim(file.original_audio, option)
        if isinstance(file, Layer):
            owner = self.resolve_slice(file)
            if owner is not None:
                self.recompose(owner)

    # --- Playback ---

    def get_audio_buffer_source_node(self, file: AudioFile) -> Optional[OutputStream]:
        """Preview ``file``, replacing whatever is playing. None if the device failed."""
        return self.playback.play(file)

    def stop_playback(self) -> None:
        self.playback.stop()

    # --- Export ---

    def export_instrument(self, name: str = "") -> bytearray:
        """Beat-sliced .pti file of the current slices, in order."""
        buffer = codec.create_beat_sliced_pti_from_samples(
            [s.audio.data for s in self.slices], name)
        logger.info(f"Exported {self.total_slices} slice(s), {len(buffer)} bytes")
        return buffer

    # --- Lifecycle ---

    def clear(self) -> None:
        """Stop the preview and drop every slice."""
        self.stop_playback()
        self.slices.clear()
        self.edit_slice = None
        logger.info("Kit cleared")

    def close(self) -> None:
        self.clear()
        self.playback.cleanup()
