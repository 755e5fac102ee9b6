from __future__ import annotations
from dataclasses import dataclass
import numpy as np

from .types import MonoArray


@dataclass(frozen=True)
class AudioClip:
    """
    Decoded mono PCM at a fixed samplerate.
    The sample buffer is made read-only; operations return new clips.
    """
    data: MonoArray
    samplerate: int

    def __post_init__(self) -> None:
        data = np.ascontiguousarray(self.data, dtype=np.float32)
        if data.ndim != 1:
            raise ValueError(f"AudioClip expects mono samples, got shape {data.shape}")
        if data is self.data:
            data = data.copy()
        data.flags.writeable = False
        object.__setattr__(self, "data", data)

    @property
    def frame_count(self) -> int:
        return len(self.data)

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        if self.samplerate <= 0:
            return 0.0
        return self.frame_count / self.samplerate

    @classmethod
    def silence(cls, frames: int, samplerate: int) -> AudioClip:
        return cls(np.zeros(frames, dtype=np.float32), samplerate)

    def __repr__(self) -> str:
        return f"AudioClip(frames={self.frame_count}, samplerate={self.samplerate}, duration={self.duration:.2f}s)"
