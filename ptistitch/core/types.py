"""
Type definitions for the ptistitch core module.
Provides type aliases and protocols for the collaborators the composer talks to.
"""
from typing import Callable, Protocol
import numpy as np
from numpy.typing import NDArray

from .config import Severity

# Audio data types
AudioArray = NDArray[np.float32]  # Shape: (samples,) or (samples, channels)
MonoArray = NDArray[np.float32]   # Shape: (samples,)

# Callback types
ReleaseFunc = Callable[[], None]
DecodeFunc = Callable[[bytes], tuple[AudioArray, int]]  # -> (samples, samplerate)


class NotifyFunc(Protocol):
    """Protocol for the sink that receives user-facing rejections."""
    def __call__(self, message: str, severity: Severity, timeout_ms: int) -> None: ...


class OutputStream(Protocol):
    """The part of ``sounddevice.OutputStream`` the playback controller uses."""
    def start(self) -> None: ...
    def stop(self) -> None: ...
    def close(self) -> None: ...
