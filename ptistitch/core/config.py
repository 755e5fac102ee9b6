"""
Centralized configuration for ptistitch.
All limits and default settings in one place.
"""
from dataclasses import dataclass
from enum import Enum, auto


class PlaybackState(Enum):
    """Playback state enumeration."""
    STOPPED = auto()
    PLAYING = auto()


class TrimOption(str, Enum):
    """Which edges of a clip get their silence removed."""
    NONE = "none"
    START = "start"
    END = "end"
    BOTH = "both"


class Severity(str, Enum):
    """Severity of a user-facing message."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class SliceConfig:
    """Composition limits."""
    max_slices: int = 48
    max_layers: int = 12
    max_duration: float = 45.0  # seconds, per source and for the whole kit
    name_separator: str = " + "
    message_timeout_ms: int = 8500


@dataclass(frozen=True, slots=True)
class AudioConfig:
    """Audio engine configuration."""
    default_samplerate: int = 44100
    playback_blocksize: int = 1024
    playback_channels: int = 1


@dataclass(frozen=True, slots=True)
class TrimConfig:
    """Silence detection settings."""
    top_db: float = 60.0
    frame_length: int = 2048
    hop_length: int = 512


# Global config instances (immutable singletons)
SLICE_CONFIG = SliceConfig()
AUDIO_CONFIG = AudioConfig()
TRIM_CONFIG = TrimConfig()
