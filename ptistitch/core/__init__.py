"""
ptistitch Core Module

This module contains the kit composition logic:
- SliceComposer: Slice list, layers, trimming and export
- AudioClip: Immutable mono PCM
- Slice / Layer / AudioFile: Kit records
- PlaybackController: Single-voice preview
- Mutex: FIFO lock for async edits
- load_audio_file: Decode and validate a source
"""
from .clip import AudioClip
from .composer import SliceComposer
from .slice import AudioFile, Layer, Slice
from .playback import PlaybackController
from .mutex import Mutex
from .loader import decode_audio, load_audio_file
from .messages import Message, MessageLog
from .errors import (
    SliceRejected,
    DecodeError,
    DurationExceeded,
    CapacityExceeded,
    MinimumViolation,
)
from .config import (
    AUDIO_CONFIG,
    SLICE_CONFIG,
    TRIM_CONFIG,
    PlaybackState,
    Severity,
    TrimOption,
)
from . import dsp

__all__ = [
    # Main classes
    'SliceComposer',
    'AudioClip',
    'AudioFile',
    'Layer',
    'Slice',
    'PlaybackController',
    'Mutex',
    'Message',
    'MessageLog',
    'decode_audio',
    'load_audio_file',
    # Errors
    'SliceRejected',
    'DecodeError',
    'DurationExceeded',
    'CapacityExceeded',
    'MinimumViolation',
    # Config
    'AUDIO_CONFIG',
    'SLICE_CONFIG',
    'TRIM_CONFIG',
    'PlaybackState',
    'Severity',
    'TrimOption',
    # Submodules
    'dsp',
]
