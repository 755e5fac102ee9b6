"""
Signal helpers used when loading and composing slices.
All functions are pure (no side effects) and operate on numpy arrays.
"""
from __future__ import annotations
from typing import Sequence
import numpy as np

from .types import AudioArray, MonoArray
from .config import TRIM_CONFIG


def to_mono(data: AudioArray) -> MonoArray:
    """
    Downmix (samples, channels) audio to a single channel.

    Args:
        data: Audio samples, mono or multichannel

    Returns:
        Mono float32 audio
    """
    if data.ndim == 1:
        return data.astype(np.float32, copy=False)
    import librosa
    # librosa expects channels first
    return librosa.to_mono(np.ascontiguousarray(data.T)).astype(np.float32, copy=False)


def resample(data: AudioArray, orig_sr: int, target_sr: int) -> AudioArray:
    """
    Resample audio to ``target_sr`` along the time axis.

    Args:
        data: Audio samples, shape (samples,) or (samples, channels)
        orig_sr: Samplerate of ``data``
        target_sr: Wanted samplerate

    Returns:
        Resampled float32 audio with the same channel layout
    """
    if orig_sr == target_sr or len(data) == 0:
        return data
    import librosa
    return librosa.resample(data, orig_sr=orig_sr, target_sr=target_sr, axis=0).astype(np.float32)


def trim_silence(
    data: MonoArray,
    trim_start: bool = True,
    trim_end: bool = True,
    top_db: float = TRIM_CONFIG.top_db,
) -> MonoArray:
    """
    Remove leading and/or trailing silence.

    Silence is anything more than ``top_db`` below the clip's peak. Fully
    silent input is returned untouched.

    Args:
        data: Mono audio samples
        trim_start: Trim the leading edge
        trim_end: Trim the trailing edge
        top_db: Threshold below peak, in dB

    Returns:
        Trimmed mono audio
    """
    if not (trim_start or trim_end) or len(data) == 0 or not np.any(data):
        return data
    import librosa
    _, (start, end) = librosa.effects.trim(
        data,
        top_db=top_db,
        frame_length=TRIM_CONFIG.frame_length,
        hop_length=TRIM_CONFIG.hop_length,
    )
    start = int(start) if trim_start else 0
    end = int(end) if trim_end else len(data)
    return data[start:end].copy()


def combine(parts: Sequence[MonoArray]) -> MonoArray:
    """
    Sum mono signals sample by sample.
    Shorter signals are zero-padded to the longest; the result is not clipped.
    """
    length = max((len(p) for p in parts), default=0)
    output = np.zeros(length, dtype=np.float32)
    for part in parts:
        output[:len(part)] += part
    return output

