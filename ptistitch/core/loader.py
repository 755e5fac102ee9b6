"""
Turns raw source bytes into a validated, mono AudioFile.
"""
from __future__ import annotations
import asyncio
import io
from typing import Optional
import numpy as np
import soundfile as sf

from .clip import AudioClip
from .config import AUDIO_CONFIG, SLICE_CONFIG
from .errors import DecodeError, DurationExceeded
from .slice import AudioFile, display_name
from .types import AudioArray, DecodeFunc
from . import dsp
from ..utils.logger import logger


def decode_audio(data: bytes) -> tuple[AudioArray, int]:
    """
    Decode an in-memory audio file with soundfile.

    Returns:
        (samples as float32 (frames, channels), samplerate)
    """
    samples, samplerate = sf.read(io.BytesIO(data), dtype="float32", always_2d=True)
    return samples, samplerate


async def load_audio_file(
    name: str,
    data: bytes,
    decoder: Optional[DecodeFunc] = None,
    samplerate: int = AUDIO_CONFIG.default_samplerate,
    max_duration: float = SLICE_CONFIG.max_duration,
) -> AudioFile:
    """
    Decode, validate and downmix a source.

    Args:
        name: Source file name, used for the display name and messages
        data: Raw file contents
        decoder: Replacement for :func:`decode_audio`
        samplerate: Samplerate every clip is converted to
        max_duration: Longest accepted source, in seconds

    Raises:
        DecodeError: The bytes are not a readable audio file
        DurationExceeded: The source is longer than ``max_duration``
    """
    decode = decoder or decode_audio
    try:
        samples, source_sr = await asyncio.to_thread(decode, data)
    except Exception as e:
        logger.debug("Decoding %r failed: %s", name, e)
        raise DecodeError(f'Rejected "{name}", invalid audio file.') from e

    samples = np.asarray(samples, dtype=np.float32)
    duration = len(samples) / source_sr
    if duration > max_duration:
        raise DurationExceeded(f'Rejected "{name}", too long (>{max_duration:g}s).')

    mono = await asyncio.to_thread(dsp.to_mono, samples)
    if source_sr != samplerate:
        mono = await asyncio.to_thread(dsp.resample, mono, source_sr, samplerate)
    clip = AudioClip(mono, samplerate)
    logger.info(f"Loaded {name}: {clip.duration:.2f}s")
    return AudioFile(name=display_name(name), original_audio=clip, audio=clip)
