"""
Read and build .pti instrument files.

Parsing is lenient: unknown enum values fall back to a default and slice
entries past ``total_slices`` are dropped.
"""
from __future__ import annotations
import struct
from enum import IntEnum
from typing import Sequence, Union
import numpy as np

from .constants import (
    DEFAULT_INSTRUMENT_NAME,
    DEFAULT_PTI_HEADER,
    ENUM_DEFAULTS,
    FIELD_OFFSET,
    HEADER_FIELDS,
    HEADER_SIZE,
    MAX_SLICES,
    NAME_LENGTH,
    SLICE_SCALE,
    SamplePlayback,
)
from .types import HeaderData

Buffer = Union[bytes, bytearray, memoryview]


def _coerce(enum_cls: type[IntEnum], value: int) -> IntEnum:
    try:
        return enum_cls(value)
    except ValueError:
        return ENUM_DEFAULTS[enum_cls]


def parse_header(buffer: Buffer) -> HeaderData:
    """Parse the header at the start of a .pti file."""
    if len(buffer) < HEADER_SIZE:
        raise ValueError(f"PTI header needs {HEADER_SIZE} bytes, got {len(buffer)}")

    values = {}
    for name, (offset, kind) in HEADER_FIELDS.items():
        if kind == "bool":
            values[name] = buffer[offset] == 1
        elif kind == "name":
            raw = bytes(buffer[offset:offset + NAME_LENGTH])
            values[name] = raw.decode("cp1252", errors="replace").replace("\x00", "")
        elif kind == "slices":
            entries = struct.unpack_from(f"<{MAX_SLICES}H", buffer, offset)
            values[name] = [entry / SLICE_SCALE for entry in entries]
        elif isinstance(kind, type) and issubclass(kind, IntEnum):
            values[name] = _coerce(kind, buffer[offset])
        else:
            values[name] = struct.unpack_from(kind, buffer, offset)[0]

    header = HeaderData(**values)
    del header.slices[header.total_slices:]
    return header


def float_to_int16(data: np.ndarray) -> np.ndarray:
    """
    Convert float samples to little-endian signed 16-bit PCM.
    Values are clamped to [-1, 1]; negatives scale by 32768, positives by 32767.
    """
    clipped = np.clip(np.asarray(data, dtype=np.float32), -1.0, 1.0)
    scaled = np.where(clipped < 0, clipped * 32768.0, clipped * 32767.0)
    return scaled.astype("<i2")


def get_pti_file(data: np.ndarray) -> bytearray:
    """One-shot instrument holding ``data`` (mono float samples)."""
    pcm = float_to_int16(data)
    length = pcm.size * 2
    buffer = bytearray(HEADER_SIZE + length)
    buffer[:HEADER_SIZE] = DEFAULT_PTI_HEADER
    struct.pack_into("<I", buffer, FIELD_OFFSET["sample_length"], length)
    buffer[HEADER_SIZE:] = pcm.tobytes()
    return buffer


def encode_name(name: str) -> bytes:
    """Instrument name as 31 NUL-padded ASCII bytes."""
    encoded = name[:NAME_LENGTH].encode("ascii", errors="replace")
    return encoded.ljust(NAME_LENGTH, b"\x00")


def create_beat_sliced_pti_from_samples(clips: Sequence[np.ndarray], instrument_name: str = "") -> bytearray:
    """
    Concatenate ``clips`` into one beat-sliced instrument, one slice per clip.

    Each slice starts where the previous clips end, stored as
    floor(65535 * preceding_frames / total_frames).
    """
    if len(clips) > MAX_SLICES:
        raise ValueError(f"A PTI file holds at most {MAX_SLICES} slices, got {len(clips)}")

    lengths = [len(clip) for clip in clips]
    total = sum(lengths)
    merged = np.concatenate(clips) if clips else np.zeros(0, dtype=np.float32)
    buffer = get_pti_file(merged)

    name_offset = FIELD_OFFSET["instrument_name"]
    buffer[name_offset:name_offset + NAME_LENGTH] = encode_name(instrument_name or DEFAULT_INSTRUMENT_NAME)
    struct.pack_into("B", buffer, FIELD_OFFSET["sample_playback"], SamplePlayback.BEAT_SLICE)
    struct.pack_into("B", buffer, FIELD_OFFSET["total_slices"], len(clips))

    offset = 0
    for idx, length in enumerate(lengths):
        position = offset * SLICE_SCALE // total if total else 0
        struct.pack_into("<H", buffer, FIELD_OFFSET["slices"] + idx * 2, position)
        offset += length
    return buffer
