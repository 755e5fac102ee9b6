"""
ptistitch PTI Module

Reading and writing Polyend Tracker instrument (.pti) files:
- parse_header: Decode a file header into HeaderData
- get_pti_file: One-shot instrument from a mono sample
- create_beat_sliced_pti_from_samples: Beat-sliced instrument from several samples
"""
from .codec import (
    create_beat_sliced_pti_from_samples,
    float_to_int16,
    get_pti_file,
    parse_header,
)
from .constants import (
    HEADER_SIZE,
    MAX_SLICES,
    FilterType,
    GranularLoopMode,
    GranularShape,
    SamplePlayback,
)
from .types import HeaderData

__all__ = [
    # Codec
    'parse_header',
    'get_pti_file',
    'create_beat_sliced_pti_from_samples',
    'float_to_int16',
    # Types
    'HeaderData',
    'SamplePlayback',
    'GranularShape',
    'GranularLoopMode',
    'FilterType',
    'HEADER_SIZE',
    'MAX_SLICES',
]
