"""
Layout of the Polyend Tracker instrument (.pti) header.
All multi-byte fields are little endian; PCM follows the header directly.
"""
import struct
from enum import IntEnum

HEADER_SIZE = 392
NAME_LENGTH = 31
MAX_SLICES = 48
SLICE_SCALE = 65535  # slice offsets are stored as fraction * 65535
DEFAULT_INSTRUMENT_NAME = "stitched"


class SamplePlayback(IntEnum):
    ONE_SHOT = 0
    FORWARD_LOOP = 1
    BACKWARD_LOOP = 2
    PINGPONG_LOOP = 3
    SLICE = 4
    BEAT_SLICE = 5
    WAVETABLE = 6
    GRANULAR = 7


class GranularShape(IntEnum):
    SQUARE = 0
    TRIANGLE = 1
    GAUSS = 2


class GranularLoopMode(IntEnum):
    FORWARD = 0
    BACKWARD = 1
    PINGPONG = 2


class FilterType(IntEnum):
    LOW_PASS = 0
    HIGH_PASS = 1
    BAND_PASS = 2


# Unknown enum bytes decode to these
ENUM_DEFAULTS = {
    SamplePlayback: SamplePlayback.ONE_SHOT,
    GranularShape: GranularShape.SQUARE,
    GranularLoopMode: GranularLoopMode.FORWARD,
    FilterType: FilterType.LOW_PASS,
}

# field name -> (offset, kind); kind is a struct format, "bool", "name",
# "slices" or an enum class
HEADER_FIELDS = {
    "is_wavetable": (20, "bool"),
    "instrument_name": (21, "name"),
    "sample_length": (60, "<I"),
    "wavetable_window_size": (64, "<H"),
    "wavetable_total_positions": (68, "<H"),
    "sample_playback": (76, SamplePlayback),
    "playback_start": (78, "<H"),
    "loop_start": (80, "<H"),
    "loop_end": (82, "<H"),
    "playback_end": (84, "<H"),
    "wavetable_position": (88, "<H"),
    "volume_automation_enabled": (106, "bool"),
    "panning_automation_enabled": (122, "bool"),
    "cutoff_automation_enabled": (138, "bool"),
    "wavetable_position_automation_enabled": (154, "bool"),
    "granular_position_automation_enabled": (170, "bool"),
    "finetune_automation_enabled": (186, "bool"),
    "filter_type": (244, FilterType),
    "filter_enabled": (248, "bool"),
    "volume": (272, "B"),
    "panning": (276, "B"),
    "delay_send": (278, "B"),
    "slices": (280, "slices"),
    "total_slices": (376, "B"),
    "granular_length": (378, "<H"),
    "granular_position": (380, "<H"),
    "granular_shape": (382, GranularShape),
    "granular_loop_mode": (383, GranularLoopMode),
    "reverb_send": (384, "B"),
    "overdrive": (385, "B"),
    "bit_depth": (386, "B"),
}

FIELD_OFFSET = {name: offset for name, (offset, _) in HEADER_FIELDS.items()}


def _build_default_header() -> bytes:
    buf = bytearray(HEADER_SIZE)
    buf[0:6] = b"TI\x01\x00\x01\x05"
    struct.pack_into("<H", buf, FIELD_OFFSET["wavetable_window_size"], 2048)
    struct.pack_into("B", buf, FIELD_OFFSET["sample_playback"], SamplePlayback.ONE_SHOT)
    struct.pack_into("<HHHH", buf, FIELD_OFFSET["playback_start"], 0, 1, 65534, 65535)
    # volume envelope: amount, attack, decay, sustain, release
    struct.pack_into("<fHHfH", buf, 92, 1.0, 0, 0, 1.0, 1000)
    # filter cutoff and resonance
    struct.pack_into("<ff", buf, 236, 1.0, 0.0)
    struct.pack_into("B", buf, FIELD_OFFSET["filter_type"], FilterType.LOW_PASS)
    struct.pack_into("B", buf, FIELD_OFFSET["volume"], 50)
    struct.pack_into("B", buf, FIELD_OFFSET["panning"], 50)
    struct.pack_into("<H", buf, FIELD_OFFSET["granular_length"], 441)
    struct.pack_into("B", buf, FIELD_OFFSET["granular_shape"], GranularShape.SQUARE)
    struct.pack_into("B", buf, FIELD_OFFSET["granular_loop_mode"], GranularLoopMode.FORWARD)
    struct.pack_into("B", buf, FIELD_OFFSET["bit_depth"], 16)
    return bytes(buf)


DEFAULT_PTI_HEADER = _build_default_header()
