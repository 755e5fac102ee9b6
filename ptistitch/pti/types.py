"""
Decoded .pti header.
"""
from dataclasses import dataclass, field

from .constants import FilterType, GranularLoopMode, GranularShape, SamplePlayback


@dataclass
class HeaderData:
    """Header fields of a .pti file. ``slices`` holds start offsets as fractions of the sample."""
    is_wavetable: bool = False
    instrument_name: str = ""
    sample_length: int = 0
    wavetable_window_size: int = 0
    wavetable_total_positions: int = 0
    sample_playback: SamplePlayback = SamplePlayback.ONE_SHOT
    playback_start: int = 0
    loop_start: int = 0
    loop_end: int = 0
    playback_end: int = 0
    wavetable_position: int = 0
    volume_automation_enabled: bool = False
    panning_automation_enabled: bool = False
    cutoff_automation_enabled: bool = False
    wavetable_position_automation_enabled: bool = False
    granular_position_automation_enabled: bool = False
    finetune_automation_enabled: bool = False
    filter_type: FilterType = FilterType.LOW_PASS
    filter_enabled: bool = False
    volume: int = 0
    panning: int = 0
    delay_send: int = 0
    slices: list[float] = field(default_factory=list)
    total_slices: int = 0
    granular_length: int = 0
    granular_position: int = 0
    granular_shape: GranularShape = GranularShape.SQUARE
    granular_loop_mode: GranularLoopMode = GranularLoopMode.FORWARD
    reverb_send: int = 0
    overdrive: int = 0
    bit_depth: int = 0
