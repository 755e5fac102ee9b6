"""
Tests for source loading and AudioClip.
"""
import asyncio
import pytest
import numpy as np

from ptistitch.core.clip import AudioClip
from ptistitch.core.config import TrimOption
from ptistitch.core.errors import DecodeError, DurationExceeded
from ptistitch.core.loader import decode_audio, load_audio_file
from ptistitch.core.slice import display_name
from conftest import TEST_SR, sine, wav_bytes


def load(name, data, **kwargs):
    kwargs.setdefault("samplerate", TEST_SR)
    return asyncio.run(load_audio_file(name, data, **kwargs))


class TestAudioClip:

    def test_duration(self, sample_mono_audio):
        clip = AudioClip(sample_mono_audio, TEST_SR)
        assert clip.frame_count == TEST_SR
        assert clip.duration == pytest.approx(1.0)

    def test_read_only(self, sample_mono_audio):
        clip = AudioClip(sample_mono_audio, TEST_SR)
        with pytest.raises(ValueError):
            clip.data[0] = 1.0

    def test_source_array_stays_writable(self, sample_mono_audio):
        AudioClip(sample_mono_audio, TEST_SR)
        sample_mono_audio[0] = 0.25
        assert sample_mono_audio[0] == 0.25

    def test_rejects_multichannel(self):
        with pytest.raises(ValueError):
            AudioClip(np.zeros((10, 2), dtype=np.float32), TEST_SR)

    def test_silence(self):
        clip = AudioClip.silence(100, TEST_SR)
        assert clip.frame_count == 100
        assert not clip.data.any()


class TestDisplayName:

    def test_strips_extension(self):
        assert display_name("kick.wav") == "kick"

    def test_strips_last_extension_only(self):
        assert display_name("kick.v2.wav") == "kick.v2"

    def test_no_extension(self):
        assert display_name("kick") == "kick"


class TestLoadAudioFile:

    def test_decode_audio(self, kick_wav):
        samples, sr = decode_audio(kick_wav)
        assert sr == TEST_SR
        assert samples.shape == (TEST_SR // 2, 1)

    def test_mono_source(self):
        data = sine(0.5)
        audio_file = load("kick.wav", wav_bytes(data))
        assert audio_file.name == "kick"
        assert audio_file.trim is TrimOption.NONE
        assert audio_file.audio is audio_file.original_audio
        assert np.array_equal(audio_file.audio.data, data)

    def test_stereo_source_downmixed(self):
        stereo = np.column_stack((sine(0.25), sine(0.25)))
        audio_file = load("wide.wav", wav_bytes(stereo))
        assert audio_file.audio.data.ndim == 1
        assert audio_file.audio.frame_count == TEST_SR // 4

    def test_resampled_to_target_rate(self):
        audio_file = load("hi.wav", wav_bytes(sine(0.5, sr=16000), sr=16000))
        assert audio_file.audio.samplerate == TEST_SR
        assert audio_file.audio.frame_count == TEST_SR // 2

    def test_invalid_bytes(self):
        with pytest.raises(DecodeError) as exc:
            load("notes.txt", b"definitely not audio")
        assert exc.value.message == 'Rejected "notes.txt", invalid audio file.'

    def test_too_long(self):
        with pytest.raises(DurationExceeded) as exc:
            load("long.wav", wav_bytes(sine(1.5)), max_duration=1.0)
        assert exc.value.message == 'Rejected "long.wav", too long (>1s).'

    def test_custom_decoder(self):
        def decoder(data):
            return np.full((40, 2), 0.5, dtype=np.float32), TEST_SR

        audio_file = load("fake.bin", b"", decoder=decoder)
        assert audio_file.audio.frame_count == 40
        assert np.allclose(audio_file.audio.data, 0.5)

    def test_duration_checked_before_resampling(self, monkeypatch):
        from ptistitch.core import dsp

        calls = []
        original = dsp.resample

        def counting_resample(data, orig_sr, target_sr):
            calls.append(np.shape(data))
            return original(data, orig_sr, target_sr)

        monkeypatch.setattr(dsp, "resample", counting_resample)

        def decoder(data):
            return np.zeros((48000 * 60, 2), dtype=np.float32), 48000

        with pytest.raises(DurationExceeded):
            load("long.wav", b"", decoder=decoder, max_duration=45)
        assert calls == []

    def test_downmixed_before_resampling(self, monkeypatch):
        from ptistitch.core import dsp

        calls = []
        original = dsp.resample

        def counting_resample(data, orig_sr, target_sr):
            calls.append(np.shape(data))
            return original(data, orig_sr, target_sr)

        monkeypatch.setattr(dsp, "resample", counting_resample)

        stereo = np.column_stack((sine(0.25, sr=16000), sine(0.25, sr=16000)))
        audio_file = load("wide.wav", wav_bytes(stereo, sr=16000))
        assert calls == [(4000,)]
        assert audio_file.audio.frame_count == TEST_SR // 4
