"""
Records that make up a kit: AudioFile, and the Layer and Slice built on it.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import os
import uuid

from .clip import AudioClip
from .config import TrimOption


def new_id() -> str:
    return uuid.uuid4().hex


def display_name(file_name: str) -> str:
    """Strip the last extension from a source name ("kick.wav" -> "kick")."""
    root, _ = os.path.splitext(file_name)
    return root or file_name


@dataclass(eq=False)
class AudioFile:
    """
    A named clip plus its trimmed version.
    ``original_audio`` is what trimming starts from, ``audio`` is what plays
    and gets exported.
    """
    name: str
    original_audio: AudioClip
    audio: AudioClip
    trim: TrimOption = TrimOption.NONE
    id: str = field(default_factory=new_id)

    @property
    def duration(self) -> float:
        return self.audio.duration

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self.name}', {self.duration:.2f}s, trim={self.trim.value})"


@dataclass(eq=False, repr=False)
class Layer(AudioFile):
    """
    One recording inside a slice.
    ``slice_id`` only names the owner; look it up through the composer, the
    slice may have been removed since.
    """
    slice_id: str = ""

    @classmethod
    def from_file(cls, source: AudioFile, slice_id: str) -> Layer:
        return cls(
            name=source.name,
            original_audio=source.original_audio,
            audio=source.audio,
            trim=source.trim,
            slice_id=slice_id,
        )


@dataclass(eq=False, repr=False)
class Slice(AudioFile):
    """A kit entry: the sum of its layers, with its own trim on top."""
    layers: list[Layer] = field(default_factory=list)

    @classmethod
    def from_file(cls, source: AudioFile) -> Slice:
        """Wrap a freshly loaded file into a slice holding one layer."""
        new_slice = cls(
            name=source.name,
            original_audio=source.original_audio,
            audio=source.audio,
        )
        new_slice.layers.append(Layer.from_file(source, new_slice.id))
        return new_slice
