"""Loads a WAVE file through the chunk parsers and exposes its analysis."""
import io
from functools import cached_property
from pathlib import Path
from typing import BinaryIO, Optional, Union
import numpy as np
from wavqc.audio.chunks import DataChunk, FormatDescriptor, RiffEnvelope
from wavqc.audio.dsp.frames import analyze_pcm
from wavqc.audio.models import FrameCharacteristics
from wavqc.core.errors import DataChunkInvalid, FormatUnsupported, IoFailure, RiffInvalid, WaveError
from wavqc.core.logging import logger


class WaveDocument:
    """A validated 8 kHz 16-bit mono PCM WAVE file."""

    def __init__(
        self,
        riff: RiffEnvelope,
        fmt: FormatDescriptor,
        data: DataChunk,
        source: Optional[str] = None
    ):
        self.riff = riff
        self.fmt = fmt
        self.data = data
        self.source = source

    @classmethod
    def from_stream(cls, stream: BinaryIO, source: Optional[str] = None) -> "WaveDocument":
        """
        Parse RIFF, fmt and data chunks in order, stopping at the first invalid one.

        Args:
            stream: Binary stream positioned at the start of the file
            source: Label used in log messages (file name, upload name)

        Returns:
            WaveDocument

        Raises:
            RiffInvalid, FormatUnsupported, DataChunkInvalid
        """
        riff = RiffEnvelope.read(stream)
        if not riff.validate():
            raise RiffInvalid(
                f"Not a RIFF/WAVE file (id={riff.chunk_id!r}, format={riff.format!r}, size={riff.size})"
            )

        fmt = FormatDescriptor.read(stream)
        if not fmt.validate():
            raise FormatUnsupported(
                "WAVE file is not 8KHz 16bit Mono PCM: " + "; ".join(fmt.problems())
            )

        data = DataChunk.read(stream)
        if not data.validate():
            raise DataChunkInvalid(
                f"Data chunk invalid (id={data.chunk_id!r}, declared {data.size} bytes, "
                f"read {data.sample_count * 2})"
            )

        logger.debug(f"Loaded {source or 'stream'}: {fmt.summary()}")
        return cls(riff, fmt, data, source=source)

    @classmethod
    def from_bytes(cls, content: bytes, source: Optional[str] = None) -> "WaveDocument":
        """Parse an in-memory WAVE file."""
        return cls.from_stream(io.BytesIO(content), source=source)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "WaveDocument":
        """Open and parse a WAVE file. The file is closed before returning or raising."""
        try:
            with open(path, "rb") as stream:
                return cls.from_stream(stream, source=str(path))
        except OSError as e:
            raise IoFailure(f"Cannot read {path}: {e}") from e

    @property
    def samples(self) -> np.ndarray:
        return self.data.samples

    @property
    def format_summary(self) -> str:
        return self.fmt.summary()

    @cached_property
    def characteristics(self) -> FrameCharacteristics:
        """Frame statistics, computed on first access and reused afterwards."""
        return analyze_pcm(self.data.samples, self.fmt, data_size=self.data.size)

    def analyze(self) -> FrameCharacteristics:
        return self.characteristics


def load_wave_document(path: Union[str, Path]) -> Optional[WaveDocument]:
    """
    Load a WAVE file, returning None instead of raising when it cannot be used.

    Args:
        path: File to load

    Returns:
        WaveDocument, or None if any stage failed
    """
    try:
        return WaveDocument.from_path(path)
    except WaveError as e:
        logger.error(f"Failed to load WAVE file {path} at stage '{e.stage}': {e.message}")
        return None
