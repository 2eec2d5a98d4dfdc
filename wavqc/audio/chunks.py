"""Parsers for the three chunks of an 8 kHz 16-bit mono PCM WAVE file."""
from dataclasses import dataclass, field
from typing import BinaryIO, List
import numpy as np
from wavqc.audio.codec import encode_ascii, encode_uint32, read_ascii, read_uint
from wavqc.core.errors import BufferUnderrun, DataChunkInvalid, FormatUnsupported, RiffInvalid
from wavqc.core.logging import logger

RIFF_BLOCK_SIZE = 12
FMT_BLOCK_SIZE = 24  # 8-byte sub-chunk header + 16-byte canonical PCM payload
FMT_CANONICAL_SIZE = 16
DATA_HEADER_SIZE = 8
PCM_FORMAT_TAG = 1
# The only profile the frame analysis supports
REQUIRED_SAMPLE_RATE = 8000  # Hz
REQUIRED_CHANNELS = 1  # mono
REQUIRED_BITS_PER_SAMPLE = 16


@dataclass(frozen=True)
class RiffEnvelope:
    """The outer RIFF header: ID, declared size, and format tag."""
    chunk_id: str
    size: int  # Size of the whole file minus 8 bytes
    format: str

    @classmethod
    def read(cls, stream: BinaryIO) -> "RiffEnvelope":
        buffer = stream.read(RIFF_BLOCK_SIZE)
        try:
            envelope = cls(
                chunk_id=read_ascii(buffer, 4, 0),
                size=read_uint(buffer, 4, 4),
                format=read_ascii(buffer, 4, 8),
            )
        except BufferUnderrun as e:
            raise RiffInvalid(f"Truncated RIFF header: {e}") from e
        logger.debug(f"RIFF envelope: id={envelope.chunk_id!r} size={envelope.size} format={envelope.format!r}")
        return envelope

    def validate(self) -> bool:
        """True if this is a RIFF/WAVE container with a positive size."""
        return (
            self.size > 0
            and self.chunk_id.upper() == "RIFF"
            and self.format.upper() == "WAVE"
        )

    def to_bytes(self) -> bytes:
        """Re-emit the 12-byte envelope."""
        return encode_ascii(self.chunk_id) + encode_uint32(self.size) + encode_ascii(self.format)


@dataclass(frozen=True)
class FormatDescriptor:
    """The fmt sub-chunk describing the PCM encoding."""
    chunk_id: str
    chunk_size: int
    audio_format: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    raw: bytes = field(default=b"", repr=False)  # The 24 header bytes as read
    extension_size: int = 0  # Bytes skipped after the canonical payload

    @classmethod
    def read(cls, stream: BinaryIO) -> "FormatDescriptor":
        buffer = stream.read(FMT_BLOCK_SIZE)
        try:
            chunk_size = read_uint(buffer, 4, 4)
            extension_size = max(chunk_size - FMT_CANONICAL_SIZE, 0)
            descriptor = cls(
                chunk_id=read_ascii(buffer, 4, 0),
                chunk_size=chunk_size,
                audio_format=read_uint(buffer, 2, 8),
                channels=read_uint(buffer, 2, 10),
                sample_rate=read_uint(buffer, 4, 12),
                byte_rate=read_uint(buffer, 4, 16),
                block_align=read_uint(buffer, 2, 20),
                bits_per_sample=read_uint(buffer, 2, 22),
                raw=bytes(buffer),
                extension_size=extension_size,
            )
        except BufferUnderrun as e:
            raise FormatUnsupported(f"Truncated fmt chunk: {e}") from e

        if extension_size:
            # Discard the extension (e.g. cbSize + extra format bytes)
            skipped = len(stream.read(extension_size))
            logger.debug(f"Skipped {skipped} of {extension_size} fmt extension bytes")
        return descriptor

    def problems(self) -> List[str]:
        """Describe every way this descriptor misses the supported profile."""
        problems = []
        if self.chunk_id.upper() != "FMT ":
            problems.append(f"chunk id {self.chunk_id!r} is not 'fmt '")
        if self.audio_format != PCM_FORMAT_TAG:
            problems.append(f"audio format {self.audio_format} is not PCM ({PCM_FORMAT_TAG})")
        if self.channels != REQUIRED_CHANNELS:
            problems.append(f"{self.channels} channels, expected {REQUIRED_CHANNELS}")
        if self.sample_rate != REQUIRED_SAMPLE_RATE:
            problems.append(f"sample rate {self.sample_rate} Hz, expected {REQUIRED_SAMPLE_RATE} Hz")
        if self.bits_per_sample != REQUIRED_BITS_PER_SAMPLE:
            problems.append(f"{self.bits_per_sample} bits per sample, expected {REQUIRED_BITS_PER_SAMPLE}")
        return problems

    def validate(self) -> bool:
        """True if the descriptor is 8 kHz 16-bit mono PCM."""
        return not self.problems()

    def summary(self) -> str:
        """One-line human readable description of the format."""
        if self.audio_format == PCM_FORMAT_TAG:
            kind = "Audio Format: PCM WAVE File."
        else:
            kind = f"Audio Format: {self.audio_format}"
        return (
            f"{kind} Number of Channels: {self.channels}"
            f"  Sample Rate: {self.sample_rate}"
            f"  Bits/Sample: {self.bits_per_sample}"
        )


@dataclass(frozen=True, eq=False)
class DataChunk:
    """The data sub-chunk and its decoded samples."""
    chunk_id: str
    size: int  # Declared payload size in bytes
    samples: np.ndarray = field(repr=False)  # Read-only little-endian int16 samples

    @classmethod
    def read(cls, stream: BinaryIO) -> "DataChunk":
        header = stream.read(DATA_HEADER_SIZE)
        try:
            chunk_id = read_ascii(header, 4, 0)
            size = read_uint(header, 4, 4)
        except BufferUnderrun as e:
            raise DataChunkInvalid(f"Truncated data chunk header: {e}") from e

        payload = stream.read((size // 2) * 2)
        # A payload cut mid-sample keeps only the whole samples
        payload = payload[:len(payload) - len(payload) % 2]
        samples = np.frombuffer(payload, dtype="<i2")
        logger.debug(f"Data chunk: id={chunk_id!r} size={size} samples={samples.size}")
        return cls(chunk_id=chunk_id, size=size, samples=samples)

    @property
    def sample_count(self) -> int:
        return int(self.samples.size)

    def validate(self) -> bool:
        """True if the ID is "data" and every declared byte was read."""
        return self.chunk_id.lower() == "data" and self.sample_count * 2 == self.size
