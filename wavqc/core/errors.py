"""Error types raised while loading a WAVE file."""


class BufferUnderrun(ValueError):
    """A byte window is too short for the requested field."""

    def __init__(self, offset: int, length: int, available: int):
        self.offset = offset
        self.length = length
        self.available = available
        super().__init__(
            f"Cannot read {length} bytes at offset {offset} from a {available}-byte buffer"
        )


class WaveError(Exception):
    """Base class for a failed load. `stage` names the pipeline step that failed."""

    stage = "wave"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.stage}] {self.message}"


class RiffInvalid(WaveError):
    """Bad RIFF/WAVE magic or a non-positive declared size."""

    stage = "riff"


class FormatUnsupported(WaveError):
    """The fmt chunk does not describe 8 kHz 16-bit mono PCM."""

    stage = "fmt"


class DataChunkInvalid(WaveError):
    """Wrong data chunk ID, or the payload does not match the declared size."""

    stage = "data"


class IoFailure(WaveError):
    """The input could not be opened or read."""

    stage = "io"
