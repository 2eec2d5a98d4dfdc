"""Audio analysis result models."""
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

# Reported as max/min frame power when no audio frame was found
NO_SIGNAL_MAX_POWER_DB = -1000.0
NO_SIGNAL_MIN_POWER_DB = 1000.0


@dataclass(frozen=True)
class FrameCharacteristics:
    """Per-frame statistics of a WAVE file's PCM data."""
    total_frames: int
    saturated_frames: int  # Saturated samples in the normalization prefix
    empty_frames: int
    silence_frames: int
    max_power_db: float
    min_power_db: float
    signal_observed: bool  # False when max/min power hold the no-signal sentinels
    average_power: float  # Mean dB over audio frames, 0.0 when there are none
    average_power_frames: int
    max_sample: int
    min_sample: int
    dc_offset: float
    longest_empty_run: int  # Consecutive empty frames once audio was detected
    longest_silence_run: int  # Consecutive silence frames once audio was detected
    frame_length_ms: int = 20
    samples_per_frame: int = 160
    first_audio_frame: Optional[int] = None
    last_audio_frame: Optional[int] = None

    def __post_init__(self):
        """Validate counts."""
        counts = (
            self.total_frames, self.saturated_frames, self.empty_frames, self.silence_frames,
            self.average_power_frames, self.longest_empty_run, self.longest_silence_run,
        )
        if any(count < 0 for count in counts):
            raise ValueError(f"Frame counts must be non-negative, got {counts}")
        if self.empty_frames + self.silence_frames > self.total_frames:
            raise ValueError(
                f"{self.empty_frames} empty + {self.silence_frames} silence frames "
                f"exceed {self.total_frames} total frames"
            )
        if max(self.longest_empty_run, self.longest_silence_run) > self.total_frames:
            raise ValueError(f"Run length exceeds {self.total_frames} total frames")

    @property
    def non_silence_frames(self) -> int:
        return self.total_frames - self.empty_frames - self.silence_frames

    @property
    def snr(self) -> float:
        """Spread between the loudest and quietest audio frame, in dB."""
        if not self.signal_observed:
            return 0.0
        return self.max_power_db - self.min_power_db

    @property
    def frame_duration(self) -> float:
        """Frame length in seconds."""
        return self.frame_length_ms / 1000.0

    @property
    def bytes_per_frame(self) -> int:
        return self.samples_per_frame * 2

    @property
    def empty_audio_duration(self) -> float:
        """Approximate seconds of missing audio in the longest empty run."""
        return self.longest_empty_run * self.frame_duration

    def to_dict(self) -> Dict[str, Any]:
        """Fields plus derived values, ready for JSON."""
        result = asdict(self)
        result.update(
            non_silence_frames=self.non_silence_frames,
            snr=self.snr,
            bytes_per_frame=self.bytes_per_frame,
            empty_audio_duration=self.empty_audio_duration,
        )
        return result
