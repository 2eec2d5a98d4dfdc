"""Frame-based PCM analysis: power, silence, saturation and DC offset."""
from typing import Optional, Tuple
import numpy as np
from wavqc.audio.chunks import FormatDescriptor
from wavqc.audio.models import FrameCharacteristics, NO_SIGNAL_MAX_POWER_DB, NO_SIGNAL_MIN_POWER_DB
from wavqc.core.config import settings
from wavqc.core.logging import logger

INT16_MAX = int(np.iinfo(np.int16).max)
INT16_MIN = int(np.iinfo(np.int16).min)
# Power term used when a first difference does not fit in int16
CLAMPED_DIFFERENCE_POWER = INT16_MAX ** 2


def frame_geometry(
    sample_rate: int,
    bits_per_sample: int,
    data_size: int,
    frame_length_ms: int
) -> Tuple[int, int, int]:
    """
    Work out how the data chunk splits into frames.

    The last frame must be followed by at least one sample, because every
    frame's power reads one sample past its own end.

    Args:
        sample_rate: Samples per second
        bits_per_sample: Sample width in bits
        data_size: Data chunk size in bytes
        frame_length_ms: Frame length in milliseconds

    Returns:
        (samples_per_frame, raw_sample_count, frame_count)
    """
    samples_per_frame = frame_length_ms * sample_rate // 1000
    raw_sample_count = data_size // (bits_per_sample // 8)
    if raw_sample_count == 0 or samples_per_frame == 0:
        return samples_per_frame, raw_sample_count, 0
    frame_count = (raw_sample_count - 1) // samples_per_frame
    return samples_per_frame, raw_sample_count, frame_count


def frame_powers(samples: np.ndarray, samples_per_frame: int, frame_count: int) -> np.ndarray:
    """
    Sum of squared first differences for each frame.

    Frame k covers the differences sample[i + 1] - sample[i] for
    i in [k * samples_per_frame, (k + 1) * samples_per_frame). A difference
    outside the int16 range contributes 32767 ** 2 instead of its square.

    Returns:
        float64 array of length frame_count
    """
    if frame_count == 0:
        return np.zeros(0, dtype=np.float64)

    window = samples[:frame_count * samples_per_frame + 1].astype(np.int64)
    diffs = np.diff(window)
    terms = np.where(
        (diffs > INT16_MAX) | (diffs < INT16_MIN),
        CLAMPED_DIFFERENCE_POWER,
        diffs * diffs
    )
    # Integer sums are exact; convert once per frame
    return terms.reshape(frame_count, samples_per_frame).sum(axis=1).astype(np.float64)


def longest_run(flags: np.ndarray) -> int:
    """Length of the longest stretch of consecutive True values."""
    longest = 0
    current = 0
    for flag in flags.tolist():
        if flag:
            current += 1
        else:
            longest = max(longest, current)
            current = 0
    return max(longest, current)


def analyze_pcm(
    samples: np.ndarray,
    fmt: FormatDescriptor,
    data_size: Optional[int] = None,
    frame_length_ms: Optional[int] = None,
    noise_floor_power: Optional[float] = None,
    normalization_fraction: Optional[float] = None
) -> FrameCharacteristics:
    """
    Compute frame statistics for a buffer of 16-bit PCM samples.

    Frames with zero power are empty. Frames whose mean power is at or below
    the noise floor are silence. Everything else is audio, and only audio
    frames feed the dB range and the average power. Empty and silence runs
    are only counted after the first audio frame, since recordings normally
    open quiet.

    Args:
        samples: int16 samples from the data chunk
        fmt: Validated format descriptor
        data_size: Data chunk size in bytes (defaults to the buffer size)
        frame_length_ms: Frame length (defaults to config value)
        noise_floor_power: Linear silence threshold (defaults to config value)
        normalization_fraction: Leading share of samples used for DC offset
            and saturation (defaults to config value)

    Returns:
        FrameCharacteristics for the buffer
    """
    if frame_length_ms is None:
        frame_length_ms = settings.frame_length_ms
    if noise_floor_power is None:
        noise_floor_power = settings.noise_floor_power
    if normalization_fraction is None:
        normalization_fraction = settings.normalization_fraction
    if data_size is None:
        data_size = int(samples.size) * (fmt.bits_per_sample // 8)

    samples_per_frame, raw_sample_count, frame_count = frame_geometry(
        fmt.sample_rate, fmt.bits_per_sample, data_size, frame_length_ms
    )

    # Saturation, sample range and DC offset over the leading part of the file
    prefix_length = int(normalization_fraction * raw_sample_count)
    head = samples[:prefix_length].astype(np.int64)
    if head.size:
        saturated = int(np.count_nonzero((head == INT16_MAX) | (head == INT16_MIN)))
        max_sample = int(head.max())
        min_sample = int(head.min())
        dc_offset = float(head.sum()) / head.size
    else:
        saturated = max_sample = min_sample = 0
        dc_offset = 0.0

    powers = frame_powers(samples, samples_per_frame, frame_count)
    empty = powers == 0.0
    mean_powers = powers / samples_per_frame
    silence = ~empty & (mean_powers <= noise_floor_power)
    audio = ~(empty | silence)

    audio_db = 10.0 * np.log10(mean_powers[audio])
    audio_indices = np.flatnonzero(audio)

    if audio_db.size:
        signal_observed = True
        max_power_db = float(audio_db.max())
        min_power_db = float(audio_db.min())
        average_power = float(audio_db.sum()) / audio_db.size
        first_audio = int(audio_indices[0])
        last_audio = int(audio_indices[-1])
        longest_empty = longest_run(empty[first_audio + 1:])
        longest_silence = longest_run(silence[first_audio + 1:])
    else:
        signal_observed = False
        max_power_db = NO_SIGNAL_MAX_POWER_DB
        min_power_db = NO_SIGNAL_MIN_POWER_DB
        average_power = 0.0
        first_audio = last_audio = None
        longest_empty = longest_silence = 0

    characteristics = FrameCharacteristics(
        total_frames=frame_count,
        saturated_frames=saturated,
        empty_frames=int(np.count_nonzero(empty)),
        silence_frames=int(np.count_nonzero(silence)),
        max_power_db=max_power_db,
        min_power_db=min_power_db,
        signal_observed=signal_observed,
        average_power=average_power,
        average_power_frames=int(audio_db.size),
        max_sample=max_sample,
        min_sample=min_sample,
        dc_offset=dc_offset,
        longest_empty_run=longest_empty,
        longest_silence_run=longest_silence,
        frame_length_ms=frame_length_ms,
        samples_per_frame=samples_per_frame,
        first_audio_frame=first_audio,
        last_audio_frame=last_audio,
    )
    logger.debug(
        f"Analyzed {frame_count} frames of {samples_per_frame} samples: "
        f"{characteristics.empty_frames} empty, {characteristics.silence_frames} silence, "
        f"{characteristics.non_silence_frames} audio"
    )
    return characteristics
