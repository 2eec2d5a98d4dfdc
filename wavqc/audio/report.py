"""Plain-text rendering of frame characteristics."""
from wavqc.audio.models import FrameCharacteristics


def render_report(characteristics: FrameCharacteristics) -> str:
    """
    Format characteristics the way the console report shows them.

    Run-length lines only appear when a run was found.
    """
    c = characteristics
    lines = [
        "",
        "WAVE File Data Characteristics",
        "",
        "Power Levels",
        f"    Average Power: {c.average_power:.2f} dB calculated over {c.average_power_frames} frames",
    ]
    if c.signal_observed:
        lines += [
            f"    SNR: {c.snr:.2f}",
            f"    Max Power: {c.max_power_db}",
            f"    Min Power: {c.min_power_db}",
        ]
    else:
        lines.append("    No audio frames detected")
    lines += [
        "",
        "Frame Characteristics",
        f"    Total Frames: {c.total_frames}",
        f"    Empty Frames: {c.empty_frames}",
        f"    Silence Frames: {c.silence_frames}",
        f"    Non-Silence Frames: {c.non_silence_frames}",
        f"    Saturated Frames: {c.saturated_frames}",
        f"    Max Sample: {c.max_sample}",
        f"    Min Sample: {c.min_sample}",
        f"    DC Offset: {c.dc_offset}",
    ]
    if c.longest_empty_run > 0:
        lines.append(
            f"    Num. consecutive empty frames: {c.longest_empty_run}, "
            f"Approximate Missing Audio Duration: {c.empty_audio_duration:g} sec"
        )
    if c.longest_silence_run > 0:
        lines.append(f"    Num. consecutive silence frames: {c.longest_silence_run}")
    lines.append("")
    return "\n".join(lines)
