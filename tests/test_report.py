"""Unit tests for the text report and result model."""
import pytest
from wavqc.audio.models import FrameCharacteristics
from wavqc.audio.report import render_report


def make_characteristics(**overrides):
    values = dict(
        total_frames=50,
        saturated_frames=1,
        empty_frames=49,
        silence_frames=0,
        max_power_db=71.25,
        min_power_db=61.25,
        signal_observed=True,
        average_power=66.25,
        average_power_frames=1,
        max_sample=32767,
        min_sample=0,
        dc_offset=5.46,
        longest_empty_run=39,
        longest_silence_run=0,
    )
    values.update(overrides)
    return FrameCharacteristics(**values)


def test_derived_values():
    """Non-silence count, SNR and missing-audio duration derive from the fields."""
    c = make_characteristics()

    assert c.non_silence_frames == 1
    assert c.snr == pytest.approx(10.0)
    assert c.empty_audio_duration == pytest.approx(0.78)
    assert c.bytes_per_frame == 320


def test_snr_without_signal():
    """No audio frames means no power range."""
    c = make_characteristics(signal_observed=False, max_power_db=-1000.0, min_power_db=1000.0)
    assert c.snr == 0.0


def test_invalid_counts_rejected():
    """Counts that break the frame partition are refused."""
    with pytest.raises(ValueError):
        make_characteristics(empty_frames=40, silence_frames=20)
    with pytest.raises(ValueError):
        make_characteristics(longest_empty_run=51)
    with pytest.raises(ValueError):
        make_characteristics(saturated_frames=-1)


def test_to_dict_includes_derived_values():
    """JSON output carries the derived values too."""
    data = make_characteristics().to_dict()

    assert data["total_frames"] == 50
    assert data["non_silence_frames"] == 1
    assert data["snr"] == pytest.approx(10.0)
    assert data["empty_audio_duration"] == pytest.approx(0.78)
    assert data["first_audio_frame"] is None


def test_report_sections():
    """Test the report layout with both run lines."""
    text = render_report(make_characteristics(longest_silence_run=3, silence_frames=3, empty_frames=46))

    assert "WAVE File Data Characteristics" in text
    assert "Average Power: 66.25 dB calculated over 1 frames" in text
    assert "SNR: 10.00" in text
    assert "Empty Frames: 46" in text
    assert "Non-Silence Frames: 1" in text
    assert "Num. consecutive empty frames: 39, Approximate Missing Audio Duration: 0.78 sec" in text
    assert "Num. consecutive silence frames: 3" in text


def test_report_omits_zero_runs():
    """Run lines only appear for non-zero runs."""
    text = render_report(make_characteristics(
        longest_empty_run=0,
        signal_observed=False,
        average_power=0.0,
        average_power_frames=0,
    ))

    assert "consecutive" not in text
    assert "No audio frames detected" in text
