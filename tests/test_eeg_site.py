import random

import pytest

from neureset.eeg_site import (
    MAX_FREQUENCY,
    MIN_FREQUENCY,
    SAMPLES,
    UNSET_BASELINE,
    Band,
    EEGSite,
)


@pytest.fixture
def site():
    return EEGSite(3, rng=random.Random(42))


@pytest.mark.parametrize(
    "name, band",
    [
        ("Alpha", Band.ALPHA),
        ("beta", Band.BETA),
        ("DELTA", Band.DELTA),
        ("theta", Band.THETA),
        ("gamma", Band.THETA),
    ],
)
def test_band_from_name(name, band):
    assert Band.from_name(name) is band


def test_band_from_empty_name_raises():
    with pytest.raises(ValueError):
        Band.from_name("")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("alpha", (8, 12)),
        ("beta", (12, 30)),
        ("delta", (1, 4)),
        ("theta", (4, 7)),
    ],
)
def test_band_ranges_match_generator(name, expected):
    assert Band.from_name(name).frequency_range == expected


def test_new_site_state(site):
    assert site.id == 3
    assert site.is_connected
    assert site.baseline == UNSET_BASELINE


@pytest.mark.parametrize("band", list(Band))
def test_waveforms_have_samples_within_band(site, band):
    data = site.waveform(band)
    low, high = band.frequency_range
    assert len(data) == SAMPLES
    assert all(low <= value <= high for value in data)


def test_waveform_accepts_band_name(site):
    assert site.waveform("alpha") == site.waveform(Band.ALPHA)


def test_waveform_returns_copy(site):
    original = site.waveform(Band.BETA)
    data = site.waveform(Band.BETA)
    data[0] = -100
    assert site.waveform(Band.BETA) == original


def test_generate_waveforms_is_reproducible_with_seed():
    first = EEGSite(1, rng=random.Random(7))
    second = EEGSite(1, rng=random.Random(7))
    assert first.waveform(Band.DELTA) == second.waveform(Band.DELTA)


def test_calculate_baseline_of_constant_signal(site):
    assert site.calculate_baseline([10] * SAMPLES) == 10
    assert site.baseline == 10


def test_calculate_baseline_lies_within_band(site):
    baseline = site.calculate_baseline(site.waveform(Band.ALPHA))
    low, high = Band.ALPHA.frequency_range
    assert low <= baseline <= high
    assert site.baseline == baseline


def test_calculate_baseline_of_nothing_raises(site):
    with pytest.raises(ValueError):
        site.calculate_baseline([])


def test_small_offset_leaves_baseline_unchanged(site):
    site.baseline = 17
    assert site.deliver_treatment(4) == 17


@pytest.mark.parametrize("start", [0, 20, 40])
@pytest.mark.parametrize("offset", [5, 10, 15, 20])
def test_treatment_keeps_baseline_in_bounds(start, offset):
    site = EEGSite(1, rng=random.Random(start * 100 + offset))
    site.baseline = start
    result = site.deliver_treatment(offset)
    assert MIN_FREQUENCY <= result <= MAX_FREQUENCY
    assert site.baseline == result


def test_treatment_moves_at_most_spread_per_step():
    site = EEGSite(1, rng=random.Random(3))
    site.baseline = 20
    result = site.deliver_treatment(5)
    assert abs(result - 20) <= 16


def test_negative_offset_raises(site):
    with pytest.raises(ValueError):
        site.deliver_treatment(-5)


def test_disconnect_and_reconnect_emit_contact_lost(site):
    events = []
    site.contact_lost.connect(events.append)
    site.disconnect()
    assert not site.is_connected
    site.reconnect()
    assert site.is_connected
    assert events == [True, False]