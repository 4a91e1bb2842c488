import numpy as np
import pytest

from asrfront.resample import LinearResample


def _signal(n, seed=0):
    rng = np.random.default_rng(seed)
    return rng.standard_normal(n).astype(np.float32)


def test_rates_are_reported():
    r = LinearResample(16000, 8000, 3800.0, 6)
    assert r.input_sampling_rate == 16000
    assert r.output_sampling_rate == 8000


@pytest.mark.parametrize(
    "args",
    [
        (0, 8000, 3000.0, 6),
        (16000, 0, 3000.0, 6),
        (16000, 8000, 0.0, 6),
        (16000, 8000, 4500.0, 6),
        (16000, 8000, 3000.0, 0),
    ],
)
def test_invalid_settings_raise(args):
    with pytest.raises(ValueError):
        LinearResample(*args)


def test_flush_output_length_downsample():
    r = LinearResample(16000, 8000, 3800.0, 6)
    assert r.num_output_samples(160, True) == 80
    assert len(r.resample(_signal(160), True)) == 80


def test_flush_output_length_upsample():
    r = LinearResample(8000, 16000, 3800.0, 6)
    assert len(r.resample(_signal(80), True)) == 160


def test_without_flush_holds_back_samples():
    r = LinearResample(16000, 8000, 3800.0, 6)
    assert r.num_output_samples(160, False) < r.num_output_samples(160, True)
    assert r.num_output_samples(0, True) == 0
    assert r.num_output_samples(1, False) == 0


def test_empty_input_gives_empty_output():
    r = LinearResample(16000, 8000, 3800.0, 6)
    assert r.resample([], True).size == 0


def test_same_rate_is_identity():
    data = _signal(200, seed=3)
    r = LinearResample(16000, 16000, 8000.0, 6)
    out = r.resample(data, True)
    assert out.shape == data.shape
    assert np.allclose(out, data, atol=1e-4)


def test_dc_is_preserved_when_downsampling():
    r = LinearResample(16000, 8000, 3800.0, 16)
    out = r.resample(np.ones(2000), True)
    middle = out[200:-200]
    assert np.allclose(middle, 1.0, atol=0.01)


@pytest.mark.parametrize("rates", [(16000, 8000, 3800.0), (8000, 16000, 3800.0), (44100, 16000, 7500.0)])
def test_streaming_matches_one_shot(rates):
    samp_in, samp_out, cutoff = rates
    data = _signal(3000, seed=7)
    whole = LinearResample(samp_in, samp_out, cutoff, 6).resample(data, True)

    streamer = LinearResample(samp_in, samp_out, cutoff, 6)
    pieces = [data[:500], data[500:537], data[537:1800], data[1800:]]
    outputs = [streamer.resample(p, False) for p in pieces[:-1]]
    outputs.append(streamer.resample(pieces[-1], True))
    joined = np.concatenate(outputs)

    assert joined.shape == whole.shape
    assert np.allclose(joined, whole, atol=1e-5)


def test_reset_discards_partial_signal():
    data = _signal(1000, seed=11)
    fresh = LinearResample(16000, 8000, 3800.0, 6).resample(data, True)

    r = LinearResample(16000, 8000, 3800.0, 6)
    r.resample(_signal(700, seed=5), False)
    r.reset()
    again = r.resample(data, True)
    assert np.allclose(again, fresh, atol=1e-6)


def test_flush_resets_state_between_signals():
    data = _signal(800, seed=2)
    r = LinearResample(16000, 8000, 3800.0, 6)
    first = r.resample(data, True)
    second = r.resample(data, True)
    assert np.array_equal(first, second)


def test_output_is_float32():
    r = LinearResample(16000, 8000, 3800.0, 6)
    out = r.resample([0.5] * 100, True)
    assert out.dtype == np.float32