"""Band-limited linear resampling of audio signals, usable in streaming mode."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


class LinearResample:
    """Resample a signal between two integer sample rates with a windowed sinc filter.

    The signal may be fed in pieces: call :meth:`resample` with ``flush=False``
    for every piece but the last, and ``flush=True`` for the last one. The
    pieces of output then join up to what a single call over the whole signal
    would give.
    """

    def __init__(
        self,
        samp_rate_in_hz: int,
        samp_rate_out_hz: int,
        filter_cutoff_hz: float,
        num_zeros: int,
    ) -> None:
        if not (
            samp_rate_in_hz > 0
            and samp_rate_out_hz > 0
            and filter_cutoff_hz > 0
            and filter_cutoff_hz * 2 <= samp_rate_in_hz
            and filter_cutoff_hz * 2 <= samp_rate_out_hz
            and num_zeros > 0
        ):
            raise ValueError(
                "invalid resampler settings: rates and num_zeros must be positive "
                "and the cutoff must be positive and at most half of both rates"
            )
        self._samp_rate_in = int(samp_rate_in_hz)
        self._samp_rate_out = int(samp_rate_out_hz)
        self._filter_cutoff = float(filter_cutoff_hz)
        self._num_zeros = int(num_zeros)

        base_freq = math.gcd(self._samp_rate_in, self._samp_rate_out)
        self._input_samples_in_unit = self._samp_rate_in // base_freq
        self._output_samples_in_unit = self._samp_rate_out // base_freq

        self._first_index: list[int] = []
        self._weights: list[np.ndarray] = []
        self._set_indexes_and_weights()

        self._input_sample_offset = 0
        self._output_sample_offset = 0
        self._input_remainder = np.zeros(0, dtype=np.float64)

    @property
    def input_sampling_rate(self) -> int:
        """The input sample rate in Hz."""
        return self._samp_rate_in

    @property
    def output_sampling_rate(self) -> int:
        """The output sample rate in Hz."""
        return self._samp_rate_out

    @property
    def _window_width(self) -> float:
        return self._num_zeros / (2.0 * self._filter_cutoff)

    def _filter(self, t: np.ndarray) -> np.ndarray:
        """Hann-windowed sinc filter evaluated at offsets ``t`` (seconds)."""
        t = np.asarray(t, dtype=np.float64)
        window = np.where(
            np.abs(t) < self._window_width,
            0.5 * (1.0 + np.cos(2.0 * math.pi * self._filter_cutoff / self._num_zeros * t)),
            0.0,
        )
        nonzero = t != 0
        safe_t = np.where(nonzero, t, 1.0)
        sinc = np.where(
            nonzero,
            np.sin(2.0 * math.pi * self._filter_cutoff * safe_t) / (math.pi * safe_t),
            2.0 * self._filter_cutoff,
        )
        return sinc * window

    def _set_indexes_and_weights(self) -> None:
        window_width = self._window_width
        for i in range(self._output_samples_in_unit):
            output_t = i / self._samp_rate_out
            min_input_index = math.ceil((output_t - window_width) * self._samp_rate_in)
            max_input_index = math.floor((output_t + window_width) * self._samp_rate_in)
            indices = np.arange(min_input_index, max_input_index + 1, dtype=np.float64)
            delta_t = indices / self._samp_rate_in - output_t
            self._first_index.append(min_input_index)
            self._weights.append(self._filter(delta_t) / self._samp_rate_in)

    def reset(self) -> None:
        """Forget any partially processed signal."""
        self._input_sample_offset = 0
        self._output_sample_offset = 0
        self._input_remainder = np.zeros(0, dtype=np.float64)

    def num_output_samples(self, input_num_samp: int, flush: bool) -> int:
        """Number of output samples available for ``input_num_samp`` input samples.

        Without ``flush`` the last window-width of input is held back, since
        later input still affects those outputs.
        """
        tick_freq = math.lcm(self._samp_rate_in, self._samp_rate_out)
        ticks_per_input_period = tick_freq // self._samp_rate_in
        interval_length_in_ticks = input_num_samp * ticks_per_input_period
        if not flush:
            interval_length_in_ticks -= math.floor(self._window_width * tick_freq)
        if interval_length_in_ticks <= 0:
            return 0
        ticks_per_output_period = tick_freq // self._samp_rate_out
        last_output_samp = interval_length_in_ticks // ticks_per_output_period
        if last_output_samp * ticks_per_output_period == interval_length_in_ticks:
            last_output_samp -= 1
        return last_output_samp + 1

    def _indexes(self, samp_out: int) -> tuple[int, int]:
        unit_index, wrapped = divmod(samp_out, self._output_samples_in_unit)
        first_samp_in = self._first_index[wrapped] + unit_index * self._input_samples_in_unit
        return first_samp_in, wrapped

    def resample(self, samples: Sequence[float] | np.ndarray, flush: bool) -> np.ndarray:
        """Resample the next piece of the signal and return the new output samples."""
        data = np.asarray(samples, dtype=np.float64).ravel()
        input_dim = data.size
        tot_input_samp = self._input_sample_offset + input_dim
        tot_output_samp = self.num_output_samples(tot_input_samp, flush)
        if tot_output_samp < self._output_sample_offset:
            raise RuntimeError("resampler state is inconsistent")

        output = np.zeros(tot_output_samp - self._output_sample_offset, dtype=np.float64)
        remainder = self._input_remainder
        for out_pos, samp_out in enumerate(range(self._output_sample_offset, tot_output_samp)):
            first_samp_in, wrapped = self._indexes(samp_out)
            weights = self._weights[wrapped]
            first = first_samp_in - self._input_sample_offset
            if first >= 0 and first + weights.size <= input_dim:
                output[out_pos] = float(np.dot(data[first:first + weights.size], weights))
                continue
            total = 0.0
            for offset, weight in enumerate(weights):
                index = first + offset
                if index < 0:
                    if remainder.size + index >= 0:
                        total += weight * remainder[remainder.size + index]
                elif index < input_dim:
                    total += weight * data[index]
                elif not flush:
                    raise RuntimeError("needed input beyond the end without flushing")
            output[out_pos] = total

        if flush:
            self.reset()
        else:
            self._set_remainder(data)
            self._input_sample_offset = tot_input_samp
            self._output_sample_offset = tot_output_samp
        return output.astype(np.float32)

    def _set_remainder(self, data: np.ndarray) -> None:
        needed = math.ceil(self._samp_rate_in * self._num_zeros / self._filter_cutoff)
        tail = np.concatenate([self._input_remainder, data])[-needed:] if needed else data[:0]
        remainder = np.zeros(needed, dtype=np.float64)
        if tail.size:
            remainder[needed - tail.size:] = tail
        self._input_remainder = remainder