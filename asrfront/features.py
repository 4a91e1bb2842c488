"""Low-frame-rate stacking and mean/variance normalisation of filterbank features."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from os import PathLike

import numpy as np

from asrfront.config import DEFAULT_LFR_M, DEFAULT_LFR_N

_SHIFT_TAG = "<AddShift>"
_RESCALE_TAG = "<Rescale>"
_COEF_TAG = "<LearnRateCoef>"

# Multiplier applied to every rescale value as it is read.
_RESCALE_SCALE = 1.0


@dataclass
class Cmvn:
    """Per-dimension shift and scale: ``out[j] = (x[j] + means[j]) * variances[j]``."""

    means: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))
    variances: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))

    def __post_init__(self) -> None:
        self.means = np.asarray(self.means, dtype=np.float32).ravel()
        self.variances = np.asarray(self.variances, dtype=np.float32).ravel()


def _coefficients(line: str) -> list[float] | None:
    tokens = line.split()
    if not tokens or tokens[0] != _COEF_TAG:
        return None
    # "<LearnRateCoef> 0 [ v1 v2 ... ]": the values sit between "[" and "]".
    return [float(token) for token in tokens[3:-1]]


def load_cmvn(path: str | PathLike) -> Cmvn:
    """Read shift and rescale vectors from a Kaldi nnet-style CMVN text file.

    The line following an ``<AddShift>`` or ``<Rescale>`` line is consumed; its
    values are taken when it starts with ``<LearnRateCoef>``. Several blocks of
    the same kind are concatenated in file order.
    """
    means: list[float] = []
    variances: list[float] = []
    with open(path, encoding="utf-8") as handle:
        lines = iter(handle)
        for line in lines:
            tokens = line.split()
            if not tokens or tokens[0] not in (_SHIFT_TAG, _RESCALE_TAG):
                continue
            values = _coefficients(next(lines, ""))
            if values is None:
                continue
            if tokens[0] == _SHIFT_TAG:
                means.extend(values)
            else:
                variances.extend(value * _RESCALE_SCALE for value in values)
    return Cmvn(np.array(means, dtype=np.float32), np.array(variances, dtype=np.float32))


def _as_frames(frames: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    feats = np.asarray(frames, dtype=np.float32)
    if feats.ndim == 1 and feats.size == 0:
        feats = feats.reshape(0, 0)
    if feats.ndim != 2:
        raise ValueError(f"frames must be two-dimensional, got shape {feats.shape}")
    return feats


def apply_lfr(
    frames: Sequence[Sequence[float]] | np.ndarray,
    lfr_m: int = DEFAULT_LFR_M,
    lfr_n: int = DEFAULT_LFR_N,
) -> np.ndarray:
    """Stack ``lfr_m`` consecutive frames into one, advancing ``lfr_n`` frames each step.

    The first frame is repeated ``(lfr_m - 1) // 2`` times in front, and the
    last window is filled up with copies of the last frame.
    """
    if lfr_m < 1 or lfr_n < 1:
        raise ValueError("lfr_m and lfr_n must be positive")
    feats = _as_frames(frames)
    num_frames, dim = feats.shape
    if num_frames == 0:
        return np.zeros((0, lfr_m * dim), dtype=np.float32)

    left_pad = (lfr_m - 1) // 2
    padded = np.concatenate([np.repeat(feats[:1], left_pad, axis=0), feats])
    num_out = -(-num_frames // lfr_n)
    starts = np.arange(num_out)[:, None] * lfr_n
    indices = np.minimum(starts + np.arange(lfr_m)[None, :], len(padded) - 1)
    return padded[indices].reshape(num_out, lfr_m * dim)


def apply_cmvn(frames: Sequence[Sequence[float]] | np.ndarray, cmvn: Cmvn) -> np.ndarray:
    """Shift and scale the leading ``len(cmvn.means)`` columns; return a new array."""
    feats = _as_frames(frames).copy()
    count = cmvn.means.size
    if cmvn.variances.size < count:
        raise ValueError(
            f"cmvn has {count} means but only {cmvn.variances.size} variances"
        )
    if count > feats.shape[1] and feats.shape[0] > 0:
        raise ValueError(
            f"cmvn covers {count} dimensions but frames have {feats.shape[1]}"
        )
    if feats.shape[0]:
        feats[:, :count] = (feats[:, :count] + cmvn.means) * cmvn.variances[:count]
    return feats


def lfr_cmvn(
    frames: Sequence[Sequence[float]] | np.ndarray,
    cmvn: Cmvn,
    lfr_m: int = DEFAULT_LFR_M,
    lfr_n: int = DEFAULT_LFR_N,
) -> np.ndarray:
    """Stack frames to the low frame rate, then normalise them."""
    stacked = apply_lfr(frames, lfr_m, lfr_n)
    if stacked.shape[0] == 0:
        return stacked
    return apply_cmvn(stacked, cmvn)