"""Front-end and model settings read from a model's YAML configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from os import PathLike
from typing import Any

import yaml

DEFAULT_SAMPLE_RATE = 16000
DEFAULT_LFR_M = 7
DEFAULT_LFR_N = 6


class ConfigError(ValueError):
    """Raised when a configuration file is missing, malformed or incomplete."""


def _load(path: str | PathLike) -> Mapping[str, Any]:
    try:
        with open(path, encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot load config file {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigError(f"config file {path} does not hold a mapping")
    return data


def _section(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = config.get(name)
    if not isinstance(section, Mapping):
        raise ConfigError(f"missing section '{name}'")
    return section


def _value(section: Mapping[str, Any], key: str) -> Any:
    if key not in section or section[key] is None:
        raise ConfigError(f"missing key '{key}'")
    return section[key]


def _as_int(section: Mapping[str, Any], key: str) -> int:
    value = _value(section, key)
    if isinstance(value, bool):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ConfigError(f"'{key}' must be an integer, got {value!r}")


def _as_float(section: Mapping[str, Any], key: str) -> float:
    value = _value(section, key)
    if isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise ConfigError(f"'{key}' must be a number, got {value!r}")


def _as_str(section: Mapping[str, Any], key: str) -> str:
    value = _value(section, key)
    if isinstance(value, (Mapping, list)):
        raise ConfigError(f"'{key}' must be a scalar, got {value!r}")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class FrontendConfig:
    """Feature extraction and model settings, with the built-in defaults."""

    window_type: str = "hamming"
    frame_length: int = 25
    frame_shift: int = 10
    n_mels: int = 80
    lfr_m: int = DEFAULT_LFR_M
    lfr_n: int = DEFAULT_LFR_N
    encoder_size: int = 512
    fsmn_layers: int = 16
    fsmn_lorder: int = 10
    fsmn_dims: int = 512
    cif_threshold: float = 1.0
    tail_alphas: float = 0.45
    asr_sample_rate: int = DEFAULT_SAMPLE_RATE
    language: str = "zh-cn"

    @property
    def feature_dim(self) -> int:
        """Width of one stacked low-frame-rate feature vector."""
        return self.lfr_m * self.n_mels

    @property
    def decoder_input_count(self) -> int:
        """Number of inputs the streaming decoder takes."""
        return 4 + self.fsmn_layers

    @property
    def decoder_output_count(self) -> int:
        """Number of outputs the streaming decoder gives."""
        return 2 + self.fsmn_layers

    @classmethod
    def from_yaml(cls, path: str | PathLike) -> "FrontendConfig":
        """Read an offline model config: the sample rate and optional language."""
        config = _load(path)
        frontend = _section(config, "frontend_conf")
        settings = cls(asr_sample_rate=_as_int(frontend, "fs"))
        if config.get("lang") is not None:
            settings.language = _as_str(config, "lang")
        return settings

    @classmethod
    def from_online_yaml(cls, path: str | PathLike) -> "FrontendConfig":
        """Read a streaming model config with frontend, encoder, decoder and predictor settings."""
        config = _load(path)
        frontend = _section(config, "frontend_conf")
        encoder = _section(config, "encoder_conf")
        decoder = _section(config, "decoder_conf")
        predictor = _section(config, "predictor_conf")
        output_size = _as_int(encoder, "output_size")
        return cls(
            window_type=_as_str(frontend, "window"),
            n_mels=_as_int(frontend, "n_mels"),
            frame_length=_as_int(frontend, "frame_length"),
            frame_shift=_as_int(frontend, "frame_shift"),
            lfr_m=_as_int(frontend, "lfr_m"),
            lfr_n=_as_int(frontend, "lfr_n"),
            encoder_size=output_size,
            fsmn_dims=output_size,
            fsmn_layers=_as_int(decoder, "num_blocks"),
            fsmn_lorder=_as_int(decoder, "kernel_size") - 1,
            cif_threshold=_as_float(predictor, "threshold"),
            tail_alphas=_as_float(predictor, "tail_threshold"),
            asr_sample_rate=_as_int(frontend, "fs"),
        )