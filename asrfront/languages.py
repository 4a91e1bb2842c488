"""Prompt ids for language and text-normalisation choices of the multilingual model."""

from __future__ import annotations

from types import MappingProxyType

LANGUAGE_IDS = MappingProxyType(
    {
        "auto": 0,
        "zh": 3,
        "en": 4,
        "yue": 7,
        "ja": 11,
        "ko": 12,
        "nospeech": 13,
    }
)

WITH_ITN_ID = 14
WITHOUT_ITN_ID = 15


def language_id(language: str) -> int:
    """Return the prompt id for ``language``; unknown names fall back to automatic detection."""
    return LANGUAGE_IDS.get(language, LANGUAGE_IDS["auto"])


def textnorm_id(use_itn: bool) -> int:
    """Return the prompt id asking for output with or without inverse text normalisation."""
    return WITH_ITN_ID if use_itn else WITHOUT_ITN_ID