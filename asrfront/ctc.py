"""Greedy CTC decoding and formatting of the multilingual model's output."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

import numpy as np

WORD_BOUNDARY = "\u2581"
WITH_ITN_TAG = "<|withitn|>"
CHINESE_TAG = "<|zh|>"

TokenLookup = Callable[[int], str] | Sequence[str]


def _lookup(id_to_token: TokenLookup) -> Callable[[int], str]:
    if callable(id_to_token):
        return id_to_token
    tokens = id_to_token

    def find(index: int) -> str:
        if 0 <= index < len(tokens):
            return tokens[index]
        return ""

    return find


def _as_matrix(scores: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    matrix = np.asarray(scores, dtype=np.float32)
    if matrix.ndim == 3:
        if matrix.shape[0] != 1:
            raise ValueError(f"expected a batch of one, got shape {matrix.shape}")
        matrix = matrix[0]
    if matrix.ndim == 1 and matrix.size == 0:
        matrix = matrix.reshape(0, 0)
    if matrix.ndim != 2:
        raise ValueError(f"scores must be two-dimensional, got shape {matrix.shape}")
    return matrix


def greedy_ids(scores: Sequence[Sequence[float]] | np.ndarray) -> list[int]:
    """Return the best-scoring token id of every frame; ties go to the lowest id."""
    matrix = _as_matrix(scores)
    if matrix.shape[0] == 0:
        return []
    if matrix.shape[1] == 0:
        raise ValueError("scores have no vocabulary dimension")
    return [int(index) for index in np.argmax(matrix, axis=1)]


def ctc_collapse(ids: Iterable[int], blank_id: int = 0) -> list[int]:
    """Merge repeated ids and drop blanks."""
    tokens: list[int] = []
    previous: int | None = None
    for token in ids:
        if token != blank_id and token != previous:
            tokens.append(token)
        previous = token
    return tokens


def _strip_boundary(word: str) -> str:
    # The boundary mark takes three bytes in UTF-8; those bytes are dropped.
    return word.encode("utf-8")[3:].decode("utf-8", errors="replace")


def format_sensevoice(token_ids: Sequence[int], id_to_token: TokenLookup) -> str:
    """Turn collapsed ids into ``<lang><emotion><event> text``.

    The first four tokens are the language, emotion, event and
    text-normalisation tags; the rest is the transcript. Words marked with a
    boundary symbol start with a space, and a final full stop is added when
    the output is normalised.
    """
    lookup = _lookup(id_to_token)
    lang = emotion = event = itn = ""
    if len(token_ids) >= 3:
        lang = lookup(token_ids[0])
        emotion = lookup(token_ids[1])
        event = lookup(token_ids[2])
        itn = lookup(token_ids[3]) if len(token_ids) > 3 else ""

    parts: list[str] = []
    for token in token_ids[4:]:
        word = lookup(token)
        if WORD_BOUNDARY in word:
            parts.append(" " + _strip_boundary(word))
        else:
            parts.append(word)
    text = "".join(parts)
    if itn == WITH_ITN_TAG:
        text += "\u3002" if lang == CHINESE_TAG else "."
    return f"{lang}{emotion}{event} {text}"


def ctc_search(
    scores: Sequence[Sequence[float]] | np.ndarray,
    length: int | None,
    id_to_token: TokenLookup,
    blank_id: int = 0,
) -> str:
    """Greedy-decode the first ``length`` frames of ``scores`` and format the result."""
    matrix = _as_matrix(scores)
    if length is None:
        length = matrix.shape[0]
    if length < 0 or length > matrix.shape[0]:
        raise ValueError(f"length {length} outside 0..{matrix.shape[0]}")
    ids = greedy_ids(matrix[:length])
    return format_sensevoice(ctc_collapse(ids, blank_id), id_to_token)