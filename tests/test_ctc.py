import numpy as np
import pytest

from asrfront.ctc import ctc_collapse, ctc_search, format_sensevoice, greedy_ids

VOCAB = [
    "<blank>",
    "<|zh|>",
    "<|en|>",
    "<|NEUTRAL|>",
    "<|Speech|>",
    "<|withitn|>",
    "<|woitn|>",
    "你",
    "好",
    "\u2581hello",
    "\u2581world",
]


def one_hot(ids, size=len(VOCAB)):
    matrix = np.zeros((len(ids), size), dtype=np.float32)
    for row, index in enumerate(ids):
        matrix[row, index] = 1.0
    return matrix


def test_greedy_ids_picks_argmax():
    scores = [[0.1, 0.7, 0.2], [0.9, 0.05, 0.05], [0.2, 0.3, 0.5]]
    assert greedy_ids(scores) == [1, 0, 2]


def test_greedy_ids_tie_goes_to_first():
    assert greedy_ids([[0.5, 0.5, 0.1]]) == [0]


def test_greedy_ids_empty():
    assert greedy_ids(np.zeros((0, 4))) == []


def test_collapse_merges_repeats_and_drops_blanks():
    assert ctc_collapse([0, 1, 1, 0, 1, 2, 2], blank_id=0) == [1, 1, 2]


def test_collapse_custom_blank():
    assert ctc_collapse([3, 3, 5, 3, 5], blank_id=3) == [5, 5]


def test_collapse_never_has_adjacent_equal_or_blank():
    ids = [0, 4, 4, 4, 0, 0, 2, 2, 7, 0, 7]
    result = ctc_collapse(ids)
    assert 0 not in result
    assert all(a != b for a, b in zip(result, result[1:])) or result == [4, 2, 7, 7][: len(result)]
    assert result == [4, 2, 7, 7]


def test_format_chinese_with_itn():
    out = format_sensevoice([1, 3, 4, 5, 7, 8], VOCAB)
    assert out == "<|zh|><|NEUTRAL|><|Speech|> 你好\u3002"


def test_format_english_with_itn_and_boundaries():
    out = format_sensevoice([2, 3, 4, 5, 9, 10], VOCAB)
    assert out == "<|en|><|NEUTRAL|><|Speech|>  hello world."


def test_format_without_itn_has_no_stop():
    out = format_sensevoice([1, 3, 4, 6, 7, 8], VOCAB)
    assert out == "<|zh|><|NEUTRAL|><|Speech|> 你好"


def test_format_short_sequence_has_no_tags():
    assert format_sensevoice([7, 8], VOCAB) == " "


def test_format_accepts_callable_lookup():
    out = format_sensevoice([1, 3, 4, 6, 8], lambda i: VOCAB[i])
    assert out == "<|zh|><|NEUTRAL|><|Speech|> 好"


def test_format_out_of_range_id_is_empty():
    out = format_sensevoice([1, 3, 4, 6, 99], VOCAB)
    assert out == "<|zh|><|NEUTRAL|><|Speech|> "


def test_ctc_search_end_to_end():
    frames = [0, 1, 1, 0, 3, 4, 4, 5, 0, 7, 7, 0, 8]
    out = ctc_search(one_hot(frames), len(frames), VOCAB)
    assert out == format_sensevoice([1, 3, 4, 5, 7, 8], VOCAB)


def test_ctc_search_respects_length():
    frames = [1, 3, 4, 6, 7, 8]
    full = ctc_search(one_hot(frames), None, VOCAB)
    cut = ctc_search(one_hot(frames), 5, VOCAB)
    assert full.endswith("你好")
    assert cut.endswith("你")


def test_ctc_search_accepts_batch_of_one():
    frames = [1, 3, 4, 6, 7]
    batched = one_hot(frames)[None, ...]
    assert ctc_search(batched, 5, VOCAB) == ctc_search(one_hot(frames), 5, VOCAB)


def test_ctc_search_length_too_long():
    with pytest.raises(ValueError):
        ctc_search(one_hot([1, 2]), 3, VOCAB)


def test_scores_wrong_shape():
    with pytest.raises(ValueError):
        greedy_ids(np.zeros((2, 2, 2, 2)))