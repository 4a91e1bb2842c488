"""Word-to-subword segmentation dictionary."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from os import PathLike

logger = logging.getLogger(__name__)


class SegDict:
    """Maps words to the token sequences they are segmented into."""

    def __init__(self, entries: Mapping[str, Iterable[str]] | None = None) -> None:
        self._entries: dict[str, list[str]] = {
            word: list(tokens) for word, tokens in (entries or {}).items()
        }

    @classmethod
    def from_file(cls, path: str | PathLike) -> "SegDict":
        """Load a dictionary of ``word<TAB>tok tok ...`` lines.

        Lines without a tab are ignored; a later entry for a word replaces
        an earlier one.
        """
        entries: dict[str, list[str]] = {}
        with open(path, encoding="utf-8") as handle:
            for line in handle:
                fields = line.rstrip("\r\n").split("\t")
                if len(fields) > 1:
                    word, segs = fields[0], fields[1]
                    entries[word] = [tok for tok in segs.split(" ") if tok]
        logger.info("load seg dict successfully")
        return cls(entries)

    def tokens(self, word: str) -> list[str]:
        """Return the tokens for ``word``, or an empty list if it is unknown."""
        try:
            return list(self._entries[word])
        except KeyError:
            logger.info("%s is OOV!", word)
            return []