"""Token inventory mapping phone units to integer ids."""

from __future__ import annotations

import json
from collections.abc import Iterable
from os import PathLike

BEG_SIL_SYMBOL = "<s>"
END_SIL_SYMBOL = "</s>"
BLANK_SYMBOL = "<blank>"

UNKNOWN_ID = -1


class PhoneSet:
    """An ordered list of phone units with reverse lookup."""

    def __init__(self, phones: Iterable[str]) -> None:
        self._phones: list[str] = []
        self._ids: dict[str, int] = {}
        for index, phone in enumerate(phones):
            if not isinstance(phone, str):
                raise TypeError(f"phone at index {index} is not a string: {phone!r}")
            self._phones.append(phone)
            self._ids.setdefault(phone, index)

    @classmethod
    def from_json(cls, path: str | PathLike) -> "PhoneSet":
        """Load a phone set from a JSON array of strings."""
        with open(path, encoding="utf-8") as handle:
            data = json.load(handle)
        if not isinstance(data, list):
            raise TypeError("token file must hold a JSON array")
        return cls(data)

    def __len__(self) -> int:
        return len(self._phones)

    def __contains__(self, phone: object) -> bool:
        return phone in self._ids

    def string_to_id(self, phone: str) -> int:
        """Return the id of ``phone``, or -1 if it is not in the set."""
        return self._ids.get(phone, UNKNOWN_ID)

    def id_to_string(self, index: int) -> str:
        """Return the phone with id ``index``, or an empty string if out of range."""
        if 0 <= index < len(self._phones):
            return self._phones[index]
        return ""

    @property
    def beg_sil_id(self) -> int:
        """Id of the sentence-start symbol, or -1."""
        return self.string_to_id(BEG_SIL_SYMBOL)

    @property
    def end_sil_id(self) -> int:
        """Id of the sentence-end symbol, or -1."""
        return self.string_to_id(END_SIL_SYMBOL)

    @property
    def blank_id(self) -> int:
        """Id of the blank symbol, or -1."""
        return self.string_to_id(BLANK_SYMBOL)