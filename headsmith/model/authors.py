# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class CopyrightHolder:
    """A person or organization holding the copyright of a file."""

    name: str
    email: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> CopyrightHolder:
        return cls(name=data["name"], email=data.get("email") or None)

    def __str__(self) -> str:
        if self.email:
            return f"{self.name} <{self.email}>"
        return self.name


class Authors:
    """Ordered list of copyright holders, as rendered into a header."""

    __slots__ = ["_holders"]

    def __init__(self, holders: Iterable[CopyrightHolder] | None = None) -> None:
        self._holders: tuple[CopyrightHolder, ...] = tuple(holders or ())

    @classmethod
    def from_list(cls, raw: Iterable[Mapping] | None) -> Authors:
        return cls(CopyrightHolder.from_dict(h) for h in raw or [])

    def __iter__(self) -> Iterator[CopyrightHolder]:
        return iter(self._holders)

    def __len__(self) -> int:
        return len(self._holders)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Authors):
            return NotImplemented
        return self._holders == other._holders

    def __hash__(self) -> int:
        return hash(self._holders)

    def __str__(self) -> str:
        return ", ".join(str(h) for h in self._holders)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._holders)!r})"
