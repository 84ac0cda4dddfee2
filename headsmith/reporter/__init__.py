# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from enum import StrEnum


class Status(StrEnum):
    """What happened to the header of a file."""

    CURRENT = "current"
    REPLACED = "replaced"
    INSERTED = "inserted"
    SKIPPED = "skipped"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.name

    @property
    def is_licensed(self) -> bool:
        """Whether the file did not need any change (or is not covered at all)."""
        return self in (Status.CURRENT, Status.SKIPPED)


class Reporter:
    """Interface for creating a report of the processed files."""

    def add(self, path: str, status: Status, reasons: list[str] | None = None) -> None:
        """Add an entry to the report."""
        raise NotImplementedError()

    def close(self) -> None:
        """Closes the underlying resources."""
        raise NotImplementedError()

    def __enter__(self) -> Reporter:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
