# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import io
from pathlib import Path

from headsmith.reporter import Reporter, Status


class FileReporter(Reporter):
    """Reporter on processed files, that writes to a given file."""

    def __init__(self, path: Path) -> None:
        super().__init__()
        self._file: io.TextIOWrapper | None = None
        self._open(path)

    def add(self, path: str, status: Status, reasons: list[str] | None = None) -> None:
        match status:
            case Status.FAILED | Status.SKIPPED:
                line = f"{str(status):<8}: {path} : {', '.join(reasons if reasons else [])}\n"
            case Status.CURRENT | Status.REPLACED | Status.INSERTED:
                line = f"{str(status):<8}: {path}\n"
            case _:
                raise ValueError(f"unknown status: {status}")
        self._file.write(line)

    def close(self) -> None:
        if self._file:
            self._file.close()
            self._file = None

    def _open(self, path: Path):
        if path.exists() and not path.is_file():
            raise OSError(f"'{path}' is not a file")
        self._file = path.open("w")
