# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from headsmith.reporter import Reporter, Status


class DummyReporter(Reporter):
    """Reporter that does nothing"""

    def add(self, path: str, status: Status, reasons: list[str] | None = None) -> None:
        pass

    def close(self) -> None:
        pass
