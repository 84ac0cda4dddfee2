# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from pathlib import Path

from cleo.helpers import option

from headsmith.cli.command import HeadsmithCommand
from headsmith.config import CONFIG_FILE_NAMES, DEFAULT_CONFIG


class InitCommand(HeadsmithCommand):

    name = "init"
    description = "Generate a default configuration file in the working directory."
    options = [
        option("force", "f", "Overwrite an existing configuration file"),
    ]

    def handle(self) -> int:
        path = Path(CONFIG_FILE_NAMES[0])
        if path.exists() and not self.option("force"):
            self.line_error_plain(f"'{path}' already exists, use --force to overwrite it", style="error")
            return 1
        try:
            path.write_text(DEFAULT_CONFIG)
        except OSError as err:
            self.line_error_plain(f"Unable to create '{path}': {err}", style="error")
            return 1
        self.line_plain(f"Created '{path}'")
        return 0
