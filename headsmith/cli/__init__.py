#!/usr/bin/env python
# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import sys

from cleo.application import Application as BaseApplication
from cleo.io.io import IO

from headsmith import __version__
from headsmith.cli.command.init import InitCommand
from headsmith.cli.command.stamp import StampCommand
from headsmith.cli.command.validate import ValidateConfigCommand
from headsmith.log import configure_logger

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


class Application(BaseApplication):

    def __init__(self):
        super().__init__(name="headsmith", version=__version__)

        # add commands
        self.add(StampCommand())
        self.add(InitCommand())
        self.add(ValidateConfigCommand())

    def _configure_io(self, io: IO) -> None:
        super()._configure_io(io)

        if io.is_debug():
            log_level = "debug"
        elif io.is_very_verbose():
            log_level = "info"
        elif io.is_verbose():
            log_level = "warning"
        else:
            log_level = "error"
        configure_logger(log_level, LOG_FORMAT, sys.stderr)


def main() -> int:
    application = Application()
    return application.run()


if __name__ == '__main__':
    sys.exit(main())
