# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations


class HeadsmithError(Exception):
    pass


class ConfigError(HeadsmithError):

    def __init__(self, msg: str, reasons: list[str]) -> None:
        super().__init__(msg)
        self.reasons = reasons


class ConfigMissingError(ConfigError):
    pass


class FileError(HeadsmithError):

    def __init__(self, path: str, msg: str) -> None:
        super().__init__(msg)
        self.path = path


class FileUnreadableError(FileError):
    pass


class FileUnwritableError(FileError):
    pass


class PatternError(HeadsmithError):
    pass


class TemplateError(HeadsmithError):
    pass


class FetcherError(HeadsmithError):
    pass


class NotOverriddenError(HeadsmithError, NotImplementedError):
    pass
