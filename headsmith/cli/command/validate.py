# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from pathlib import Path

from cleo.helpers import argument

from headsmith.cli.command import HeadsmithCommand
from headsmith.comments.factory import CommentFactory
from headsmith.config import BASE_SCHEMA, HeadsmithConfigLoader, YamlFileConfigLoader
from headsmith.errors import ConfigError, HeadsmithError
from headsmith.model.license_config import LicenseConfig


class ValidateConfigCommand(HeadsmithCommand):

    name = "validate config"
    description = "Validate a configuration file. Non-zero return codes indicate an error."
    arguments = [
        argument("file", "Config file to validate"),
    ]

    def handle(self) -> int:
        path = Path(self.argument("file"))

        if not path.exists():
            raise FileNotFoundError(f"'{path}' doesn't exist")
        if not path.is_file():
            raise OSError(f"'{path}' is not a file")

        try:
            yaml_config_loader = YamlFileConfigLoader(BASE_SCHEMA, path)
            config = HeadsmithConfigLoader(BASE_SCHEMA, yaml_config_loader).load()
            # templates are checked but not downloaded
            for raw in config.licenses:
                LicenseConfig.from_dict(raw).check()
            CommentFactory.from_config(config.comments)
        except ConfigError as e:
            for r in e.reasons:
                self.line_plain(r)
            return 1
        except HeadsmithError as e:
            self.line_plain(str(e))
            return 1

        self.line_plain(f"'{path}' is valid")
        return 0
