# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path

from cleo.commands.command import Command
from cleo.formatters.formatter import Formatter
from cleo.helpers import option
from cleo.io.inputs.option import Option

from headsmith.config import (BASE_SCHEMA, CliConfigLoader, Config, HeadsmithConfigLoader, YamlFileConfigLoader,
                              effective_config_info, find_config_file, iterate_schema)
from headsmith.errors import ConfigError
from headsmith.log import get_child_logger

log = get_child_logger("cli")


def _normalize_option_name(name: str) -> str:
    pattern = re.compile(r"[^a-z0-9]")
    return re.sub(pattern, "-", name)


def options_from_schema(schema: Mapping) -> list[Option]:
    """Create CLI options for all schema rules with a `long_name`."""
    options = []
    for _, rule in iterate_schema(schema):
        meta = rule.get("meta", {})
        short_name = meta.get("short_name")
        long_name = meta.get("long_name")
        if not (short_name or long_name):
            continue
        options.append(
            option(
                _normalize_option_name(long_name),
                short_name,
                meta.get("description", ""),
                flag=rule.get("type") == "boolean",
            ))
    return options


class HeadsmithCommand(Command):

    def line_plain(self, text: str) -> None:
        """Write user content, which must not be read as formatting tags."""
        self.line(Formatter.escape(text))

    def line_error_plain(self, text: str, style: str | None = None) -> None:
        self.line_error(Formatter.escape(text), style=style)

    def _load_config(self, config_path: str | Path | None = None) -> Config:
        """Load the configuration of the config file, overridden by the CLI options.

        Raises:
            ConfigMissingError: If no config file is given and none could be found.
            ConfigError: If the configuration is invalid.
        """
        path = Path(config_path) if config_path else find_config_file()
        log.info("using configuration file '%s'", path)
        cli_options = self._get_options_from_schema(BASE_SCHEMA)

        # normalize and validate config
        cli_config_loader = CliConfigLoader(BASE_SCHEMA, cli_options)
        yaml_config_loader = YamlFileConfigLoader(BASE_SCHEMA, path)
        # the order specifies the priority of the options (CLI before file)
        config = HeadsmithConfigLoader(BASE_SCHEMA, cli_config_loader, yaml_config_loader).load()

        for info in effective_config_info(config):
            log.debug("config: %s", info)
        return config

    def _get_options_from_schema(self, schema: Mapping) -> Config:
        config = Config()
        for key, rule in iterate_schema(schema):
            long_name = rule.get("meta", {}).get("long_name")
            if not long_name:
                continue
            value = self.option(_normalize_option_name(long_name))
            # an unset flag must not override the config file
            if rule.get("type") == "boolean" and not value:
                value = None
            config[key] = value
        return config

    def _print_reasons(self, err: ConfigError) -> None:
        self.line_error_plain(str(err), style="error")
        for reason in err.reasons:
            self.line_error_plain(f"    {reason}")
