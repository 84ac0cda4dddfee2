# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""This module takes care of loading, normalizing and validating configurations
from different sources and merging them together.

It offer following features:
    - Loading from a YAML config file and the CLI
    - A single (cerberus) schema that is used to normalize/validate various
      configuration sources
    - Normalization/Validation for each source, so users can easily pin-point
      config errors
"""

from __future__ import annotations

import re
from collections.abc import Generator, Mapping, MutableMapping
from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml
from cerberus import Validator
from cerberus.errors import REQUIRED_FIELD, BasicErrorHandler, ValidationError
from str_to_bool import str_to_bool

from .errors import ConfigError, ConfigMissingError, NotOverriddenError

CONFIG_FILE_NAMES = [".headsmith.yml", ".headsmith.yaml"]
USER_CONFIG_FILE = Path("~/.config/headsmith/config.yml")

# represents a missing option
missing = type("MissingType", (), {"__repr__": lambda x: "missing"})()

AUTHOR_SCHEMA = {
    "name": {
        "type": "string",
        "coerce": "strip_str",
        "required": True,
        "empty": False,
    },
    "email": {
        "type": "string",
        "coerce": "strip_str",
        "nullable": True,
        "default": None,
    },
}

LICENSE_SCHEMA = {
    "files": {
        "type": ["string", "list"],
        "default": "any",
        "check_with": "file_matcher",
    },
    "ident": {
        "type": "string",
        "coerce": "strip_str",
        "required": True,
        "empty": False,
    },
    "authors": {
        "type": "list",
        "default": [],
        "schema": {
            "type": "dict",
            "schema": AUTHOR_SCHEMA,
        },
    },
    "template": {
        "type": "string",
        "nullable": True,
        "default": None,
    },
    "auto_template": {
        "type": "boolean",
        "default": False,
    },
    "unwrap_text": {
        "type": "boolean",
        "default": False,
    },
    "year": {
        "type": "string",
        "coerce": "year",
        "nullable": True,
        "default": None,
    },
    "replaces": {
        "type": "list",
        "default": [],
        "schema": {
            "type": "string",
            "check_with": "regex",
        },
    },
}

COMMENTER_SCHEMA = {
    "type": {
        "type": "string",
        "coerce": "strip_str",
        "default": "line",
        "allowed": ["line", "block"],
    },
    "comment_char": {
        "type": "string",
        "nullable": True,
        "default": None,
    },
    "start_block_char": {
        "type": "string",
        "nullable": True,
        "default": None,
    },
    "end_block_char": {
        "type": "string",
        "nullable": True,
        "default": None,
    },
    "per_line_char": {
        "type": "string",
        "nullable": True,
        "default": None,
    },
    "trailing_lines": {
        "type": "integer",
        "min": 0,
        "default": 0,
    },
}

COMMENT_SCHEMA = {
    "extension": {
        "rename": "extensions",
    },
    "extensions": {
        "type": ["string", "list"],
        "default": "any",
    },
    "files": {
        "type": "string",
        "nullable": True,
        "default": None,
        "check_with": "regex",
    },
    "columns": {
        "type": "integer",
        "nullable": True,
        "min": 1,
        "default": None,
    },
    "commenter": {
        "type": "dict",
        "required": True,
        "schema": COMMENTER_SCHEMA,
    },
}

# schema for normalization/validation
# see: https://docs.python-cerberus.org/en/stable/index.html
BASE_SCHEMA = {
    "change_in_place": {
        "type": "boolean",
        "default": False,
        "meta": {
            # used in CLI
            "long_name": "in-place",
            "short_name": "i",
            "description": "Write the changes to the files instead of reporting them"
        },
    },
    "max_workers": {
        "type": "integer",
        "nullable": True,
        "min": 1,
        "default": None,
        "meta": {
            "long_name": "max-workers",
            "description": "Number of files processed in parallel"
        },
    },
    "excludes": {
        "type": "list",
        "default": [],
        "schema": {
            "type": "string",
            "check_with": "regex",
        },
    },
    "licenses": {
        "type": "list",
        "default": missing,
        "empty": False,
        "schema": {
            "type": "dict",
            "schema": LICENSE_SCHEMA,
        },
    },
    "comments": {
        "type": "list",
        "default": [],
        "schema": {
            "type": "dict",
            "schema": COMMENT_SCHEMA,
        },
    },
}

DEFAULT_CONFIG = """\
# headsmith configuration
#
# Paths matching any of these regexes never get a header.
excludes:
  - \\.gitignore
  - .*lock
  - \\.git/.*
  - \\.headsmith\\.ya?ml
  - README.*
  - LICENSE.*
  - .*\\.(md|rst|txt)

# Licenses of the project. The first entry whose `files` matches a path
# is applied to it. `files` is either "any" or a regex.
licenses:
  - files: any
    # SPDX identifier, see https://spdx.org/licenses/
    ident: MIT
    authors:
      - name: Your Name Here
        email: you@yourdomain.com
    # Placeholders:
    #   [year]            the current year (or `year`, if set)
    #   [name of author]  the authors, as "Name <email>", comma separated
    #   [ident]           the license identifier
    template: |
      Copyright [year] [name of author]. All rights reserved. Use of
      this source code is governed by the [ident] license that can be
      found in the LICENSE file.
    # Download the header template for `ident` from spdx.org instead
    # of using `template`.
    auto_template: false
    # Join the pre-wrapped lines of the template, keeping empty lines.
    unwrap_text: true
    # Regexes of other headers to be replaced by this one.
    replaces: []

# Comment styles by file extension. Entries are checked in order, before
# the built-in styles; entries for "any" extension only apply to files
# no other entry or built-in style covers.
comments:
  - extensions:
      - js
      - rs
      - go
    columns: 80
    commenter:
      type: line
      comment_char: "//"
      trailing_lines: 1
  - extensions:
      - css
      - c
      - cpp
    columns: 80
    commenter:
      type: block
      start_block_char: "/*"
      per_line_char: " *"
      end_block_char: " */"
      trailing_lines: 1
  - extension: html
    columns: 80
    commenter:
      type: block
      start_block_char: "<!--"
      end_block_char: "-->"
      trailing_lines: 1
  - extensions: any
    columns: 80
    commenter:
      type: line
      comment_char: "#"
      trailing_lines: 1
"""


def _flatten_list(*list_: str | list) -> list:
    """Flatten a nested list.

    Args:
        element (str | list): A nested list to be flattened (or a single item).

    Returns:
        list: A recursively flattened list.
    """
    if not list_:
        return []
    flattened = []
    for item in list_:
        if isinstance(item, list):
            flattened.extend(_flatten_list(*item))
        else:
            flattened.append(item)
    return flattened


def _flat_name(*args: str | list, separator="_") -> str:
    components = [item for item in _flatten_list(*args) if len(item) > 0]
    return separator.join(components)


def iterate_schema(schema: Mapping,
                   _key_path: list[str] | None = None,
                   _long_name_list: list[str] | None = None) -> Generator[tuple[list[str], Mapping]]:
    """Iterate over a schema.

    Args:
        schema (Mapping): Schema to be iterated over.
        _key_path (list, optional): Path of the current key (used in recursive call).

    Yields:
        Tuple: Tuple of key path and the associate rule.
    """
    key_path = _key_path or []
    long_name_list = _long_name_list or []
    for key, rules in schema.items():
        long_name = rules.get("meta", {}).get("long_name")
        if rules["type"] == "dict" and "schema" in rules:
            # iterate sub schema
            yield from iterate_schema(rules["schema"], key_path + [key], long_name_list + [long_name])
        else:
            rules = deepcopy(rules)
            if long_name:
                long_name = "-".join([n for n in long_name_list + [long_name] if n])
                rules["meta"]["long_name"] = long_name
            yield (key_path + [key], rules)


def validate(config: Mapping, schema: Mapping, middle_stage=False) -> tuple[Mapping | None, list[str]]:
    """Normalize and validate a config against a given schema.

    Args:
        config (Mapping): Config to normalize and validate.
        schema (Mapping): Schema used for validation.
        middle_stage (bool): If True, default values and 'required' checks are ignored.

    Returns:
        tuple(Mapping | None, list[str]): Tuple of normalized/validated config and
            reasons why the validation failed.
    """
    validator = ConfigValidator(schema, ignore_defaults=middle_stage)
    reasons = []
    if not validator.validate(config, update=middle_stage):
        errors = validator.errors
        for error in errors:
            path = ".".join(str(p) for p in error["path"])
            # missing option error
            if error["code"] == 0x02:
                reasons.append(f"missing option '{path}'.")
            else:
                reasons.append(f"invalid option '{path}': {error['msg']}")

    if reasons:
        return None, reasons
    return validator.document, reasons


def effective_config_info(config: Config) -> Generator[str]:
    for key_path, _ in iterate_schema(BASE_SCHEMA):
        name = _flat_name(key_path, separator=".")
        yield f"{name}={config.get([key_path], missing)}"


def find_config_file(start: Path | None = None) -> Path:
    """Look up the config file of the project.

    The directory `start` (default: the working directory) and its parents are
    searched first, then the user wide config file.

    Raises:
        ConfigMissingError: If no config file could be found.
    """
    start = (start or Path.cwd()).resolve()
    for directory in [start, *start.parents]:
        for name in CONFIG_FILE_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    user_config = USER_CONFIG_FILE.expanduser()
    if user_config.is_file():
        return user_config
    raise ConfigMissingError("No config file found, generate one with 'headsmith init'",
                             reasons=[f"none of {', '.join(CONFIG_FILE_NAMES)} found in '{start}' or its parents"])


class Config(MutableMapping):
    """Config data model.

    The model has certain superpowers when it comes to data access. For example
    the following access methods are equivalent:
        - config["foo"]["bar"]["baz"]
        - config[["foo", "bar", "baz"]]
        - config.foo.bar.baz

    Values can be set in the initialization or using the setter:
        - config["foo"] = {"bar": {"baz": "abc"}}
        - config.foo = {"bar": {"baz": "abc"}}
        - config[["foo", "bar", "baz"]] = "abc"

    Args:
        mapping (Mapping): Initial value of the config.
    """

    def __init__(self, mapping: Mapping | None = None) -> None:
        super().__setattr__("_mapping", {})
        self.update(mapping or {})

    def __getitem__(self, key):
        if isinstance(key, list):
            parent = key[:-1]
            key = key[-1]
            branch = self
            for p in parent:
                if not (p in branch and isinstance(branch[p], Mapping)):
                    raise KeyError(p)
                branch = branch[p]
            return branch[key]
        return self._mapping[key]

    def __getattr__(self, key):
        try:
            return self[key]
        except KeyError:
            raise AttributeError(key)  # pylint: disable=raise-missing-from

    def __setitem__(self, key, value):
        # get mapping
        if isinstance(key, list):
            parent = key[:-1]
            key = key[-1]
            branch = self
            for p in parent:
                # overwrite value of key, if it is either not in the branch or it is not a mapping
                if not (p in branch and isinstance(branch[p], Mapping)):
                    branch[p] = Config()
                branch = branch[p]
            mapping = branch
        else:
            mapping = self._mapping

        # set value to mapping
        if isinstance(value, dict):
            mapping[key] = Config(value)
        else:
            mapping[key] = value

    def __setattr__(self, key, value):
        self[key] = value

    def __delitem__(self, key):
        del self._mapping[key]

    def __copy__(self):
        new = type(self)(self._mapping)
        return new

    def __iter__(self):
        return iter(self._mapping)

    def __len__(self):
        return len(self._mapping)

    def __repr__(self):
        return f"{type(self).__name__}({repr(self._mapping)})"

    def add_exclude(self, pattern: str) -> None:
        try:
            re.compile(pattern)
        except re.error as err:
            raise ConfigError(f"Invalid exclude pattern '{pattern}': {err}", reasons=[str(err)]) from err
        self["excludes"] = list(self.get("excludes", [])) + [pattern]


class ConfigValidator(Validator):

    class FlatErrorHandler(BasicErrorHandler):

        def __call__(self, errors: list[ValidationError]) -> list[dict[str, str | int | list[str]]]:
            return self._format_errors(errors)

        def _format_errors(self, errors: list[ValidationError]) -> list[dict[str, str | int | list[str]]]:
            formatted_errors = []
            for error in errors:
                if error.is_logic_error:
                    for definition_errors in error.definitions_errors.values():
                        formatted_errors.extend(self._format_errors(definition_errors))
                elif error.is_group_error:
                    formatted_errors.extend(self._format_errors(error.child_errors))
                elif error.code in self.messages:
                    formatted_errors.append(self._format_error(error))
            return formatted_errors

        def _format_error(self, error: ValidationError) -> dict[str, str | int | list[str]]:
            formatted_error = {
                "path": list(error.document_path),
                "code": error.code,
                "msg": self._format_message(error.field, error),
            }
            return formatted_error

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.ignore_defaults = kwargs.get("ignore_defaults", False)
        self.purge_unknown = kwargs.get("purge_unknown", True)
        self.auto_coerce = kwargs.get("auto_coerce", True)
        self.error_handler = self.FlatErrorHandler()

    @staticmethod
    def _normalize_purge_unknown(mapping, schema):
        """{'type': 'boolean'}"""
        for field, value in list(mapping.items()):
            if field not in schema or value is None:
                mapping.pop(field)
        return mapping

    def _normalize_coerce(self, mapping, schema):
        """\
        {'oneof': [
            {'type': 'callable'},
            {'type': 'list',
             'schema': {'oneof': [{'type': 'callable'},
                                  {'type': 'string'}]}},
            {'type': 'string'}
        ]}
        """
        if self.auto_coerce:
            for field, value in mapping.items():
                if field in schema \
                    and "coerce" not in schema[field] \
                    and "type" in schema[field] \
                    and schema[field]["type"] != "string":
                    if not isinstance(value, str):
                        continue
                    type_ = schema[field]["type"]

                    if type_ == "boolean":
                        schema[field]["coerce"] = "boolean"
                    elif type_ == "integer":
                        schema[field]["coerce"] = "integer"
                    elif type_ == "list":
                        schema[field]["coerce"] = "semicolon_list"

        super()._normalize_coerce(mapping, schema)

    def _normalize_default(self, mapping: Mapping, schema: Mapping, field: str) -> None:
        """ {'nullable': True} """
        if self.ignore_defaults:
            return
        if schema[field]['default'] is missing:
            self._error(field, REQUIRED_FIELD)
        else:
            mapping[field] = deepcopy(schema[field]['default'])

    def _normalize_coerce_strip_str(self, value: Any) -> str:
        """Strip whitespaces of a string."""
        if isinstance(value, str):
            return value.strip()
        # leave other types untouched, so type validation will detect wrong types
        return value

    def _normalize_coerce_boolean(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        return bool(str_to_bool(value))

    def _normalize_coerce_integer(self, value: Any) -> int:
        if isinstance(value, int):
            return value
        return int(value)

    def _normalize_coerce_year(self, value: Any) -> str | None:
        """YAML reads `year: 2020` as integer."""
        if isinstance(value, int) and not isinstance(value, bool):
            return f"{value:04d}"
        if isinstance(value, str):
            return value.strip()
        return value

    def _normalize_coerce_semicolon_list(self, value: list[str] | set[str] | str) -> list:
        """Coerce a semicolon (';') delimited string into a proper list."""
        if isinstance(value, set):
            return list(value)
        if isinstance(value, list):
            return value
        return list(map(lambda vi: vi.strip(), value.split(';')))

    def _check_with_regex(self, field, value):
        """Check if a string is a valid regular expression."""
        if not isinstance(value, str):
            return
        try:
            re.compile(value)
        except re.error as err:
            self._error(field, f"Invalid regular expression '{value}': {err}")

    def _check_with_file_matcher(self, field, value):
        """Check the `files` option, either "any" or a regex (or a list of these)."""
        for item in value if isinstance(value, list) else [value]:
            if not isinstance(item, str):
                self._error(field, f"Expected a string, got: {item!r}")
            elif item != "any":
                self._check_with_regex(field, item)


class ConfigLoader:
    """ConfigLoader is an interface used to load a configuration from a source."""

    def load(self) -> Config:
        """Load a configuration from a source and normalize/validate it.

        Raises:
            ConfigError: If the loader was unable to load or
                normalize/validate the configuration.

        Returns:
            Config: Loaded and validated configuration.
        """
        raise NotOverriddenError()


class CliConfigLoader(ConfigLoader):
    """Configuration loader that loads the options given on the command line.

    Args:
        schema (Mapping): Schema used for normalization/validation.
        config (Mapping): Configuration that need to be normalized and validated.
    """

    def __init__(self, schema: Mapping, config: Mapping | None) -> None:
        self._schema = schema
        self._config = {} if config is None else config

    def load(self) -> Config:
        validated, reasons = validate(self._config, self._schema, middle_stage=True)
        if reasons:
            raise ConfigError(f"Invalid option '{reasons[0]}'", reasons)
        return Config(validated)


class YamlFileConfigLoader(ConfigLoader):
    """Configuration loader that loads a single YAML file.

    Args:
        schema (Mapping): Schema used for normalization/validation.
        path (str or Path): Path to YAML file to be loaded.
    """

    def __init__(self, schema: Mapping, path: str | Path | None) -> None:
        self._schema = schema
        self._path = path if isinstance(path, Path) else Path(path) if path is not None else None

    @property
    def path(self) -> Path | None:
        return self._path

    def load(self) -> Config:
        if not self._path:
            return Config()
        try:
            # get YAML file content
            with self._path.open("r") as f:
                raw = yaml.safe_load(f) or {}
        except OSError as err:
            raise ConfigError(f"Failed to load YAML config: {err}", reasons=[str(err)]) from err
        except yaml.YAMLError as err:
            raise ConfigError(f"Failed to parse YAML config '{self._path}': {err}", reasons=[str(err)]) from err
        if not isinstance(raw, Mapping):
            raise ConfigError(f"The configuration file '{self._path}' does not contain a mapping",
                              reasons=[f"expected a mapping, got {type(raw).__name__}"])

        # normalize and validate the yaml content
        validated, reasons = validate(raw, self._schema, middle_stage=True)
        if reasons:
            raise ConfigError(
                "There is one or more errors in the configuration file '{}':\n    {}".format(
                    self._path, "\n    ".join(reasons)),
                reasons,
            )
        return Config(validated)


class HeadsmithConfigLoader(ConfigLoader):
    """Merge multiple ConfigLoaders and validate the merged config.

    Args:
        *loaders (ConfigLoader): Loaders to be merged into one, the first
            loader has the highest priority.
    """

    def __init__(self, schema: Mapping, *loaders: ConfigLoader) -> None:
        self._schema = schema
        self._loaders = loaders

    def load(self) -> Config:
        # load the configs using the specified loaders
        configs = [ldrs.load() for ldrs in self._loaders]

        # merge the configs
        merged: Config = Config()
        for key_path, _ in iterate_schema(self._schema):
            for config in reversed(configs):
                value = config.get([key_path], missing)
                if value is not missing:
                    merged[key_path] = value

        # normalize and validate the merged configs
        validated, reasons = validate(merged, self._schema)
        if reasons:
            raise ConfigError(
                "There is one or more errors in the configuration:\n    {}".format("\n    ".join(reasons)),
                reasons,
            )

        return Config(validated)
