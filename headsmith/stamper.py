# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Decides per file whether its license header is current, outdated or
missing, and inserts or replaces it accordingly.

Files are independent of each other, so a batch is processed by a pool of
worker threads. Failures to read or write a file are recorded against that
file and never abort the rest of the batch.
"""

from __future__ import annotations

import difflib
import re
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from headsmith.comments.factory import CommentConfig, CommentFactory, extension_of, split_preamble
from headsmith.config import Config
from headsmith.errors import FileError, FileUnreadableError, FileUnwritableError
from headsmith.log import get_child_logger
from headsmith.model.license_config import LicenseConfig
from headsmith.reporter import Reporter, Status
from headsmith.reporter.dummy import DummyReporter
from headsmith.spdx import SpdxTemplateFetcher
from headsmith.template import Template

log = get_child_logger("stamper")


@dataclass(slots=True)
class FileOutcome:
    path: str
    status: Status
    reasons: list[str] = field(default_factory=list)
    written: bool = False
    diff: str | None = None


def _outdated_patterns(template: Template, comment_config: CommentConfig, header: str, newline: str,
                       replaces: Iterable[re.Pattern]) -> Iterator[tuple[re.Pattern, str]]:
    commenter, columns = comment_config.commenter, comment_config.columns
    yield template.outdated_license_pattern(commenter, columns, newline), header
    # the file may separate the header from its content by a different
    # number of empty lines, which is kept as it is
    yield template.outdated_license_trimmed_pattern(commenter, columns, newline), header.rstrip()
    for pattern in replaces:
        yield pattern, header


def detect_newline(content: str) -> str:
    """The line ending of the first line, `\\n` if there is none."""
    index = content.find("\n")
    if index > 0 and content[index - 1] == "\r":
        return "\r\n"
    return "\n"


def _contains_header(body: str, header: str) -> bool:
    # the header has to start at the beginning of a line
    return body.startswith(header) or f"\n{header}" in body


def stamp_content(content: str,
                  template: Template,
                  comment_config: CommentConfig,
                  replaces: Iterable[re.Pattern] = ()) -> tuple[Status, str]:
    """Bring the header of a file's content up to date.

    The header is written with the line ending of the file, the rest of the
    content is left as it is.

    Args:
        content (str): The current content of the file.
        template (Template): The license template.
        comment_config (CommentConfig): The comment style of the file.
        replaces (Iterable[re.Pattern]): Patterns of other headers to replace.

    Returns:
        tuple(Status, str): Either `CURRENT` with the unchanged content,
            `REPLACED` or `INSERTED` with the new content.
    """
    newline = detect_newline(content)
    header = comment_config.commenter.comment(template.render(), comment_config.columns).replace("\n", newline)
    preamble, body = split_preamble(content)
    if _contains_header(body, header):
        return Status.CURRENT, content

    for pattern, replacement in _outdated_patterns(template, comment_config, header, newline, replaces):
        match = pattern.search(body)
        if match:
            new_body = body[:match.start()] + replacement + body[match.end():]
            if new_body == body:
                return Status.CURRENT, content
            return Status.REPLACED, preamble + new_body

    if preamble and not preamble.endswith("\n"):
        preamble += newline
    return Status.INSERTED, preamble + header + body


def not_licensed(outcomes: Iterable[FileOutcome]) -> list[str]:
    """Paths of the files that did not carry the current header, without duplicates."""
    return list(dict.fromkeys(o.path for o in outcomes if not o.status.is_licensed))


class Stamper:
    """Applies the configured license headers to files.

    Args:
        config (Config): Validated configuration.
        fetcher (SpdxTemplateFetcher | None): Used for licenses with
            `auto_template`, created on demand if not given.
        reporter (Reporter | None): Receives the outcome of every file.
        diff (bool): Attach a unified diff to the outcome of changed files.
    """

    def __init__(self,
                 config: Config,
                 fetcher: SpdxTemplateFetcher | None = None,
                 reporter: Reporter | None = None,
                 diff: bool = False) -> None:
        self._change_in_place: bool = config.get("change_in_place", False)
        self._max_workers: int | None = config.get("max_workers")
        self._excludes = [re.compile(p) for p in config.get("excludes", [])]
        self._licenses = [LicenseConfig.from_dict(raw) for raw in config.get("licenses", [])]
        self._comments = CommentFactory.from_config(config.get("comments", []))
        self._reporter: Reporter = reporter or DummyReporter()
        self._diff = diff

        if fetcher is None and any(lic.auto_template for lic in self._licenses):
            fetcher = SpdxTemplateFetcher()
        self._templates = [lic.create_template(fetcher) for lic in self._licenses]

    @property
    def change_in_place(self) -> bool:
        return self._change_in_place

    def license_files(self, paths: Iterable[str]) -> list[str]:
        """License a batch of files.

        Returns:
            list[str]: The files which were not licensed with the configured
                header before, including the ones that failed.
        """
        return not_licensed(self.process(paths))

    def process(self, paths: Iterable[str]) -> list[FileOutcome]:
        unique_paths = list(dict.fromkeys(str(p) for p in paths))
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = [(path, executor.submit(self.license_file, path)) for path in unique_paths]
            outcomes = []
            for path, future in futures:
                try:
                    outcome = future.result()
                except FileError as err:
                    log.error("%s", err)
                    outcome = FileOutcome(path, Status.FAILED, [str(err)])
                outcomes.append(outcome)
                self._reporter.add(outcome.path, outcome.status, outcome.reasons)
        return outcomes

    def license_file(self, path: str) -> FileOutcome:
        """Check and, if needed, update the header of a single file.

        Raises:
            FileUnreadableError: If the file could not be read.
            FileUnwritableError: If the changed file could not be written.
        """
        if any(p.search(path) for p in self._excludes):
            log.debug("skipping excluded file '%s'", path)
            return FileOutcome(path, Status.SKIPPED, ["excluded"])

        index = self._license_index(path)
        if index is None:
            log.info("no license configured for '%s', skipping", path)
            return FileOutcome(path, Status.SKIPPED, ["no license configured"])
        license_config, template = self._licenses[index], self._templates[index]

        # the first line is only needed to detect the interpreter of a script
        first_line = self._first_line(path) if not extension_of(path) else None
        comment_config = self._comments.get(path, first_line)
        if comment_config is None:
            log.info("no comment style for '%s', skipping", path)
            return FileOutcome(path, Status.SKIPPED, ["no comment style"])

        content = self._read(path)

        status, new_content = stamp_content(content, template, comment_config, license_config.replaces)
        outcome = FileOutcome(path, status)
        if status is Status.CURRENT:
            log.debug("'%s' is licensed", path)
            return outcome

        if self._diff:
            outcome.diff = "".join(
                difflib.unified_diff(content.splitlines(keepends=True),
                                     new_content.splitlines(keepends=True),
                                     fromfile=path,
                                     tofile=path))
        if self._change_in_place:
            self._write(path, new_content)
            outcome.written = True
            log.info("%s header of '%s'", status.value, path)
        else:
            log.info("would %s header of '%s'", "replace" if status is Status.REPLACED else "insert", path)
        return outcome

    def _license_index(self, path: str) -> int | None:
        for index, license_config in enumerate(self._licenses):
            if license_config.matches(path):
                return index
        return None

    @staticmethod
    def _first_line(path: str) -> str:
        try:
            with open(path, "rb") as f:
                line = f.readline()
        except OSError as err:
            raise FileUnreadableError(path, f"Failed to read '{path}': {err}") from err
        return line.decode("utf-8", errors="replace").rstrip("\r\n")

    @staticmethod
    def _read(path: str) -> str:
        try:
            # line endings are kept as they are
            with open(path, encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as err:
            raise FileUnreadableError(path, f"Failed to read '{path}': {err}") from err

    @staticmethod
    def _write(path: str, content: str) -> None:
        try:
            Path(path).write_text(content, encoding="utf-8", newline="")
        except OSError as err:
            raise FileUnwritableError(path, f"Failed to write '{path}': {err}") from err
