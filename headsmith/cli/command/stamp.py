# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from pathlib import Path

from cleo.helpers import argument, option

from headsmith.cli.command import HeadsmithCommand, options_from_schema
from headsmith.config import BASE_SCHEMA
from headsmith.errors import ConfigError, HeadsmithError
from headsmith.project import get_project_files
from headsmith.reporter import Reporter, Status
from headsmith.reporter.dummy import DummyReporter
from headsmith.reporter.file import FileReporter
from headsmith.stamper import Stamper, not_licensed

STATUS_VERBS = {
    Status.REPLACED: "replace",
    Status.INSERTED: "insert",
}


class StampCommand(HeadsmithCommand):

    name = "stamp"
    description = "Add or update the license headers of files."
    arguments = [
        argument("files", "Files to license, ignored if --project is given", optional=True, multiple=True),
    ]
    options = [
        option("check", None, "Check whether all files are licensed with the given config, without changing any"),
        option("exclude",
               "e",
               "A regex which will be used to determine what files to ignore",
               flag=False,
               multiple=True),
        option("project", "p", "License the files of the current project, as listed by git ls-files"),
        option("config", "c", "Path to the configuration file", flag=False),
        option("report", None, "Write the outcome of every file to this file", flag=False),
        option("diff", None, "Show the changes to be made"),
    ] + options_from_schema(BASE_SCHEMA)

    def handle(self) -> int:
        check = self.option("check")
        try:
            config = self._load_config(self.option("config"))
            for exclude in self.option("exclude") or []:
                config.add_exclude(exclude)
            if check:
                config.change_in_place = False
            files = get_project_files() if self.option("project") else self.argument("files")
        except ConfigError as err:
            self._print_reasons(err)
            return 1
        except HeadsmithError as err:
            self.line_error_plain(str(err), style="error")
            return 1

        if not files:
            self.line_error("Must provide files to license, either as arguments or via --project", style="error")
            return 1

        report_path = self.option("report")
        reporter: Reporter = FileReporter(Path(report_path)) if report_path else DummyReporter()
        with reporter:
            try:
                stamper = Stamper(config, reporter=reporter, diff=self.option("diff"))
                outcomes = stamper.process(files)
            except HeadsmithError as err:
                self.line_error_plain(f"Failed to license files: {err}", style="error")
                return 1

        for outcome in outcomes:
            if outcome.diff:
                self.line_plain(outcome.diff.rstrip("\n"))

        failed = [o for o in outcomes if o.status is Status.FAILED]
        if failed:
            self.line_error(f"Failed to process {len(failed)} file(s):", style="error")
            for outcome in failed:
                self.line_error_plain(f"    {outcome.path}: {', '.join(outcome.reasons)}")

        files_not_licensed = not_licensed(outcomes)
        if check and files_not_licensed:
            self.line_error("The following files were not licensed with the given config.")
            for path in files_not_licensed:
                self.line_error_plain(path)
            return 1
        if not stamper.change_in_place:
            for outcome in outcomes:
                if outcome.status in (Status.REPLACED, Status.INSERTED):
                    self.line_plain(f"would {STATUS_VERBS[outcome.status]} header: {outcome.path}")
        return 1 if failed else 0
