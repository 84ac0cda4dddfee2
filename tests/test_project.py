# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import subprocess
import unittest
from unittest import mock

from headsmith.errors import HeadsmithError
from headsmith.project import get_project_files


class TestGetProjectFiles(unittest.TestCase):

    @mock.patch("headsmith.project.subprocess.run")
    def test_files(self, run):
        run.return_value = subprocess.CompletedProcess(["git", "ls-files"], 0, stdout="a.py\nsrc/b.rs\n", stderr="")
        self.assertEqual(get_project_files(), ["a.py", "src/b.rs"])

    @mock.patch("headsmith.project.subprocess.run")
    def test_not_a_repository(self, run):
        run.side_effect = subprocess.CalledProcessError(128, ["git", "ls-files"], stderr="fatal: not a git repository")
        with self.assertRaises(HeadsmithError) as ctx:
            get_project_files()
        self.assertIn("not a git repository", str(ctx.exception))

    @mock.patch("headsmith.project.subprocess.run")
    def test_git_missing(self, run):
        run.side_effect = FileNotFoundError("git")
        with self.assertRaises(HeadsmithError):
            get_project_files()


if __name__ == '__main__':
    unittest.main()
