# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import subprocess
from pathlib import Path

from headsmith.errors import HeadsmithError
from headsmith.log import get_child_logger

log = get_child_logger("project")


def get_project_files(cwd: Path | None = None) -> list[str]:
    """List the files of the git repository in `cwd`, as `git ls-files` does.

    Raises:
        HeadsmithError: If git failed, e.g. outside of a repository.
    """
    try:
        proc = subprocess.run(["git", "ls-files"], cwd=cwd, capture_output=True, text=True, check=True)
    except (OSError, subprocess.CalledProcessError) as err:
        stderr = getattr(err, "stderr", None)
        raise HeadsmithError("Failed to run 'git ls-files', make sure you are in a git repository: "
                             f"{(stderr or str(err)).strip()}") from err
    files = [line for line in proc.stdout.split("\n") if line]
    log.debug("found %d project files", len(files))
    return files
