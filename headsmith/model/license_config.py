# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from headsmith.errors import TemplateError
from headsmith.model.authors import Authors
from headsmith.spdx import SpdxTemplateFetcher
from headsmith.template import Context, Template


def _compile_file_matchers(files: str | list[str]) -> list[re.Pattern] | None:
    patterns = [files] if isinstance(files, str) else list(files)
    if "any" in patterns:
        return None
    return [re.compile(p) for p in patterns]


@dataclass(slots=True)
class LicenseConfig:
    """A license and the files it applies to."""

    ident: str
    authors: Authors = field(default_factory=Authors)
    files: list[re.Pattern] | None = None
    """`None` stands for any file."""
    template: str | None = None
    auto_template: bool = False
    unwrap_text: bool = False
    year: str | None = None
    replaces: list[re.Pattern] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Mapping) -> LicenseConfig:
        return cls(
            ident=raw["ident"],
            authors=Authors.from_list(raw.get("authors")),
            files=_compile_file_matchers(raw.get("files", "any")),
            template=raw.get("template"),
            auto_template=raw.get("auto_template", False),
            unwrap_text=raw.get("unwrap_text", False),
            year=raw.get("year"),
            replaces=[re.compile(p) for p in raw.get("replaces", [])],
        )

    def matches(self, path: str) -> bool:
        if self.files is None:
            return True
        return any(p.search(path) for p in self.files)

    def context(self) -> Context:
        return Context(ident=self.ident, authors=self.authors, year=self.year, unwrap_text=self.unwrap_text)

    def check(self) -> None:
        """Make sure there is a template to use.

        Raises:
            TemplateError: If there is neither a template nor `auto_template`.
        """
        if not (self.auto_template or self.template):
            raise TemplateError(f"License '{self.ident}' has neither a 'template' nor 'auto_template' enabled")

    def create_template(self, fetcher: SpdxTemplateFetcher | None = None) -> Template:
        """Create the template of this license.

        With `auto_template` the configured template is ignored and the text
        is downloaded from the SPDX license list.

        Raises:
            TemplateError: If there is no template to use.
            FetcherError: If downloading the template failed.
        """
        if self.auto_template:
            if fetcher is None:
                raise TemplateError(f"No way to download the template of '{self.ident}'")
            return Template(fetcher.fetch(self.ident), self.context()).set_spdx_template(True)
        self.check()
        return Template(self.template, self.context())
