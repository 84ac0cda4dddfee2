# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""License templates and their rendering into header text.

Besides rendering, a template can produce a regular expression matching any
previously rendered and commented version of itself, no matter which year it
was rendered with. This is what allows outdated headers to be refreshed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from headsmith.comments import Comment
from headsmith.errors import PatternError
from headsmith.log import get_child_logger
from headsmith.model.authors import Authors
from headsmith.reflow import unwrap

log = get_child_logger("template")

# Stands in for the year while building the outdated-license pattern.
# It has to be exactly 4 characters, so the text wraps at the same columns as
# with a real year, and must not occur in any license text.
INTERMEDIATE_YEAR_TOKEN = "@YR@"

# any full 4-digit year
YEAR_RE = "[0-9]{4}"


class TokenSet(Enum):
    """Placeholder vocabularies, as `(year, author, ident)` tokens."""

    PLAIN = ("[year]", "[name of author]", "[ident]")
    APACHE = ("[yyyy]", "[name of copyright owner]", "[ident]")
    SPDX_COPYRIGHT_HOLDERS = ("<year>", "<copyright holders>", "<ident>")
    SPDX_OWNER = ("<year>", "<owner>", "<ident>")
    SPDX_NAME_OF_AUTHOR = ("<year>", "<name of author>", "<ident>")

    @property
    def year(self) -> str:
        return self.value[0]

    @property
    def author(self) -> str:
        return self.value[1]

    @property
    def ident(self) -> str:
        return self.value[2]


def replacement_tokens(content: str, spdx_template: bool) -> TokenSet:
    """Select the placeholder vocabulary used by a template.

    Args:
        content (str): Raw template text.
        spdx_template (bool): Whether the text comes from the SPDX license list.

    Returns:
        TokenSet: The tokens to be substituted.
    """
    if not spdx_template:
        return TokenSet.PLAIN
    # the Apache license has a format of its own
    if "[name of copyright owner]" in content:
        return TokenSet.APACHE
    if "<copyright holders>" in content:
        return TokenSet.SPDX_COPYRIGHT_HOLDERS
    if "<owner>" in content:
        return TokenSet.SPDX_OWNER
    return TokenSet.SPDX_NAME_OF_AUTHOR


@dataclass(slots=True)
class Context:
    """Values substituted into a template."""

    ident: str
    authors: Authors = field(default_factory=Authors)
    year: str | None = None
    """Explicit year, `None` stands for the current year at render time."""
    unwrap_text: bool = False

    def get_year(self) -> str:
        if self.year is not None:
            return self.year
        return f"{datetime.now().year:04d}"

    def get_authors(self) -> str:
        return str(self.authors)


class Template:

    __slots__ = ["_spdx_template", "_content", "_context"]

    def __init__(self, content: str, context: Context) -> None:
        self._spdx_template = False
        self._content = content
        self._context = context

    @property
    def content(self) -> str:
        return self._content

    @property
    def context(self) -> Context:
        return self._context

    @property
    def spdx_template(self) -> bool:
        return self._spdx_template

    def set_spdx_template(self, yes_or_no: bool) -> Template:
        self._spdx_template = yes_or_no
        return self

    def render(self) -> str:
        return self._interpolate(self._context)

    def outdated_license_pattern(self,
                                 commenter: Comment,
                                 columns: int | None = None,
                                 newline: str = "\n") -> re.Pattern:
        """Pattern matching this header, commented by `commenter`, with any year.

        The match has to start at the beginning of a line. `newline` is the
        line ending of the file to be searched.
        """
        return self._build_year_varying_regex(commenter, columns, newline, trim_trailing=False)

    def outdated_license_trimmed_pattern(self,
                                         commenter: Comment,
                                         columns: int | None = None,
                                         newline: str = "\n") -> re.Pattern:
        """Same as `outdated_license_pattern`, but ignoring trailing whitespace
        and empty lines of the commented header."""
        return self._build_year_varying_regex(commenter, columns, newline, trim_trailing=True)

    def _interpolate(self, context: Context) -> str:
        tokens = replacement_tokens(self._content, self._spdx_template)
        text = self._content
        if context.unwrap_text:
            # some license headers come pre-wrapped
            text = unwrap(text)
        return text \
            .replace(tokens.year, context.get_year()) \
            .replace(tokens.author, context.get_authors()) \
            .replace(tokens.ident, context.ident)

    def _build_year_varying_regex(self, commenter: Comment, columns: int | None, newline: str,
                                  trim_trailing: bool) -> re.Pattern:
        context = replace(self._context, year=INTERMEDIATE_YEAR_TOKEN)
        rendered = commenter.comment(self._interpolate(context), columns)
        if trim_trailing:
            rendered = rendered.rstrip()
        rendered = rendered.replace("\n", newline)

        # every fragment around the token is matched literally,
        # the token itself by any 4-digit year
        pattern = "^" + YEAR_RE.join(re.escape(fragment) for fragment in rendered.split(INTERMEDIATE_YEAR_TOKEN))
        log.debug("outdated license pattern for %s: %s", self._context.ident, pattern)
        try:
            return re.compile(pattern, re.MULTILINE)
        except re.error as err:
            raise PatternError(f"Failed to compile the outdated license pattern: {err}") from err

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ident={self._context.ident!r}, spdx_template={self._spdx_template})"
