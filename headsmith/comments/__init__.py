# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Comment styles turn a plain text block into a commented block for a
specific family of languages.

Two styles are available:
    - LineComment: every line carries the same prefix (e.g. `#` or `//`)
    - BlockComment: the text is enclosed in delimiters (e.g. `/*` and `*/`),
      optionally with a continuation prefix on every line
"""

from __future__ import annotations

import textwrap

from headsmith.errors import NotOverriddenError


def _paragraphs(text: str) -> list[str]:
    # trailing line breaks are covered by `trailing_lines`
    return text.rstrip("\n").split("\n")


class Comment:
    """Interface for comment styles.

    Args:
        trailing_lines (int): Number of empty lines following the commented
            block.
    """

    def __init__(self, trailing_lines: int = 0) -> None:
        if trailing_lines < 0:
            raise ValueError(f"trailing_lines must not be negative, got {trailing_lines}")
        self._trailing_lines = trailing_lines

    @property
    def trailing_lines(self) -> int:
        return self._trailing_lines

    def comment(self, text: str, columns: int | None = None) -> str:
        """Render a text block as comment.

        Args:
            text (str): Text to be commented, paragraphs separated by line breaks.
            columns (int | None): Maximum width of a rendered line. `None`
                disables wrapping.

        Returns:
            str: The commented block, ending with a line break and the
                configured number of trailing empty lines.
        """
        raise NotOverriddenError()

    def _finish(self, lines: list[str]) -> str:
        return "\n".join(lines) + "\n" + "\n" * self._trailing_lines

    @staticmethod
    def _wrap(line: str, width: int | None) -> list[str]:
        if width is None:
            return [line]
        wrapped = textwrap.wrap(
            line,
            width=max(width, 1),
            break_long_words=False,
            break_on_hyphens=False,
        )
        return wrapped or [""]

    @staticmethod
    def _prefixed(prefix: str | None, line: str) -> str:
        if not prefix:
            return line.rstrip()
        if not line:
            return prefix.rstrip()
        return f"{prefix} {line}".rstrip()


class LineComment(Comment):
    """Prefix every line with a comment character, e.g. `#`, `//` or `--`."""

    def __init__(self, comment_char: str, trailing_lines: int = 0) -> None:
        super().__init__(trailing_lines)
        self._comment_char = comment_char

    @property
    def comment_char(self) -> str:
        return self._comment_char

    def comment(self, text: str, columns: int | None = None) -> str:
        width = None if columns is None else columns - len(self._comment_char) - 1
        lines = []
        for paragraph in _paragraphs(text):
            for line in self._wrap(paragraph, width):
                lines.append(self._prefixed(self._comment_char, line))
        return self._finish(lines)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._comment_char!r}, trailing_lines={self._trailing_lines})"


class BlockComment(Comment):
    """Enclose the text in block delimiters, e.g.:

        /*
         * text
         */
    """

    def __init__(self,
                 start_block_char: str,
                 end_block_char: str,
                 per_line_char: str | None = None,
                 trailing_lines: int = 0) -> None:
        super().__init__(trailing_lines)
        self._start_block_char = start_block_char
        self._end_block_char = end_block_char
        self._per_line_char = per_line_char or None

    def comment(self, text: str, columns: int | None = None) -> str:
        width = columns
        if columns is not None and self._per_line_char:
            width = columns - len(self._per_line_char) - 1
        lines = [self._start_block_char.rstrip()]
        for paragraph in _paragraphs(text):
            for line in self._wrap(paragraph, width):
                lines.append(self._prefixed(self._per_line_char, line))
        lines.append(self._end_block_char.rstrip())
        return self._finish(lines)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({self._start_block_char!r}, {self._end_block_char!r}, "
                f"per_line_char={self._per_line_char!r}, trailing_lines={self._trailing_lines})")
