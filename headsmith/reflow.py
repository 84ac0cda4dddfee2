# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Removal of hard column wrapping from pre-formatted license texts."""

from __future__ import annotations

import re

# a line break that is neither preceded nor followed by another line break
_p_soft_break = re.compile(r"(?<=[^\n])\n(?=[^\n])")


def unwrap(text: str) -> str:
    """Join column-wrapped lines into one logical line per paragraph.

    Empty lines mark intentional paragraph breaks and are kept as they are.

    Args:
        text (str): Text that may contain hard line breaks.

    Returns:
        str: The text with every single line break replaced by a space.

    Examples:
        unwrap("A\\nB\\n\\nC") -> "A B\\n\\nC"
    """
    return _p_soft_break.sub(" ", text)
