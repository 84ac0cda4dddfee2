# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import unittest

from headsmith.reflow import unwrap

PREWRAPPED = """This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY."""


class TestUnwrap(unittest.TestCase):

    def test_joins_lines_of_a_paragraph(self):
        self.assertEqual(unwrap("A\nB\nC"), "A B C")

    def test_keeps_single_empty_line(self):
        self.assertEqual(unwrap("A\nB\n\nC"), "A B\n\nC")

    def test_keeps_multiple_empty_lines(self):
        self.assertEqual(unwrap("A\n\n\nB\nC"), "A\n\n\nB C")

    def test_keeps_leading_and_trailing_line_breaks(self):
        self.assertEqual(unwrap("\nA\nB\n"), "\nA B\n")

    def test_prewrapped_license(self):
        unwrapped = unwrap(PREWRAPPED)
        paragraphs = unwrapped.split("\n\n")
        self.assertEqual(len(paragraphs), 2)
        self.assertNotIn("\n", paragraphs[0])
        self.assertTrue(paragraphs[0].startswith("This program is free software: you can redistribute it and/or modify it"))
        self.assertEqual(paragraphs[1], "This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY.")

    def test_idempotent(self):
        for text in [PREWRAPPED, "A\nB\n\nC", "\n\nA\n", "", "single line", "A\n\n\n\nB"]:
            once = unwrap(text)
            self.assertEqual(unwrap(once), once, msg=repr(text))

    def test_without_line_breaks(self):
        self.assertEqual(unwrap("nothing to do"), "nothing to do")


if __name__ == '__main__':
    unittest.main()
