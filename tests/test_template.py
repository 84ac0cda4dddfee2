# SPDX-FileCopyrightText: 2026 The headsmith authors
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import unittest
from datetime import datetime

from headsmith.comments import BlockComment, LineComment
from headsmith.model.authors import Authors, CopyrightHolder
from headsmith.template import INTERMEDIATE_YEAR_TOKEN, Context, Template, TokenSet, replacement_tokens

JANE = Authors([CopyrightHolder("Jane Doe", "jane@example.com")])

AGPL_NOTICE = ("This program is free software: you can redistribute it and/or modify it under the terms of the GNU "
               "Affero General Public License as published by the Free Software Foundation, version 3.")

PREWRAPPED_NOTICE = """Copyright (C) [year] [name of author] This
program is free software: you can redistribute it and/or modify it under
the terms of the GNU Affero General Public License as published by the

Free Software Foundation, version 3."""


def _context(year: str | None = "2020", unwrap_text: bool = False, authors: Authors = JANE) -> Context:
    return Context(ident="AGPL-3.0-only", authors=authors, year=year, unwrap_text=unwrap_text)


class TestReplacementTokens(unittest.TestCase):

    def test_plain(self):
        self.assertIs(replacement_tokens("Copyright [year] <owner>", False), TokenSet.PLAIN)

    def test_apache(self):
        content = "Copyright [yyyy] [name of copyright owner] <copyright holders>"
        self.assertIs(replacement_tokens(content, True), TokenSet.APACHE)

    def test_copyright_holders_before_owner(self):
        content = "Copyright (c) <year> <copyright holders> <owner> <name of author>"
        self.assertIs(replacement_tokens(content, True), TokenSet.SPDX_COPYRIGHT_HOLDERS)

    def test_owner_before_name_of_author(self):
        content = "Copyright (c) <year> <owner> <name of author>"
        self.assertIs(replacement_tokens(content, True), TokenSet.SPDX_OWNER)

    def test_name_of_author_as_last_resort(self):
        self.assertIs(replacement_tokens("Copyright (c) <year>", True), TokenSet.SPDX_NAME_OF_AUTHOR)

    def test_token_accessors(self):
        self.assertEqual(TokenSet.APACHE.year, "[yyyy]")
        self.assertEqual(TokenSet.APACHE.author, "[name of copyright owner]")
        self.assertEqual(TokenSet.APACHE.ident, "[ident]")
        self.assertEqual(TokenSet.SPDX_OWNER.ident, "<ident>")


class TestRender(unittest.TestCase):

    def test_substitution_at_end_of_line(self):
        template = Template("License [year]\ntext", _context(unwrap_text=True))
        self.assertEqual(template.render(), "License 2020 text")

    def test_keeps_line_breaks_without_unwrap(self):
        template = Template("License [year]\ntext", _context())
        self.assertEqual(template.render(), "License 2020\ntext")

    def test_substitutions(self):
        template = Template("Copyright (C) [year] [name of author] " + AGPL_NOTICE, _context())
        self.assertEqual(template.render(), "Copyright (C) 2020 Jane Doe <jane@example.com> " + AGPL_NOTICE)

    def test_substitutes_every_occurrence(self):
        template = Template("[ident] [year] [ident] [year] [name of author] [name of author]", _context())
        self.assertEqual(template.render(),
                         "AGPL-3.0-only 2020 AGPL-3.0-only 2020 Jane Doe <jane@example.com> Jane Doe <jane@example.com>")

    def test_prewrapped_preserves_paragraphs(self):
        template = Template(PREWRAPPED_NOTICE, _context(unwrap_text=True))
        self.assertEqual(
            template.render(), "Copyright (C) 2020 Jane Doe <jane@example.com> This program is free software: you "
            "can redistribute it and/or modify it under the terms of the GNU Affero General Public License as "
            "published by the\n\nFree Software Foundation, version 3.")

    def test_current_year(self):
        template = Template("Copyright [year]", _context(year=None))
        self.assertEqual(template.render(), f"Copyright {datetime.now().year:04d}")

    def test_empty_authors(self):
        template = Template("Copyright [year] [name of author]", _context(authors=Authors()))
        self.assertEqual(template.render(), "Copyright 2020 ")

    def test_without_tokens(self):
        template = Template("No placeholders in here.", _context())
        self.assertEqual(template.render(), "No placeholders in here.")

    def test_spdx_tokens_ignored_by_plain_template(self):
        template = Template("Copyright <year> <owner>", _context())
        self.assertEqual(template.render(), "Copyright <year> <owner>")

    def test_apache(self):
        template = Template("Copyright [yyyy] [name of copyright owner]", _context()).set_spdx_template(True)
        self.assertTrue(template.spdx_template)
        self.assertEqual(template.render(), "Copyright 2020 Jane Doe <jane@example.com>")

    def test_spdx_copyright_holders(self):
        template = Template("Copyright (c) <year> <copyright holders>, <ident>", _context()).set_spdx_template(True)
        self.assertEqual(template.render(), "Copyright (c) 2020 Jane Doe <jane@example.com>, AGPL-3.0-only")

    def test_spdx_owner(self):
        template = Template("Copyright (c) <year> <owner>", _context()).set_spdx_template(True)
        self.assertEqual(template.render(), "Copyright (c) 2020 Jane Doe <jane@example.com>")

    def test_render_does_not_change_context(self):
        context = _context()
        template = Template("Copyright [year]", context)
        template.outdated_license_pattern(LineComment("#"))
        self.assertEqual(context.year, "2020")
        self.assertEqual(template.render(), "Copyright 2020")


class TestOutdatedLicensePattern(unittest.TestCase):

    def test_outdated_license_matching(self):
        template = Template("Copyright (C) [year] [name of author] This program is free software.",
                            _context(year="2022"))
        pattern = template.outdated_license_pattern(LineComment("#"), 1000)
        self.assertIsNotNone(
            pattern.search("# Copyright (C) 2020 Jane Doe <jane@example.com> This program is free software.\n"))

    def test_does_not_match_other_authors(self):
        template = Template("Copyright (C) [year] [name of author]", _context(year="2022"))
        pattern = template.outdated_license_pattern(LineComment("#"), 80)
        self.assertIsNone(pattern.search("# Copyright (C) 2020 John Roe\n"))

    def test_requires_four_digit_year(self):
        template = Template("Copyright (C) [year] [name of author]", _context(year="2022"))
        pattern = template.outdated_license_pattern(LineComment("#"), 80)
        self.assertIsNone(pattern.search("# Copyright (C) 20 Jane Doe <jane@example.com>\n"))
        self.assertIsNone(pattern.search("# Copyright (C) [year] Jane Doe <jane@example.com>\n"))

    def test_outdated_license_trimmed_matching(self):
        template = Template("Copyright (C) [year] [name of author] This program is free software.",
                            _context(year="2022"))
        commenter = LineComment("#", trailing_lines=2)
        header = "# Copyright (C) 2020 Jane Doe <jane@example.com> This program is free software."

        pattern = template.outdated_license_pattern(commenter, 1000)
        self.assertIsNotNone(pattern.search(header + "\n\n\n"))
        self.assertIsNone(pattern.search(header))

        trimmed = template.outdated_license_trimmed_pattern(commenter, 1000)
        self.assertIsNotNone(trimmed.search(header))
        self.assertIsNotNone(trimmed.search(header + "\n"))

    def test_round_trip_wrapped(self):
        content = "Copyright (C) [year] [name of author]\n\n" + AGPL_NOTICE + " The year [year] appears twice."
        for commenter in [LineComment("//", trailing_lines=1), BlockComment("/*", " */", " *", trailing_lines=1)]:
            for columns in [None, 30, 80]:
                rendered = commenter.comment(Template(content, _context(year="2020")).render(), columns)
                pattern = Template(content, _context(year="2022")).outdated_license_pattern(commenter, columns)
                self.assertIsNotNone(pattern.fullmatch(rendered), msg=f"{commenter!r}, columns={columns}")

    def test_anchored_at_line_start(self):
        template = Template("Copyright [year] [name of author]", _context())
        pattern = template.outdated_license_pattern(LineComment("#"))
        self.assertIsNone(pattern.search("## Copyright 2001 Jane Doe <jane@example.com>\n"))
        match = pattern.search("import os\n# Copyright 2001 Jane Doe <jane@example.com>\n")
        self.assertEqual(match.start(), len("import os\n"))

    def test_crlf(self):
        template = Template("Copyright [year] [name of author]\n\nAll rights reserved.", _context())
        pattern = template.outdated_license_pattern(LineComment("#"), newline="\r\n")
        self.assertIsNotNone(
            pattern.fullmatch("# Copyright 2001 Jane Doe <jane@example.com>\r\n#\r\n# All rights reserved.\r\n"))
        self.assertIsNone(pattern.search("# Copyright 2001 Jane Doe <jane@example.com>\n#\n# All rights reserved.\n"))

    def test_round_trip_mixed_years(self):
        template = Template("Copyright [year], portions [year] [name of author]", _context(year="2024"))
        pattern = template.outdated_license_pattern(LineComment("--"))
        self.assertIsNotNone(pattern.fullmatch("-- Copyright 1999, portions 2003 Jane Doe <jane@example.com>\n"))

    def test_escapes_regex_characters(self):
        template = Template("(c) [year] *all* rights? [reserved] $1.00 ^|", _context(year="2022"))
        pattern = template.outdated_license_pattern(LineComment("#"))
        self.assertIsNotNone(pattern.fullmatch("# (c) 2011 *all* rights? [reserved] $1.00 ^|\n"))
        self.assertIsNone(pattern.search("# (c) 2011 aall rights [reserved] $1.00 ^|\n"))

    def test_sentinel_is_year_sized(self):
        self.assertEqual(len(INTERMEDIATE_YEAR_TOKEN), 4)


if __name__ == '__main__':
    unittest.main()
