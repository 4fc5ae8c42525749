"""Tests for resumedoc/skills.py."""

from __future__ import annotations

import unittest

from resumedoc.model import BULLET, LINK, TEXT, Section
from resumedoc.skills import split_skills
from resumedoc.tokenizer import parse_line
from tests.resumedoc_tests.fixtures import kinds, make_section, texts


class TestSplitWithoutJobSkills(unittest.TestCase):
    """Every skill becomes its own bulleted line."""

    def test_comma_and_semicolon_split(self):
        out = split_skills([make_section("Skills", "Python, SQL; Go")])
        self.assertEqual(texts(out[0]), ["Python", "SQL", "Go"])
        for line in out[0].lines:
            self.assertEqual(line.tokens[0].kind, BULLET)

    def test_single_skill_line_gets_bullet(self):
        out = split_skills([make_section("Technical Skills", "Kubernetes", "- Docker")])
        self.assertEqual(texts(out[0]), ["Kubernetes", "Docker"])
        self.assertEqual([kinds(line) for line in out[0].lines], [[BULLET, TEXT], [BULLET, TEXT]])

    def test_other_sections_untouched(self):
        summary = make_section("Summary", "Python, SQL")
        out = split_skills([summary])
        self.assertIs(out[0], summary)


class TestSplitWithJobSkills(unittest.TestCase):
    """Filtering to the job's skills and grouping by category."""

    def test_filters_dedupes_and_groups(self):
        section = make_section("Skills", "Python, MySQL, python, PostgreSQL, Postgres, Java, Go")
        out = split_skills([section], ["python", "MySQL", "postgres", "go"])
        self.assertEqual(texts(out[0]), ["Python", "database, MySQL, Postgres", "Go"])

    def test_group_capped_at_four_members(self):
        section = make_section("Skills", "MySQL, Postgres, Oracle, SQLite, MongoDB")
        out = split_skills([section], ["mysql", "postgres", "oracle", "sqlite", "mongodb"])
        self.assertEqual(texts(out[0]), ["database, MySQL, Postgres, Oracle"])

    def test_at_most_five_lines(self):
        section = make_section("Skills", "Go, Rust, Java, Kotlin, Swift, Ruby, Perl")
        job = ["go", "rust", "java", "kotlin", "swift", "ruby", "perl"]
        out = split_skills([section], job)
        self.assertEqual(texts(out[0]), ["Go", "Rust", "Java", "Kotlin", "Swift"])

    def test_link_is_preserved(self):
        section = Section("Skills", (parse_line("[Go](https://go.dev), Python"),))
        out = split_skills([section], ["go"])
        line = out[0].lines[0]
        self.assertEqual(kinds(line), [BULLET, LINK])
        self.assertEqual(line.tokens[1].text, "Go")
        self.assertEqual(line.tokens[1].href, "https://go.dev")

    def test_no_matches_empties_section(self):
        out = split_skills([make_section("Skills", "Cobol")], ["go"])
        self.assertTrue(out[0].is_empty)


if __name__ == "__main__":
    unittest.main()
