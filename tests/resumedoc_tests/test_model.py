"""Tests for resumedoc/model.py value types."""

from __future__ import annotations

import unittest

from resumedoc.model import BOLD, BULLET, JOBSEP, NEWLINE, TEXT, Document, Line, Section, Token


class TestLine(unittest.TestCase):
    """Tests for Line construction and flattening."""

    def test_of_marks_all_but_last_continued(self):
        line = Line.of([Token.bullet(), Token.text_run("a"), Token.text_run("b")])
        self.assertEqual([t.continued for t in line.tokens], [True, True, False])

    def test_single_token_not_continued(self):
        line = Line.of([Token.text_run("only")])
        self.assertFalse(line.tokens[0].continued)

    def test_text_renders_jobsep_and_whitespace(self):
        line = Line.of([
            Token.text_run("Acme", BOLD),
            Token.jobsep(),
            Token.text_run("Dev"),
            Token.newline(),
            Token.tab(),
            Token.bullet(),
            Token.text_run("Shipped"),
        ])
        self.assertEqual(line.text(), "Acme | Dev\n\tShipped")

    def test_head_and_tail_split_at_newline(self):
        line = Line.of([Token.text_run("Head"), Token.newline(), Token.text_run("tail")])
        self.assertEqual(line.head_text(), "Head")
        self.assertEqual([t.kind for t in line.tail()], [NEWLINE, TEXT])

    def test_tail_empty_without_newline(self):
        self.assertEqual(Line.of([Token.text_run("x")]).tail(), ())

    def test_with_bullet_prepends(self):
        line = Line.of([Token.text_run("x")]).with_bullet()
        self.assertEqual(line.tokens[0].kind, BULLET)
        self.assertEqual(len(line), 2)

    def test_with_bullet_moves_existing(self):
        line = Line.of([Token.text_run("x"), Token.bullet()]).with_bullet()
        self.assertEqual([t.kind for t in line.tokens], [BULLET, TEXT])


class TestToDict(unittest.TestCase):
    """Tests for plain-dict views."""

    def test_token_dict_omits_empty_fields(self):
        self.assertEqual(Token.jobsep().to_dict(), {"type": JOBSEP, "continued": False})

    def test_link_dict(self):
        data = Token.link("GitHub", "https://github.com/x").to_dict()
        self.assertEqual(data["text"], "GitHub")
        self.assertEqual(data["href"], "https://github.com/x")

    def test_document_dict(self):
        doc = Document("Jane", (Section("Skills", (Line.of([Token.text_run("Go")]),)),))
        data = doc.to_dict()
        self.assertEqual(data["name"], "Jane")
        self.assertEqual(data["sections"][0]["heading"], "Skills")
        self.assertEqual(data["sections"][0]["items"][0][0]["text"], "Go")
        self.assertNotIn("contactTokens", data)

    def test_section_lookup_case_insensitive(self):
        doc = Document("Jane", (Section("Skills"),))
        self.assertIsNotNone(doc.section("skills"))
        self.assertIsNone(doc.section("Education"))


if __name__ == "__main__":
    unittest.main()
