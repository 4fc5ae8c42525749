"""Tests for resumedoc/facts.py record normalization and text extraction."""

from __future__ import annotations

import math
import unittest

from resumedoc.facts import (
    CertificationEntry,
    ExperienceEntry,
    LanguageEntry,
    extract_certifications,
    extract_education,
    extract_experience,
    extract_languages,
    flatten_roles,
    normalize_experience,
    parse_certification,
    parse_education,
    parse_experience,
    parse_language,
)
from tests.resumedoc_tests.fixtures import SAMPLE_RESUME_TEXT, make_certification, make_experience


class TestParseExperience(unittest.TestCase):
    """Tests for parse_experience()."""

    def test_linkedin_shaped_mapping(self):
        entry = parse_experience(make_experience(responsibilities=["- Built things", "  "]))
        self.assertEqual(entry, ExperienceEntry("Acme", "Engineer", "2020", "2021", ("Built things",)))

    def test_alternate_keys(self):
        entry = parse_experience({"companyName": "Globex", "position": "Lead", "from": "2019", "to": "Present"})
        self.assertEqual((entry.company, entry.title, entry.start_date, entry.end_date),
                         ("Globex", "Lead", "2019", "Present"))
        self.assertEqual(entry.sort_value, math.inf)

    def test_string_with_dates(self):
        entry = parse_experience("Senior Engineer at Globex (Jan 2021 – Present)")
        self.assertEqual(entry.company, "Globex")
        self.assertEqual(entry.title, "Senior Engineer")
        self.assertEqual(entry.start_date, "Jan 2021")
        self.assertEqual(entry.end_date, "Present")

    def test_mapping_fields_are_not_reparsed(self):
        entry = parse_experience(make_experience("Acme", "Engineer (Contract)"))
        self.assertEqual(entry, ExperienceEntry("Acme", "Engineer (Contract)", "2020", "2021"))
        self.assertEqual(entry.render(), "Engineer (Contract) at Acme (2020 – 2021)")

    def test_title_only_mapping_is_reparsed(self):
        entry = parse_experience({"title": "Dev at Foo (2019 - 2020)"})
        self.assertEqual((entry.company, entry.title, entry.start_date), ("Foo", "Dev", "2019"))

    def test_text_without_at_is_title(self):
        entry = parse_experience("Acme Corp | Developer")
        self.assertEqual(entry.title, "Acme Corp | Developer")
        self.assertFalse(entry.has_anchor)

    def test_unsupported_shapes(self):
        self.assertIsNone(parse_experience(""))
        self.assertIsNone(parse_experience(42))

    def test_render_and_key(self):
        entry = ExperienceEntry("Acme", "Engineer", "2020", "2021")
        self.assertEqual(entry.render(), "Engineer at Acme (2020 – 2021)")
        self.assertEqual(entry.key, "acme|engineer|2020|2021")
        self.assertEqual(entry.to_dict()["startDate"], "2020")


class TestFlattenRoles(unittest.TestCase):
    """Tests for flatten_roles() and normalize_experience()."""

    def test_roles_inherit_parent_fields(self):
        records = flatten_roles([
            {"companyName": "Globex", "location": "Remote", "roles": [
                {"title": "Lead", "startDate": "2021"},
                {"title": "Contractor", "company": "Other", "responsibilities": ["Audits"]},
            ]},
            "Dev at Acme (2018 - 2019)",
        ])
        self.assertEqual(len(records), 3)
        self.assertEqual(records[0]["company"], "Globex")
        self.assertEqual(records[0]["location"], "Remote")
        self.assertEqual(records[1]["company"], "Other")
        self.assertEqual(records[1]["responsibilities"], ["Audits"])
        self.assertEqual(records[2], "Dev at Acme (2018 - 2019)")

    def test_normalize_drops_empty_records(self):
        entries = normalize_experience([{"foo": "bar"}, make_experience(), None])
        self.assertEqual([e.company for e in entries], ["Acme"])


class TestParseEducation(unittest.TestCase):
    """Tests for parse_education()."""

    def test_mapping(self):
        entry = parse_education({
            "degree": "BSc", "fieldOfStudy": "Physics", "school": "MIT",
            "startDate": "2010", "endDate": "2014",
        })
        self.assertEqual(entry.entry, "BSc, Physics - MIT (2010 – 2014)")

    def test_string_strips_bullet(self):
        self.assertEqual(parse_education("- MSc Math").entry, "MSc Math")

    def test_empty(self):
        self.assertIsNone(parse_education({}))
        self.assertIsNone(parse_education("  "))


class TestParseCertification(unittest.TestCase):
    """Tests for parse_certification()."""

    def test_credly_mapping_with_url_in_any_field(self):
        cert = parse_certification({
            "credentialName": "CKA",
            "issuer": "CNCF",
            "badge": "https://www.credly.com/badges/x",
            "issueDate": "2022-05",
        })
        self.assertEqual(cert, CertificationEntry("CKA", "CNCF", "https://www.credly.com/badges/x", "2022-05"))

    def test_linkedin_mapping(self):
        cert = parse_certification(make_certification(url="credly.com/badges/y"))
        self.assertEqual(cert.url, "https://credly.com/badges/y")
        self.assertEqual(cert.label(), "AWS Certified Developer - Amazon")

    def test_text_with_parenthesised_provider_and_url(self):
        cert = parse_certification("AWS Certified Developer (Amazon) https://www.credly.com/badges/abc")
        self.assertEqual(cert.name, "AWS Certified Developer")
        self.assertEqual(cert.provider, "Amazon")
        self.assertEqual(cert.url, "https://www.credly.com/badges/abc")

    def test_text_separators(self):
        self.assertEqual(parse_certification("Terraform Associate – HashiCorp").provider, "HashiCorp")
        self.assertEqual(parse_certification("CKA | CNCF").provider, "CNCF")

    def test_hyphenated_name_stays_whole(self):
        cert = parse_certification("Red-Hat Certified Engineer")
        self.assertEqual(cert.name, "Red-Hat Certified Engineer")
        self.assertEqual(cert.provider, "")

    def test_key_is_case_insensitive(self):
        a = parse_certification("CKA - CNCF")
        b = parse_certification({"name": "cka", "provider": "cncf"})
        self.assertEqual(a.key, b.key)


class TestExtractFromText(unittest.TestCase):
    """Extraction from raw résumé text."""

    def test_extract_experience(self):
        entries = extract_experience(SAMPLE_RESUME_TEXT)
        self.assertEqual(len(entries), 2)
        first, second = entries
        self.assertEqual((first.title, first.company), ("Senior Engineer", "Globex"))
        self.assertEqual(first.responsibilities, ("Led the ingestion rewrite", "Cut batch latency in half"))
        self.assertEqual((second.company, second.start_date, second.end_date), ("Initech", "2018", "2020"))
        self.assertEqual(second.responsibilities, ("Maintained billing services",))

    def test_extract_experience_from_list(self):
        entries = extract_experience([make_experience(), "Just a title"])
        self.assertEqual(len(entries), 1)

    def test_extract_education(self):
        entries = extract_education(SAMPLE_RESUME_TEXT)
        self.assertEqual([e.entry for e in entries], ["B.S. Computer Science, State University, 2017"])

    def test_extract_certifications(self):
        certs = extract_certifications(SAMPLE_RESUME_TEXT)
        self.assertEqual([c.name for c in certs], ["AWS Certified Developer", "Certified Kubernetes Administrator"])
        self.assertEqual(certs[0].url, "https://www.credly.com/badges/abc")
        self.assertEqual(certs[1].provider, "CNCF")

    def test_extract_languages(self):
        self.assertEqual(extract_languages(SAMPLE_RESUME_TEXT), [
            LanguageEntry("English", "Native"),
            LanguageEntry("French", "Professional"),
        ])

    def test_empty_sources(self):
        self.assertEqual(extract_experience(""), [])
        self.assertEqual(extract_education(None), [])
        self.assertEqual(extract_certifications([]), [])
        self.assertEqual(extract_languages(""), [])


class TestParseLanguage(unittest.TestCase):
    """Tests for parse_language() and list input to extract_languages()."""

    def test_text_shapes(self):
        self.assertEqual(parse_language("Spanish (B2)"), LanguageEntry("Spanish", "B2"))
        self.assertEqual(parse_language("German: Fluent"), LanguageEntry("German", "Fluent"))
        self.assertEqual(parse_language("Italian"), LanguageEntry("Italian", ""))

    def test_mapping_keys(self):
        self.assertEqual(parse_language({"name": "Japanese", "level": "N2"}), LanguageEntry("Japanese", "N2"))
        self.assertEqual(
            parse_language({"language": "Polish"}).to_dict(), {"language": "Polish", "proficiency": ""}
        )

    def test_list_drops_nameless_entries(self):
        entries = extract_languages(["Dutch - Basic", {"proficiency": "Native"}, {}])
        self.assertEqual(entries, [LanguageEntry("Dutch", "Basic")])


if __name__ == "__main__":
    unittest.main()
