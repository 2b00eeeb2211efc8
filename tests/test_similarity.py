"""Tests for wayfinder.matching.similarity."""

import pytest

from wayfinder.matching.similarity import (
    contains,
    levenshtein,
    matches,
    normalize,
    similarity,
    split_words,
)


class TestPrimitives:
    def test_normalize(self):
        assert normalize("My_File-Name.v2 ") == "myfilenamev2"
        assert normalize("  ") == ""

    def test_split_words(self):
        assert split_words("year-end_review.final") == ["year", "end", "review", "final"]
        assert split_words("  work   report ") == ["work", "report"]
        assert split_words("") == []

    def test_levenshtein(self):
        assert levenshtein("kitten", "sitting") == 3
        assert levenshtein("", "abc") == 3
        assert levenshtein("abc", "") == 3
        assert levenshtein("abc", "abc") == 0

    def test_levenshtein_is_symmetric(self):
        assert levenshtein("flaw", "lawn") == levenshtein("lawn", "flaw") == 2

    def test_similarity(self):
        assert similarity("report", "report") == 1.0
        assert similarity("raport", "report") == pytest.approx(5 / 6)
        assert similarity("", "") == 1.0
        assert similarity("abc", "") == 0.0

    def test_similarity_ignores_case(self):
        assert similarity("REPORT", "report") == 1.0


class TestContains:
    def test_either_direction(self):
        assert contains("work report", "report")
        assert contains("report", "work report")

    def test_normalized(self):
        assert contains("my_work.report", "work report")

    def test_empty_never_contained(self):
        assert not contains("", "report")
        assert not contains("report", "   ")
        assert not contains("---", "report")


class TestMatches:
    def test_direct_substring(self):
        assert matches("work report", "report")

    def test_case_insensitive(self):
        assert matches("Vacation Photos", "vacation photos")

    def test_query_inside_label(self):
        assert matches("report", "work report")

    def test_normalized_substring(self):
        assert matches("vacation-photos", "vacation photos")

    def test_multi_word_all_present(self):
        assert matches("photos from the vacation", "vacation photos")

    def test_multi_word_missing_word(self):
        assert not matches("photos of the beach", "vacation photos")

    def test_fuzzy_typo(self):
        assert matches("raport", "report")

    def test_fuzzy_respects_threshold(self):
        assert not matches("raport", "report", threshold=0.9)

    def test_unrelated(self):
        assert not matches("zzqx", "development work")
        assert not matches("xyz", "q")

    def test_empty_query(self):
        assert not matches("", "report")
        assert not matches("   ", "report")
        assert not matches("report", "")
        assert not matches("---", "report")

    def test_deterministic(self):
        results = {matches("vacation fotos", "vacation photos") for _ in range(10)}
        assert len(results) == 1


class TestFuzzyBoundary:
    def test_exactly_seventy_percent_matches(self):
        assert similarity("abcdefghij", "abcdefgxyz") == 0.7
        assert matches("abcdefghij", "abcdefgxyz")

    def test_seventy_percent_long_strings(self):
        text = "a" * 70 + "b" * 30
        assert similarity(text, "a" * 100) == 0.7
        assert matches(text, "a" * 100)

    def test_sixty_nine_percent_does_not_match(self):
        text = "a" * 69 + "b" * 31
        assert similarity(text, "a" * 100) == pytest.approx(0.69)
        assert not matches(text, "a" * 100)
