"""Tests for the wildcard policy."""

import pytest

from pg_search_scope.ast import Term, Wildcard
from pg_search_scope.wildcard import apply_wildcard

TERMS = [Term("Ivan"), Term("Aurora"), Term("st")]


class TestApplyWildcard:
    def test_none_leaves_terms_unchanged(self):
        assert apply_wildcard(TERMS, Wildcard.NONE) == TERMS

    def test_all_marks_every_term(self):
        result = apply_wildcard(TERMS, Wildcard.ALL)
        assert [str(term) for term in result] == ["Ivan:*", "Aurora:*", "st:*"]

    def test_last_marks_only_final_term(self):
        result = apply_wildcard(TERMS, Wildcard.LAST)
        assert [str(term) for term in result] == ["Ivan", "Aurora", "st:*"]

    def test_last_with_single_term(self):
        assert apply_wildcard([Term("Ivan")], Wildcard.LAST) == [Term("Ivan", prefix=True)]

    def test_marks_are_not_doubled(self):
        """Applying a policy twice still marks each term once."""
        once = apply_wildcard(TERMS, Wildcard.ALL)
        twice = apply_wildcard(once, Wildcard.ALL)
        assert twice == once
        assert [str(term) for term in twice] == ["Ivan:*", "Aurora:*", "st:*"]

    def test_input_is_not_modified(self):
        terms = list(TERMS)
        apply_wildcard(terms, Wildcard.LAST)
        assert terms == TERMS

    @pytest.mark.parametrize("policy", list(Wildcard))
    def test_empty_input(self, policy):
        assert apply_wildcard([], policy) == []
