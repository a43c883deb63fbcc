"""Wildcard (prefix match) policy for search terms."""

from typing import Sequence

from pg_search_scope.ast import Term, Wildcard


def apply_wildcard(terms: Sequence[Term], policy: Wildcard) -> list[Term]:
    """Mark terms as prefix matches according to the wildcard policy.

    Args:
        terms: Terms produced by the tokenizer
        policy: NONE leaves terms alone, ALL marks every term,
            LAST marks only the final term

    Returns:
        A new list of terms; the input is not modified
    """
    result = list(terms)
    if not result:
        return result

    if policy is Wildcard.ALL:
        return [term.mark_prefix() for term in result]
    if policy is Wildcard.LAST:
        result[-1] = result[-1].mark_prefix()
    return result
