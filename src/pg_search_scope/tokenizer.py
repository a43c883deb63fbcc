"""Search text tokenizer.

A term starts with a letter or digit and continues through letters, digits,
apostrophes, periods and ``@``. Everything else separates terms. Trailing
periods are sentence punctuation and are dropped, so ``"Ivan, Aurora st."``
yields ``Ivan``, ``Aurora`` and ``st`` while ``j.doe@example.com`` stays whole.
"""

import re

from loguru import logger

from pg_search_scope.ast import Term

# [^\W_] is a Unicode letter or digit (\w minus underscore)
TERM_PATTERN = re.compile(r"[^\W_](?:[^\W_]|['.@])*")


def tokenize(text: str | None) -> list[Term]:
    """Extract search terms from raw text, in order of appearance."""
    if not text:
        return []

    terms = [Term(match.group(0).rstrip(".")) for match in TERM_PATTERN.finditer(text)]
    logger.debug(f"tokenized {text!r} into {len(terms)} terms")
    return terms
