"""Utilities for expanding search queries with near-miss spellings.

FTS5 only matches whole tokens exactly, so typo tolerance is added before the
query reaches the index: every word in the query is replaced with an ``OR``
group of the indexed terms that lie within a small edit distance of it.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from rapidfuzz.distance import Levenshtein

# Maximum number of single-character edits between a query word and an
# indexed term for the two to match.
FUZZY_DISTANCE = 1

# Same split as the FTS5 ``unicode61`` tokenizer: runs of letters and digits.
TOKEN_RE = re.compile(r"[^\W_]+")


def tokenize(query: str) -> List[str]:
    """Split ``query`` into lower-cased, de-duplicated words."""
    return list(dict.fromkeys(t.lower() for t in TOKEN_RE.findall(query)))


def fuzzy_terms(
    token: str, vocabulary: Iterable[str], max_distance: int = FUZZY_DISTANCE
) -> List[str]:
    """Return the vocabulary terms within ``max_distance`` edits of ``token``."""
    return sorted(
        term
        for term in vocabulary
        if Levenshtein.distance(token, term, score_cutoff=max_distance)
        <= max_distance
    )


def split_terms(
    query: str, vocabulary: Iterable[str], max_distance: int = FUZZY_DISTANCE
) -> Tuple[List[str], List[str]]:
    """Return ``(exact, fuzzy)`` vocabulary terms for the words in ``query``.

    ``exact`` holds the query words that are indexed as-is; ``fuzzy`` holds
    the other candidates within ``max_distance`` edits of some query word.
    """

    vocabulary = set(vocabulary)
    exact: List[str] = []
    fuzzy: List[str] = []
    for token in tokenize(query):
        for term in fuzzy_terms(token, vocabulary, max_distance):
            if term == token:
                exact.append(term)
            else:
                fuzzy.append(term)
    exact = list(dict.fromkeys(exact))
    fuzzy = [t for t in dict.fromkeys(fuzzy) if t not in exact]
    return exact, fuzzy


def match_expression(terms: Iterable[str], column: Optional[str] = None) -> str:
    """Build an FTS5 ``OR`` group of ``terms``, optionally limited to a column."""
    terms = list(terms)
    if not terms:
        return ""
    prefix = f"{column} : " if column else ""
    return "(" + " OR ".join(f'{prefix}"{term}"' for term in terms) + ")"


def expand_fuzzy(
    query: str, vocabulary: Iterable[str], max_distance: int = FUZZY_DISTANCE
) -> str:
    """Expand a search query into an FTS5 ``MATCH`` expression.

    Each word becomes a parenthesised ``OR`` group of its fuzzy candidates and
    the groups are joined with ``OR``, so a row matching any word is a hit.
    Words without a candidate are dropped; an empty string means nothing in
    the vocabulary can match.
    """

    vocabulary = list(vocabulary)
    parts: List[str] = []
    for token in tokenize(query):
        group = match_expression(fuzzy_terms(token, vocabulary, max_distance))
        if group:
            parts.append(group)
    return " OR ".join(parts)
