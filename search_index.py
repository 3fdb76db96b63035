"""In-memory full-text index over the acronym glossary.

A fresh index is built for every request: an SQLite FTS5 table in a private
in-memory database, searched with typo-tolerant query expansion.  Hits are
ranked in tiers (exact acronym, fuzzy acronym, exact description, fuzzy
description) and by ``bm25`` within a tier, so a hit on the acronym itself
always outranks a hit found only in a description.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Set

from sqlalchemy import create_engine, text

from models import AcronymEntry
from search_utils import FUZZY_DISTANCE, expand_fuzzy, match_expression, split_terms

logger = logging.getLogger(__name__)

# bm25 column weights; acronym matches count twice as much as description
# matches.
ACRONYM_BOOST = 2.0
DESCRIPTION_BOOST = 1.0


class SearchIndex:
    """FTS5 table keyed by a sequential rowid assigned at build time.

    The rowid is only there because every indexed row needs a unique key;
    it never leaves this class.
    """

    def __init__(self) -> None:
        self._engine = create_engine("sqlite://")
        self._conn = self._engine.connect()
        try:
            self._conn.execute(
                text(
                    "CREATE VIRTUAL TABLE acronyms USING fts5("
                    "acronym, description, "
                    "tokenize='unicode61 remove_diacritics 0')"
                )
            )
            self._conn.execute(
                text(
                    "CREATE VIRTUAL TABLE acronyms_vocab "
                    "USING fts5vocab(acronyms, 'row')"
                )
            )
        except Exception:
            self.close()
            raise

    def add_all(self, entries: Iterable[AcronymEntry]) -> None:
        rows = [
            {"id": i, "acronym": e.acronym, "description": e.description}
            for i, e in enumerate(entries, start=1)
        ]
        if rows:
            self._conn.execute(
                text(
                    "INSERT INTO acronyms (rowid, acronym, description) "
                    "VALUES (:id, :acronym, :description)"
                ),
                rows,
            )
        self._conn.commit()

    def vocabulary(self) -> Set[str]:
        """Return every distinct term in the index."""
        return {
            row[0]
            for row in self._conn.execute(text("SELECT term FROM acronyms_vocab"))
        }

    def _matching_rowids(self, match: str) -> Set[int]:
        return {
            row[0]
            for row in self._conn.execute(
                text("SELECT rowid FROM acronyms WHERE acronyms MATCH :q"),
                {"q": match},
            )
        }

    def search(self, query: str) -> List[AcronymEntry]:
        vocabulary = self.vocabulary()
        match = expand_fuzzy(query, vocabulary, FUZZY_DISTANCE)
        if not match:
            return []
        exact, fuzzy = split_terms(query, vocabulary, FUZZY_DISTANCE)
        tiers = [
            match_expression(exact, "acronym"),
            match_expression(fuzzy, "acronym"),
            match_expression(exact, "description"),
            match_expression(fuzzy, "description"),
        ]
        tier_of = {}
        for tier, expression in enumerate(tiers):
            if expression:
                for rowid in self._matching_rowids(expression):
                    tier_of.setdefault(rowid, tier)

        rows = self._conn.execute(
            text(
                "SELECT rowid, acronym, description, "
                f"bm25(acronyms, {ACRONYM_BOOST}, {DESCRIPTION_BOOST}) "
                "FROM acronyms WHERE acronyms MATCH :q"
            ),
            {"q": match},
        ).all()
        # bm25() is lower for better matches.
        rows.sort(key=lambda r: (tier_of.get(r[0], len(tiers)), r[3], r[0]))
        return [AcronymEntry(acronym=r[1], description=r[2]) for r in rows]

    def close(self) -> None:
        self._conn.close()
        self._engine.dispose()

    def __enter__(self) -> "SearchIndex":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def build_index(entries: Iterable[AcronymEntry]) -> SearchIndex:
    """Index the acronym and description of every entry."""
    index = SearchIndex()
    index.add_all(entries)
    return index


def search(index: SearchIndex, query: str) -> List[AcronymEntry]:
    """Return the entries matching ``query``, best match first.

    Ties in relevance keep glossary order.
    """

    hits = index.search(query)
    logger.debug("Query %r matched %d acronyms", query, len(hits))
    return hits
