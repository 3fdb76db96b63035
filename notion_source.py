"""Fetch the acronym glossary from a Notion database.

The glossary is a Notion database whose rows carry a title property named
``Acronym`` and a rich-text property named ``Description``.  Only the first
page of query results is read.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests

from models import AcronymEntry

logger = logging.getLogger(__name__)

NOTION_API_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"

ACRONYM_PROPERTY = "Acronym"
DESCRIPTION_PROPERTY = "Description"


class GlossarySourceError(Exception):
    """Base class for failures reading the glossary."""


class SourceUnavailableError(GlossarySourceError):
    """The document store could not be reached or rejected the query."""


class MissingFieldError(GlossarySourceError):
    """A glossary row does not have the expected property shape."""


def _first_plain_text(properties: Dict[str, Any], name: str, kind: str) -> str:
    try:
        return properties[name][kind][0]["plain_text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise MissingFieldError(
            f"row has no {kind} text in property {name!r}"
        ) from exc


def parse_acronyms(payload: Dict[str, Any]) -> List[AcronymEntry]:
    """Turn a Notion database query response into glossary entries."""
    entries: List[AcronymEntry] = []
    for row in payload.get("results", []):
        if not isinstance(row, dict):
            raise MissingFieldError(f"row is not an object: {row!r}")
        properties = row.get("properties") or {}
        entries.append(
            AcronymEntry(
                acronym=_first_plain_text(properties, ACRONYM_PROPERTY, "title"),
                description=_first_plain_text(
                    properties, DESCRIPTION_PROPERTY, "rich_text"
                ),
            )
        )
    return entries


def _query_database(
    api_key: Optional[str],
    database_id: Optional[str],
    base_url: str,
    notion_version: str,
    timeout: float,
) -> Dict[str, Any]:
    try:
        resp = requests.post(
            f"{base_url.rstrip('/')}/databases/{database_id}/query",
            headers={
                "Authorization": f"Bearer {api_key}",
                "Notion-Version": notion_version,
            },
            json={},
            timeout=timeout,
        )
        resp.raise_for_status()
        payload = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("Notion query for database %s failed: %s", database_id, exc)
        raise SourceUnavailableError(str(exc)) from exc
    if not isinstance(payload, dict):
        logger.error("Notion query for database %s returned %r", database_id, payload)
        raise SourceUnavailableError("query response is not a JSON object")
    return payload


async def fetch_acronyms(
    api_key: Optional[str],
    database_id: Optional[str],
    *,
    base_url: str = NOTION_API_URL,
    notion_version: str = NOTION_VERSION,
    timeout: float = 30,
) -> List[AcronymEntry]:
    """Return every acronym on the first page of the glossary database.

    Missing credentials are sent as-is; Notion's rejection surfaces as
    :class:`SourceUnavailableError`.  Rows without the expected text raise
    :class:`MissingFieldError`.  Neither is retried.
    """

    payload = await asyncio.to_thread(
        _query_database, api_key, database_id, base_url, notion_version, timeout
    )
    if payload.get("has_more"):
        logger.warning(
            "Glossary database %s has more than one page; only the first is used",
            database_id,
        )
    entries = parse_acronyms(payload)
    logger.debug("Fetched %d acronyms from database %s", len(entries), database_id)
    return entries
