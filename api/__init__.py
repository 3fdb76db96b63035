"""API blueprint for the acronym slash command.

Slack posts the ``/acronym`` command here as a form-encoded payload; the
reply is an ephemeral message listing the matching glossary entries.
"""

from __future__ import annotations

from typing import List, Optional

from flask import Blueprint, current_app, jsonify, request

from models import SlashCommandRequest, SlashCommandResponse
from notion_source import fetch_acronyms
from search_index import build_index, search


api_bp = Blueprint("api", __name__, url_prefix="/api")


async def search_acronyms(query: str) -> Optional[List[str]]:
    """Search the glossary and return formatted lines, or ``None`` if empty."""
    config = current_app.config
    acronyms = await fetch_acronyms(
        config.get("NOTION_API_KEY"),
        config.get("NOTION_ACRONYM_DATABASE_ID"),
        base_url=config["NOTION_API_URL"],
        notion_version=config["NOTION_VERSION"],
        timeout=config["NOTION_TIMEOUT"],
    )
    with build_index(acronyms) as index:
        results = search(index, query)
    if results:
        return [entry.format() for entry in results]
    return None


async def handle(command: SlashCommandRequest) -> SlashCommandResponse:
    query = command.query
    current_app.logger.debug("Acronym lookup for %r from %s", query, command.user_id)
    lines = await search_acronyms(query)
    current_app.logger.info(
        "Acronym lookup for %r: %d matches", query, len(lines or [])
    )
    text = "\n".join(lines) if lines else f"No matches found for {query}"
    return SlashCommandResponse(text=text)


@api_bp.route("/acronym", methods=["POST"])
async def acronym():
    """Answer the ``/acronym`` slash command."""
    command = SlashCommandRequest.from_form(request.form)
    response = await handle(command)
    return jsonify(response.to_dict()), 200


__all__ = ["api_bp", "handle", "search_acronyms"]
