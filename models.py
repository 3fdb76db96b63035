"""Data types for the acronym slash command.

Everything here lives for a single request: the glossary entries are
fetched fresh, the slash-command payload is parsed from the inbound form and
the response is serialised back to Slack as JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping


EPHEMERAL = "ephemeral"
IN_CHANNEL = "in_channel"


@dataclass(frozen=True)
class AcronymEntry:
    acronym: str
    description: str

    def format(self) -> str:
        """Return the entry as a ``"<acronym>: <description>"`` chat line."""
        return f"{self.acronym}: {self.description}"


@dataclass
class SlashCommandRequest:
    """Payload Slack posts to the command URL.

    Only ``text`` drives the search; the remaining fields are kept as
    received so they can be logged or passed on.
    """

    token: str = ""
    team_id: str = ""
    team_domain: str = ""
    enterprise_id: str = ""
    enterprise_name: str = ""
    channel_id: str = ""
    channel_name: str = ""
    user_id: str = ""
    user_name: str = ""
    command: str = ""
    text: str = ""
    response_url: str = ""
    trigger_id: str = ""
    api_app_id: str = ""

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "SlashCommandRequest":
        names = {f.name for f in fields(cls)}
        return cls(**{k: form[k] for k in names if k in form})

    @property
    def query(self) -> str:
        return self.text


@dataclass
class SlashCommandResponse:
    text: str
    response_type: str = EPHEMERAL

    def to_dict(self) -> Dict[str, str]:
        return {"response_type": self.response_type, "text": self.text}
