import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from models import AcronymEntry, SlashCommandRequest, SlashCommandResponse


def test_entry_format():
    assert AcronymEntry('PR', 'Pull Request').format() == 'PR: Pull Request'


def test_entry_is_immutable():
    entry = AcronymEntry('PR', 'Pull Request')
    with pytest.raises(AttributeError):
        entry.acronym = 'CI'


def test_request_from_form_keeps_known_fields():
    command = SlashCommandRequest.from_form(
        {'text': ' API ', 'user_id': 'U1', 'command': '/acronym', 'unknown': 'x'}
    )
    assert command.query == ' API '
    assert command.user_id == 'U1'
    assert command.command == '/acronym'
    assert command.team_id == ''
    assert not hasattr(command, 'unknown')


def test_response_defaults_to_ephemeral():
    assert SlashCommandResponse(text='hi').to_dict() == {
        'response_type': 'ephemeral',
        'text': 'hi',
    }
