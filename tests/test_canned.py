"""Tests for canned identity answers."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from canned import CannedResponseGate, CATEGORY_ORDER


@pytest.fixture
def gate():
    return CannedResponseGate(bot_name="Shiva", owner_name="xcho_")


class TestOwnerQuestions:
    @pytest.mark.parametrize("text", [
        "who is your owner?",
        "Who's your owner",
        "WHO OWNS YOU",
        "hey, who is xcho_?",
        "who is Huzaifa",
        "owner?",
    ])
    def test_owner_reply(self, gate, text):
        answer = gate.classify(text)
        assert answer is not None
        assert answer.category == "owner"
        assert answer.reply == "My owner is xcho_."


class TestApiQuestions:
    @pytest.mark.parametrize("text", [
        "what api do you run on",
        "Which API is this?",
        "tell me the api you use",
        "what's your backend ai api",
    ])
    def test_api_reply(self, gate, text):
        answer = gate.classify(text)
        assert answer.category == "api"
        assert answer.reply == "I use a private API by xcho_."


class TestNameQuestions:
    @pytest.mark.parametrize("text", ["what's your name?", "Who are you", "your name?"])
    def test_name_reply(self, gate, text):
        answer = gate.classify(text)
        assert answer.category == "name"
        assert answer.reply == "My name is Shiva."

    @pytest.mark.parametrize("text", [
        "why are you called that?",
        "where does your name come from",
        "what does Shiva mean",
        "who named you?",
    ])
    def test_name_origin_reply(self, gate, text):
        answer = gate.classify(text)
        assert answer.category == "name_origin"
        assert "xcho_" in answer.reply


class TestOrdering:
    def test_category_order(self):
        assert CATEGORY_ORDER == ("owner", "api", "name", "name_origin")

    def test_owner_beats_api(self, gate):
        assert gate.classify("who owns you and what api do you use").category == "owner"

    def test_api_beats_name(self, gate):
        assert gate.classify("who are you and which api do you use").category == "api"

    def test_custom_identity(self):
        gate = CannedResponseGate(bot_name="Nova", owner_name="sam.dev")
        assert gate.classify("who is sam.dev").reply == "My owner is sam.dev."
        assert gate.classify("what is your name").reply == "My name is Nova."


class TestNoMatch:
    @pytest.mark.parametrize("text", [
        "what's the weather like?",
        "write me a poem about cats",
        "",
    ])
    def test_no_match(self, gate, text):
        assert gate.classify(text) is None

    def test_none_text(self, gate):
        assert gate.classify(None) is None
