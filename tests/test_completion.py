"""
Tests for prompt completion.
"""

import pytest

from splitledger.cli import completion
from splitledger.cli.completion import PrefixCompletion, completion_enabled


class TestPrefixCompletion:

    def test_first_match_in_history_order(self):
        provider = PrefixCompletion(["bob", "barbara", "alice"])
        assert provider.get("b") == "bob"
        assert provider.get("ba") == "barbara"
        assert provider.get("a") == "alice"

    def test_no_match(self):
        assert PrefixCompletion(["alice"]).get("z") is None

    def test_empty_input_suggests_first_option(self):
        assert PrefixCompletion(["dinner", "taxi"]).get("") == "dinner"

    def test_duplicates_and_blanks_dropped(self):
        provider = PrefixCompletion(["alice", "", "bob", "alice"])
        assert provider.options == ["alice", "bob"]


class FakeReadline:
    """Records what completion_enabled installs."""

    def __init__(self):
        self.completer = None
        self.delims = " \t\n`~!@#$%^&*()-=+[{]}\\|;:'\",<>/?"
        self.bindings = []

    def get_completer(self):
        return self.completer

    def set_completer(self, completer):
        self.completer = completer

    def get_completer_delims(self):
        return self.delims

    def set_completer_delims(self, delims):
        self.delims = delims

    def parse_and_bind(self, line):
        self.bindings.append(line)


@pytest.fixture
def fake_readline(monkeypatch):
    fake = FakeReadline()
    monkeypatch.setattr(completion, "readline", fake)
    return fake


class TestCompletionEnabled:

    def test_installs_and_restores(self, fake_readline):
        previous_delims = fake_readline.delims
        with completion_enabled(PrefixCompletion(["alice", "bob"])):
            complete = fake_readline.completer
            assert complete("b", 0) == "bob"
            assert complete("b", 1) is None
            assert fake_readline.delims == " \t\n"
            assert "tab: complete" in fake_readline.bindings

        assert fake_readline.completer is None
        assert fake_readline.delims == previous_delims

    def test_whole_line_uses_no_delimiters(self, fake_readline):
        with completion_enabled(PrefixCompletion(["dinner out"]), whole_line=True):
            assert fake_readline.delims == ""
            assert fake_readline.completer("dinner o", 0) == "dinner out"

    def test_restores_after_error(self, fake_readline):
        with pytest.raises(RuntimeError):
            with completion_enabled(PrefixCompletion([])):
                raise RuntimeError("prompt aborted")
        assert fake_readline.completer is None

    def test_without_readline(self, monkeypatch):
        monkeypatch.setattr(completion, "readline", None)
        with completion_enabled(PrefixCompletion(["alice"])):
            pass
