"""
splitledger/cli/completion.py

Prompt completion for the interactive `share` command.

A CompletionProvider maps a partial string to one suggested completion.
It knows nothing about the terminal; `completion_enabled` plugs a
provider into readline for the duration of one prompt. click.prompt
reads through input(), so readline completion applies to it.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

try:
    import readline
except ImportError:  # Windows: prompts still work, just without Tab completion
    readline = None


class CompletionProvider(ABC):
    """Maps a partial string to a suggested completion."""

    @abstractmethod
    def get(self, partial: str) -> Optional[str]:
        """Return the suggested completion for `partial`, or None."""
        pass


class PrefixCompletion(CompletionProvider):
    """
    Suggests the first known option that starts with the input.

    Options keep their history order; duplicates and blanks are dropped.
    """

    def __init__(self, options: Iterable[str]):
        self._options = list(dict.fromkeys(o for o in options if o))

    @property
    def options(self) -> list[str]:
        return list(self._options)

    def get(self, partial: str) -> Optional[str]:
        return next((o for o in self._options if o.startswith(partial)), None)


@contextmanager
def completion_enabled(
    provider: CompletionProvider,
    whole_line: bool = False,
) -> Iterator[None]:
    """
    Install `provider` as the readline completer while the block runs.

    Args:
        provider: Where suggestions come from
        whole_line: Complete the whole input (descriptions) instead of the
                    word under the cursor (space-separated names)
    """
    if readline is None:
        yield
        return

    previous_completer = readline.get_completer()
    previous_delims = readline.get_completer_delims()

    def complete(text: str, state: int) -> Optional[str]:
        return provider.get(text) if state == 0 else None

    readline.set_completer(complete)
    readline.set_completer_delims("" if whole_line else " \t\n")
    readline.parse_and_bind("tab: complete")
    try:
        yield
    finally:
        readline.set_completer(previous_completer)
        readline.set_completer_delims(previous_delims)
