"""Helper utilities for tests."""

from pathlib import Path
import sqlite3
from typing import Iterator, List, Optional

from db.migrator import apply_pending_migrations
from llm.providers.base import CompletionProvider, ProviderError


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    apply_pending_migrations(conn, migrations_dir)


class FakeProvider(CompletionProvider):
    """Completion provider that replays canned replies.

    Args:
        reply: Text returned by ``complete``; also streamed by
            ``complete_streaming`` unless ``fragments`` is given.
        fragments: Explicit fragments for ``complete_streaming``.
        error: If set, raised by both methods (after ``fail_after``
            fragments when streaming).
        fail_after: Number of fragments streamed before ``error`` is raised.
    """

    def __init__(
        self,
        reply: str = "",
        fragments: Optional[List[str]] = None,
        error: Optional[Exception] = None,
        fail_after: int = 0,
    ):
        self.reply = reply
        self.fragments = fragments if fragments is not None else [reply]
        self.error = error
        self.fail_after = fail_after
        self.prompts: List[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply

    def complete_streaming(self, prompt: str) -> Iterator[str]:
        self.prompts.append(prompt)
        for i, fragment in enumerate(self.fragments):
            if self.error and i >= self.fail_after:
                raise self.error
            yield fragment
        if self.error:
            raise self.error


def provider_error(message: str = "connection refused") -> ProviderError:
    return ProviderError(message)
