"""Rich table with the defaults every command uses."""

from __future__ import annotations

from typing import Any

from rich.table import Table as RichTable


class Table(RichTable):
    """Rich Table whose columns wrap long values instead of truncating them.

    Route descriptions (hosts, paths and methods joined together) easily
    outgrow a terminal column, so ``overflow`` defaults to ``"fold"``.
    """

    def add_column(self, *args: Any, **kwargs: Any) -> None:
        """Add a column with overflow="fold" unless told otherwise."""
        kwargs.setdefault("overflow", "fold")
        super().add_column(*args, **kwargs)
