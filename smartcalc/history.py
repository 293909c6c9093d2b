"""Calculation history for SmartCalc.

An append-only, in-memory log of results:
- One item per successful evaluation (keypad or solver)
- Newest items first
- Whole-log clear, no per-item edits or deletes
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from rich.markup import escape
from rich.table import Table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryItem:
    """A single calculation record."""

    id: str
    expression: str
    result: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    is_ai_generated: bool = False

    def __str__(self) -> str:
        return f"{self.expression} = {self.result}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "expression": self.expression,
            "result": self.result,
            "timestamp": self.timestamp.isoformat(),
            "is_ai_generated": self.is_ai_generated,
        }


class HistoryLog:
    """Manages calculation history for one session."""

    def __init__(self):
        self._items: List[HistoryItem] = []
        self._sequence = 0

    def _generate_id(self) -> str:
        """Generate next item ID.

        The sequence keeps counting across clears so IDs stay unique.
        """
        self._sequence += 1
        return f"H-{self._sequence:03d}"

    def append(
        self, expression: str, result: str, is_ai_generated: bool = False
    ) -> HistoryItem:
        """Record a calculation.

        Args:
            expression: What was computed, e.g. "2 + 3" or a solver query.
            result: Result text as shown on the display.
            is_ai_generated: True when the result came from the solver.

        Returns:
            The new history item.
        """
        item = HistoryItem(
            id=self._generate_id(),
            expression=expression,
            result=result,
            is_ai_generated=is_ai_generated,
        )
        self._items.insert(0, item)
        return item

    def clear(self) -> None:
        """Clear all history."""
        logger.debug("Clearing %d history items", len(self._items))
        self._items.clear()

    @property
    def items(self) -> List[HistoryItem]:
        """All items, newest first."""
        return list(self._items)

    @property
    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def get(self, item_id: str) -> Optional[HistoryItem]:
        """Get an item by ID."""
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def search(self, term: str) -> List[HistoryItem]:
        """Search history for expressions or results containing term."""
        return [
            item for item in self._items
            if term in item.expression or term in item.result
        ]

    def to_table(self) -> Table:
        """Build a rich table of the history, newest first."""
        table = Table(title="History", show_header=True)
        table.add_column("ID", style="dim")
        table.add_column("Expression")
        table.add_column("Result", justify="right", style="bold")
        table.add_column("Time", style="dim")
        table.add_column("Source")

        for item in self._items:
            table.add_row(
                item.id,
                escape(item.expression),
                escape(item.result),
                item.timestamp.astimezone().strftime("%H:%M:%S"),
                "[magenta]AI[/magenta]" if item.is_ai_generated else "keypad",
            )

        return table
