"""Builder producing ``index -> Element`` maps for views.

Positions are slot indices of a ``rows`` x ``columns`` grid, counted row by
row from the top left corner.  The builder only assembles the mapping; pass
:meth:`Layout.build` to :meth:`View.define` or :meth:`View.update`.

Example::

    layout = Layout(3, 9).border(glass).set(confirm, 13)
    view.define(layout.build())
"""
from __future__ import annotations

from typing import Dict, Iterable, Mapping

from libraryapi.plugins import PLUGIN_MANAGER

from .element import Element

__all__ = ["Layout"]


class Layout:
    def __init__(self, rows: int, columns: int = 9) -> None:
        if rows <= 0 or columns <= 0:
            raise ValueError("Layouts need at least one row and one column.")
        self.rows = rows
        self.columns = columns
        self._elements: Dict[int, Element] = {}

    @classmethod
    def for_size(cls, size: int, columns: int = 9) -> "Layout":
        """Create a layout for an inventory of ``size`` slots."""

        if size <= 0 or size % columns:
            raise ValueError(f"Size {size} is not a whole number of {columns} slot rows.")
        return cls(size // columns, columns)

    @property
    def size(self) -> int:
        return self.rows * self.columns

    def index(self, row: int, column: int) -> int:
        if not (0 <= row < self.rows and 0 <= column < self.columns):
            raise ValueError(f"Position ({row}, {column}) is outside a {self.rows}x{self.columns} layout.")
        return row * self.columns + column

    def set(self, element: Element, *positions: int) -> "Layout":
        for position in positions:
            self._check(position)
            self._elements[position] = element
        return self

    def set_all(self, element: Element, positions: Iterable[int]) -> "Layout":
        return self.set(element, *positions)

    def add_all(self, elements: Mapping[int, Element]) -> "Layout":
        for position, element in elements.items():
            self.set(element, position)
        return self

    def row(self, element: Element, row: int) -> "Layout":
        return self.set(element, *(self.index(row, column) for column in range(self.columns)))

    def column(self, element: Element, column: int) -> "Layout":
        return self.set(element, *(self.index(row, column) for row in range(self.rows)))

    def border(self, element: Element) -> "Layout":
        """Surround the layout with ``element``."""

        self.row(element, 0).row(element, self.rows - 1)
        return self.column(element, 0).column(element, self.columns - 1)

    def checker(self, even: Element, odd: Element) -> "Layout":
        for row in range(self.rows):
            for column in range(self.columns):
                element = even if (row + column) % 2 == 0 else odd
                self.set(element, self.index(row, column))
        return self

    def fill(self, element: Element) -> "Layout":
        """Set ``element`` on every position that has nothing yet."""

        for position in range(self.size):
            self._elements.setdefault(position, element)
        return self

    def clear(self) -> "Layout":
        self._elements.clear()
        return self

    def build(self) -> Dict[int, Element]:
        return dict(self._elements)

    def _check(self, position: int) -> None:
        if not 0 <= position < self.size:
            raise ValueError(f"Position {position} is outside a {self.size} slot layout.")


PLUGIN_MANAGER.expose("gui_layout", Layout)
