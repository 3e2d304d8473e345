"""
Ordering of contributed menus and menu items.

Contributions declare where their menus and items belong relative to existing
siblings (``after: <name>`` / ``before: <name>``). The sorter rearranges a list
that already contains the original and the contributed items so that these
constraints hold wherever possible.

The list is processed in two passes. The after-pass moves every item with an
``after`` reference directly behind the referenced item, the before-pass then
moves every item with a ``before`` reference directly in front of it. Each pass
repeats at most ``n - 1`` times and stops early once a round moves nothing.
Because the before-pass runs last, ``before`` wins when an item declares both.
The before-pass moves a single item, so items placed ``after`` it by the
after-pass stay behind. Sorting such a result again can give a different order.

Unknown references are ignored. Cyclic constraints have no valid order; the
bounded number of rounds guarantees termination and the result is whatever
order the last round produced.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Generic, Optional, Protocol, TypeVar

from leitstand_ui.model.extension_point import ExtensionPoint

logger = logging.getLogger(__name__)


class Named(Protocol):
    """Anything that can be positioned by the sorter."""

    @property
    def name(self) -> str: ...


T = TypeVar("T", bound=Named)


class ExtensionSorter(Generic[T]):
    """Reorders items according to their extension points."""

    def __init__(self, constraints: Mapping[T, Sequence[ExtensionPoint]], items: Sequence[T]):
        """
        Args:
            constraints: Extension points per item, processed in mapping order.
                Every key must be contained in ``items``.
            items: Current item order. The sorter works on a copy.
        """
        self._constraints = constraints
        self._items: list[T] = list(items)

    def sort(self) -> list[T]:
        """Return the items in an order that satisfies the constraints as far as possible."""
        self._run_pass(_AFTER)
        self._run_pass(_BEFORE)
        return self._items

    def index_of(self, name: Optional[str]) -> int:
        """Return the position of the item with the given name, or -1."""
        if name is None:
            return -1
        for i, item in enumerate(self._items):
            if item.name == name:
                return i
        return -1

    def _run_pass(self, direction: str) -> None:
        rounds = len(self._items) - 1
        for _ in range(rounds):
            moved = False
            for item, points in self._constraints.items():
                for point in points:
                    if self._apply(item.name, point, direction):
                        moved = True
            if not moved:
                return
        if rounds > 0:
            logger.debug("%s-pass did not settle within %d rounds", direction, rounds)

    def _apply(self, name: str, point: ExtensionPoint, direction: str) -> bool:
        reference = point.after if direction == _AFTER else point.before
        if reference is None or reference == name:
            return False

        ref = self.index_of(reference)
        pos = self.index_of(name)
        if ref < 0 or pos < 0:
            return False

        if direction == _AFTER:
            if pos == ref + 1:
                return False
            target = ref + 1
        else:
            if pos == ref - 1:
                return False
            target = ref

        item = self._items.pop(pos)
        if pos < target:
            # Removing the item shifted the reference one slot to the left.
            target -= 1
        self._items.insert(target, item)
        return True


_AFTER = "after"
_BEFORE = "before"


def sort_extensions(
    constraints: Mapping[T, Sequence[ExtensionPoint]], items: Sequence[T]
) -> list[T]:
    """Convenience wrapper around :class:`ExtensionSorter`."""
    return ExtensionSorter(constraints, items).sort()
