"""Cycle guard — remembers which syntax nodes a conversion has already emitted."""

from __future__ import annotations

from collections.abc import Hashable


class CycleGuard:
    """Identity set scoped to a single conversion call.

    The first ``claim`` of an identity wins; every later claim of the same
    identity is refused, so shared or cyclic substructure is emitted once and
    the walk terminates.
    """

    def __init__(self):
        self._claimed: set[Hashable] = set()

    def claim(self, identity: Hashable) -> bool:
        if identity in self._claimed:
            return False
        self._claimed.add(identity)
        return True

    def __contains__(self, identity: Hashable) -> bool:
        return identity in self._claimed

    def __len__(self) -> int:
        return len(self._claimed)
