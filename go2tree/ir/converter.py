"""Converter — builds a GenericNode tree from a syntax tree without recursion.

The walk keeps an explicit stack of ``(parent, pending slots)`` frames. Every
syntax node is claimed in the cycle guard when it is popped, before it is
classified or expanded, so a node reachable from itself is emitted once and
the walk stops there. Stack depth is bounded by memory rather than by the
interpreter's recursion limit.
"""

from __future__ import annotations

import logging

from go2tree.ir.dispatcher import Dispatcher
from go2tree.ir.guard import CycleGuard
from go2tree.ir.models import GenericNode, Group

logger = logging.getLogger(__name__)


class Converter:
    """Drives the dispatcher over a whole syntax tree."""

    def __init__(self, dispatcher: Dispatcher | None = None):
        self.dispatcher = dispatcher or Dispatcher()

    @property
    def builder(self):
        return self.dispatcher.builder

    def convert(self, root, guard: CycleGuard | None = None) -> GenericNode:
        """Convert ``root`` and everything reachable from it.

        A fresh guard is used unless one is passed in. Passing a guard that has
        already claimed ``root`` is a caller error.
        """
        guard = guard if guard is not None else CycleGuard()
        if not guard.claim(root.id):
            raise ValueError(f"root node {root.type!r} was already converted by this guard")

        shape = self.dispatcher.classify(root)
        stack = [(shape.node, iter(shape.slots))]
        skipped = 0

        while stack:
            parent, pending = stack[-1]
            slot = next(pending, None)
            if slot is None:
                stack.pop()
                continue

            if isinstance(slot, Group):
                child = self.builder.append_child(parent, self.builder.start(slot.type))
                stack.append((child, iter(slot.slots)))
                continue

            if not guard.claim(slot.id):
                skipped += 1
                continue

            if self.dispatcher.is_transparent(slot):
                stack.append((parent, iter(self.dispatcher.expand(slot))))
                continue

            child_shape = self.dispatcher.classify(slot)
            self.builder.append_child(parent, child_shape.node)
            stack.append((child_shape.node, iter(child_shape.slots)))

        if skipped:
            logger.debug("Skipped %d already-converted node reference(s)", skipped)
        return shape.node
