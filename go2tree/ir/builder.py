"""Tree builder — assembles GenericNode instances for the converter."""

from __future__ import annotations

from go2tree.ir.models import GenericNode


class TreeBuilder:
    """Creates output nodes and attaches children and comments in request order.

    Holds no state of its own; cycle handling lives in ``CycleGuard``.
    """

    def start(self, type_: str, name: str | None = None, value: str | None = None) -> GenericNode:
        return GenericNode(type=type_, name=name, value=value)

    def append_child(self, parent: GenericNode, child: GenericNode) -> GenericNode:
        parent.children.append(child)
        return child

    def add_comment(self, node: GenericNode, text: str) -> None:
        node.comments.append(text)
