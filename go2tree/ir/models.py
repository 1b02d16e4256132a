"""IR data models — the generic, language-independent output tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class GenericNode:
    """One node of the generic tree.

    ``type`` is always set. ``name``, ``value``, ``children`` and ``comments``
    are optional and dropped from the serialized form when unset or empty.
    """

    type: str
    name: str | None = None
    value: str | None = None
    children: list[GenericNode] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)

    def walk(self):
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def count(self) -> int:
        return sum(1 for _ in self.walk())

    def find_all(self, type_: str) -> list[GenericNode]:
        return [n for n in self.walk() if n.type == type_]

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain dicts, omitting empty optional fields.

        Keys come out in the order name, type, children, value, comments.
        """
        # Post-order without recursion: each node's dict is finished only after
        # all of its children have been.
        done: dict[int, dict[str, Any]] = {}
        stack: list[tuple[GenericNode, bool]] = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if not expanded:
                stack.append((node, True))
                stack.extend((child, False) for child in reversed(node.children))
                continue
            data: dict[str, Any] = {}
            if node.name is not None:
                data["name"] = node.name
            data["type"] = node.type
            if node.children:
                data["children"] = [done[id(child)] for child in node.children]
            if node.value is not None:
                data["value"] = node.value
            if node.comments:
                data["comments"] = list(node.comments)
            done[id(node)] = data
        return done[id(self)]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GenericNode:
        """Rebuild a tree from the output of ``to_dict``."""
        root = cls(type=data["type"], name=data.get("name"), value=data.get("value"))
        root.comments = list(data.get("comments", []))
        stack = [(root, data)]
        while stack:
            node, raw = stack.pop()
            for child_raw in raw.get("children", []):
                child = cls(
                    type=child_raw["type"],
                    name=child_raw.get("name"),
                    value=child_raw.get("value"),
                    comments=list(child_raw.get("comments", [])),
                )
                node.children.append(child)
                stack.append((child, child_raw))
        return root


@dataclass
class Group:
    """A synthetic output node with no source identity.

    Produced by the dispatcher for generated groupings such as a function
    signature or a run of adjacent comments. ``slots`` are converted into its
    children like those of any other node.
    """

    type: str
    slots: list[Any] = field(default_factory=list)


@dataclass
class Shape:
    """Result of classifying one syntax node."""

    node: GenericNode
    slots: list[Any] = field(default_factory=list)
