"""Dispatcher — classifies one syntax node against the declared kind schema.

The dispatcher never recurses. For each node it returns a ``Shape``: the new
output node (type, name, value and comments already set) and the ordered
list of child slots the converter still has to turn into children. A slot is
either a syntax node or a synthetic ``Group``.
"""

from __future__ import annotations

from go2tree.errors import UnsupportedNodeKind
from go2tree.ir import schema
from go2tree.ir.builder import TreeBuilder
from go2tree.ir.models import Group, Shape
from go2tree.ir.schema import Kind, Role, Synthetic


class Dispatcher:
    """Applies the kind schema to individual syntax nodes."""

    def __init__(self, builder: TreeBuilder | None = None, kinds: dict[str, Kind] | None = None, path: str = ""):
        self.builder = builder or TreeBuilder()
        self.kinds = kinds if kinds is not None else schema.KINDS
        self.path = path

    def kind_of(self, node) -> Kind:
        """Look up the declaration for a node, failing on undeclared kinds."""
        kind = self.kinds.get(node.type)
        if kind is None:
            line, column = _position(node)
            raise UnsupportedNodeKind(node.type, path=self.path, line=line, column=column)
        return kind

    def is_transparent(self, node) -> bool:
        return self.kind_of(node).role is Role.TRANSPARENT

    def classify(self, node) -> Shape:
        kind = self.kind_of(node)
        value = _text(node) if kind.role is Role.VALUE else None
        out = self.builder.start(kind.tag, name=self._name_of(node, kind), value=value)

        if kind.role is Role.COMMENT:
            self.builder.add_comment(out, _text(node))
            return Shape(out)
        if kind.role in (Role.LEAF, Role.VALUE):
            return Shape(out)
        if kind.role is Role.FIELDS:
            return Shape(out, self._field_slots(node, kind.fields))
        return Shape(out, self._sequence_slots(node, kind))

    def expand(self, node) -> list:
        """Child slots of a transparent node, to be spliced into its parent."""
        return self._sequence_slots(node, self.kind_of(node))

    # --- Slot collection ---

    def _field_slots(self, node, fields: tuple[str | Synthetic, ...]) -> list:
        slots: list = []
        for item in fields:
            if isinstance(item, Synthetic):
                slots.append(Group(item.tag, self._field_slots(node, item.fields)))
                continue
            for child in node.children_by_field_name(item):
                if child.type != schema.COMMENT:
                    slots.append(child)
        return slots

    def _sequence_slots(self, node, kind: Kind) -> list:
        slots: list = []
        run: list = []

        def flush():
            if run:
                slots.append(Group("comment-group", list(run)))
                run.clear()

        for child in node.named_children:
            if child.type == schema.COMMENT:
                if not kind.comment_bearing:
                    continue
                if run and child.start_point[0] > run[-1].end_point[0] + 1:
                    flush()
                run.append(child)
                continue
            flush()
            if child.type in kind.skip:
                continue
            if kind.statement_context and child.type in schema.DECLARATION_KINDS:
                slots.append(Group("declaration-statement", [child]))
            else:
                slots.append(child)
        flush()
        return slots

    def _name_of(self, node, kind: Kind) -> str | None:
        if kind.name_field:
            target = node.child_by_field_name(kind.name_field)
            return _text(target) if target is not None else None
        if kind.name_kind:
            for child in node.named_children:
                if child.type == kind.name_kind:
                    ident = child.named_children[0] if child.named_children else child
                    return _text(ident)
        return None


def _text(node) -> str:
    raw = node.text
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8")
    return str(raw)


def _position(node) -> tuple[int, int]:
    row, column = node.start_point
    return row + 1, column + 1
