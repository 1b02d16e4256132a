"""Serializer — renders a finished GenericNode tree as a structured document.

Both formats are produced with an explicit stack over the tree, so document
depth is bounded by memory rather than by the interpreter's recursion limit.
JSON text is assembled directly in the layout ``json.dumps(indent=...)``
produces; YAML goes through PyYAML's event emitter, which is not recursive.
"""

from __future__ import annotations

import json

import yaml

from go2tree.errors import EncodeError
from go2tree.ir.models import GenericNode

FORMATS = {
    "json": ".json",
    "yaml": ".yaml",
}

_STR_TAG = "tag:yaml.org,2002:str"
_RESOLVER = yaml.resolver.Resolver()


class Serializer:
    """Renders one document per tree, in JSON or YAML."""

    def __init__(self, fmt: str = "json", indent: int = 2):
        if fmt not in FORMATS:
            raise ValueError(f"Unknown output format '{fmt}'. Must be one of: {sorted(FORMATS)}")
        self.fmt = fmt
        self.indent = indent

    @property
    def suffix(self) -> str:
        return FORMATS[self.fmt]

    def render(self, tree: GenericNode) -> str:
        try:
            if self.fmt == "yaml":
                return yaml.emit(
                    _yaml_events(tree),
                    Dumper=yaml.SafeDumper,
                    indent=self.indent,
                    allow_unicode=True,
                )
            return _json_text(tree, self.indent)
        except (TypeError, ValueError, yaml.YAMLError) as e:
            raise EncodeError(f"Could not render {tree.type} tree as {self.fmt}: {e}") from e


def _json_text(tree: GenericNode, indent: int) -> str:
    step = " " * indent
    parts: list[str] = []
    # Entries are nodes still to open, or literal text closing a node
    stack: list[tuple[GenericNode | str, int]] = [(tree, 0)]
    while stack:
        item, depth = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        inner = "\n" + step * (depth + 1)
        close = "\n" + step * depth + "}"
        head = []
        if item.name is not None:
            head.append(f'"name": {_json_scalar(item.name)}')
        head.append(f'"type": {_json_scalar(item.type)}')
        tail = []
        if item.value is not None:
            tail.append(f'"value": {_json_scalar(item.value)}')
        if item.comments:
            nested = "\n" + step * (depth + 2)
            lines = ",".join(nested + _json_scalar(c) for c in item.comments)
            tail.append(f'"comments": [{lines}{inner}]')

        if not item.children:
            parts.append("{" + inner + ("," + inner).join(head + tail) + close)
            continue

        parts.append("{" + inner + ("," + inner).join(head) + "," + inner + '"children": [')
        stack.append((inner + "]" + "".join("," + inner + t for t in tail) + close, 0))
        lead = "\n" + step * (depth + 2)
        for i in range(len(item.children) - 1, -1, -1):
            stack.append((item.children[i], depth + 2))
            stack.append((("," if i else "") + lead, 0))

    parts.append("\n")
    return "".join(parts)


def _json_scalar(value) -> str:
    return json.dumps(value, ensure_ascii=False)


def _yaml_events(tree: GenericNode):
    yield yaml.StreamStartEvent()
    yield yaml.DocumentStartEvent(explicit=False)

    stack: list[GenericNode | yaml.Event] = [tree]
    while stack:
        item = stack.pop()
        if isinstance(item, yaml.Event):
            yield item
            continue

        yield yaml.MappingStartEvent(None, None, True, flow_style=False)
        if item.name is not None:
            yield _yaml_scalar("name")
            yield _yaml_scalar(item.name)
        yield _yaml_scalar("type")
        yield _yaml_scalar(item.type)

        tail: list[yaml.Event] = []
        if item.value is not None:
            tail += [_yaml_scalar("value"), _yaml_scalar(item.value)]
        if item.comments:
            tail.append(_yaml_scalar("comments"))
            tail.append(yaml.SequenceStartEvent(None, None, True, flow_style=False))
            tail += [_yaml_scalar(c) for c in item.comments]
            tail.append(yaml.SequenceEndEvent())
        tail.append(yaml.MappingEndEvent())

        if item.children:
            yield _yaml_scalar("children")
            yield yaml.SequenceStartEvent(None, None, True, flow_style=False)
            tail.insert(0, yaml.SequenceEndEvent())
        stack.extend(reversed(tail))
        stack.extend(reversed(item.children))

    yield yaml.DocumentEndEvent(explicit=False)
    yield yaml.StreamEndEvent()


def _yaml_scalar(value) -> yaml.ScalarEvent:
    if not isinstance(value, str):
        raise yaml.representer.RepresenterError(f"cannot represent an object: {value!r}")
    # Plain style only where the text would not load back as another type
    plain = _RESOLVER.resolve(yaml.ScalarNode, value, (True, False)) == _STR_TAG
    return yaml.ScalarEvent(None, None, (plain, True), value)
