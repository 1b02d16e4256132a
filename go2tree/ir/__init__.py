"""Generic syntax tree for Go sources.

The IR layer turns a language-specific parse tree (from tree-sitter-go) into
a uniform tree of ``GenericNode`` records that can be stored or transmitted
as structured data.

The layer is split into:
- the closed node-kind schema and the dispatcher that applies it
- the cycle guard and the worklist converter that drive the dispatcher
- the serializer that renders finished trees as JSON or YAML
"""
