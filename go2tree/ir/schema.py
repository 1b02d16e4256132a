"""Closed node-kind schema for the tree-sitter-go grammar.

Each grammar kind the converter accepts is declared here once, with its output
tag and the shape of its children. Kinds that are not declared are rejected by
the dispatcher, so a new grammar construct has to be added to ``KINDS`` before
it can be converted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Role(Enum):
    LEAF = "leaf"  # Type tag only
    VALUE = "value"  # Leaf carrying its source text
    FIELDS = "fields"  # Named grammar fields, in declared order
    SEQUENCE = "sequence"  # Named children, in source order
    TRANSPARENT = "transparent"  # Spliced into the parent
    COMMENT = "comment"


@dataclass(frozen=True)
class Synthetic:
    """Template for a generated node built from some of the parent's fields."""

    tag: str
    fields: tuple[str, ...]


@dataclass(frozen=True)
class Kind:
    """Declaration of one grammar node kind."""

    grammar: str
    tag: str
    role: Role
    fields: tuple[str | Synthetic, ...] = ()
    name_field: str = ""  # Field whose text becomes ``name``
    name_kind: str = ""  # Child kind whose identifier becomes ``name``
    skip: frozenset[str] = field(default_factory=frozenset)
    comment_bearing: bool = False
    statement_context: bool = False


COMMENT = "comment"
ERROR = "ERROR"

# Declaration groups that get wrapped in a declaration-statement when they
# appear where a statement is expected.
DECLARATION_KINDS = frozenset({"const_declaration", "var_declaration", "type_declaration"})

SIGNATURE = Synthetic("function-type", ("type_parameters", "parameters", "result"))
FUNC_TYPE = Synthetic("function-type", ("parameters", "result"))
VARIADIC_TYPE = Synthetic("ellipsis", ("type",))


def _leaf(grammar: str, tag: str = "") -> Kind:
    return Kind(grammar, tag or _tag(grammar), Role.LEAF)


def _value(grammar: str, tag: str = "") -> Kind:
    return Kind(grammar, tag or _tag(grammar), Role.VALUE)


def _fields(grammar: str, *fields: str | Synthetic, tag: str = "", name: str = "") -> Kind:
    return Kind(grammar, tag or _tag(grammar), Role.FIELDS, fields=fields, name_field=name)


def _seq(grammar: str, tag: str = "", comments: bool = False, statements: bool = False) -> Kind:
    return Kind(
        grammar,
        tag or _tag(grammar),
        Role.SEQUENCE,
        comment_bearing=comments,
        statement_context=statements,
    )


def _splice(grammar: str, comments: bool = False, statements: bool = False) -> Kind:
    return Kind(
        grammar,
        _tag(grammar),
        Role.TRANSPARENT,
        comment_bearing=comments,
        statement_context=statements,
    )


def _tag(grammar: str) -> str:
    return grammar.replace("_", "-")


_DECLARED = [
    # --- Source unit ---
    Kind(
        "source_file",
        "source-unit",
        Role.SEQUENCE,
        name_kind="package_clause",
        skip=frozenset({"package_clause"}),
        comment_bearing=True,
    ),
    # --- Identifier and literal leaves ---
    _value("identifier"),
    _value("field_identifier"),
    _value("type_identifier"),
    _value("package_identifier"),
    _value("label_name"),
    _value("blank_identifier"),
    _value("dot"),
    _value("int_literal"),
    _value("float_literal"),
    _value("imaginary_literal"),
    _value("rune_literal"),
    _value("interpreted_string_literal"),
    _value("raw_string_literal"),
    _value("true"),
    _value("false"),
    _value("nil"),
    _value("iota"),
    # --- Declarations ---
    _fields("function_declaration", "receiver", SIGNATURE, "body", tag="function-decl", name="name"),
    _fields("method_declaration", "receiver", SIGNATURE, "body", tag="function-decl", name="name"),
    _seq("import_declaration", tag="import-group", comments=True),
    _fields("import_spec", "name", "path"),
    _seq("const_declaration", tag="const-group", comments=True),
    _fields("const_spec", "name", "type", "value"),
    _seq("var_declaration", tag="var-group", comments=True),
    _fields("var_spec", "name", "type", "value"),
    _seq("type_declaration", tag="type-group", comments=True),
    _fields("type_spec", "type_parameters", "type", name="name"),
    _fields("type_alias", "type_parameters", "type", name="name"),
    _seq("type_parameter_list", tag="field-list"),
    _fields("type_parameter_declaration", "name", "type", tag="field"),
    _seq("type_constraint"),
    # --- Field lists ---
    _seq("parameter_list", tag="field-list", comments=True),
    _fields("parameter_declaration", "name", "type", tag="field"),
    _fields("variadic_parameter_declaration", "name", VARIADIC_TYPE, tag="field"),
    _seq("field_declaration_list", tag="field-list", comments=True),
    _fields("field_declaration", "name", "type", "tag", tag="field"),
    # --- Expressions ---
    _fields("call_expression", "function", "type_arguments", "arguments"),
    _seq("variadic_argument"),
    _fields("selector_expression", "operand", "field"),
    _fields("index_expression", "operand", "index"),
    _seq("type_instantiation_expression"),
    _fields("slice_expression", "operand", "start", "end", "capacity"),
    _fields("binary_expression", "left", "right"),
    _fields("unary_expression", "operand"),
    _seq("parenthesized_expression"),
    _fields("composite_literal", "type", "body"),
    _seq("literal_value", comments=True),
    _seq("keyed_element", tag="key-value"),
    _fields("type_assertion_expression", "operand", "type"),
    _fields("type_conversion_expression", "type", "operand"),
    _fields("func_literal", FUNC_TYPE, "body"),
    # --- Statements ---
    _seq("block", comments=True, statements=True),
    _seq("expression_statement"),
    _fields("send_statement", "channel", "value"),
    _seq("receive_statement"),
    _seq("inc_statement"),
    _seq("dec_statement"),
    _fields("assignment_statement", "left", "right"),
    _fields("short_var_declaration", "left", "right"),
    _seq("labeled_statement"),
    _seq("empty_labeled_statement", tag="labeled-statement"),
    _seq("go_statement"),
    _seq("defer_statement"),
    _seq("return_statement"),
    _fields("if_statement", "initializer", "condition", "consequence", "alternative"),
    _seq("for_statement"),
    _fields("for_clause", "initializer", "condition", "update"),
    _fields("range_clause", "left", "right"),
    _seq("expression_switch_statement", comments=True),
    _seq("type_switch_statement", comments=True),
    _seq("select_statement", comments=True),
    _seq("expression_case", comments=True, statements=True),
    _seq("type_case", comments=True, statements=True),
    _seq("default_case", comments=True, statements=True),
    _seq("communication_case", comments=True, statements=True),
    _seq("break_statement"),
    _seq("continue_statement"),
    _seq("goto_statement"),
    _leaf("fallthrough_statement"),
    _leaf("empty_statement"),
    _leaf(ERROR, tag="bad-node"),
    # --- Types ---
    _seq("struct_type"),
    _seq("interface_type", comments=True),
    _fields("method_elem", FUNC_TYPE, name="name"),
    _seq("type_elem"),
    _fields("function_type", "parameters", "result"),
    _fields("array_type", "length", "element"),
    _fields("implicit_length_array_type", "element"),
    _fields("slice_type", "element"),
    _fields("map_type", "key", "value"),
    _fields("channel_type", "value"),
    _seq("pointer_type"),
    _fields("qualified_type", "package", "name"),
    _fields("generic_type", "type", "type_arguments"),
    _seq("type_arguments"),
    _seq("negated_type"),
    _seq("parenthesized_type"),
    # --- Comments ---
    Kind(COMMENT, "comment", Role.COMMENT),
    # --- Spliced into their parent ---
    _splice("expression_list"),
    _splice("argument_list"),
    _splice("literal_element"),
    _splice("statement_list", comments=True, statements=True),
    _splice("import_spec_list", comments=True),
    _splice("var_spec_list", comments=True),
]

KINDS: dict[str, Kind] = {kind.grammar: kind for kind in _DECLARED}


def lookup(grammar: str) -> Kind | None:
    """Return the declaration for a grammar kind, or None when undeclared."""
    return KINDS.get(grammar)
