"""End-to-end conversion tests on real Go source, parsed with tree-sitter-go."""

import pytest

from go2tree import convert_source
from go2tree.errors import ParseError
from go2tree.ir.go_parser import parse_source
from go2tree.ir.serializer import Serializer


def _types(node):
    return [c.type for c in node.children]


def test_import_group_with_three_specs():
    code = '''package main

import (
	"fmt"
	"os"
	"strings"
)
'''
    tree = convert_source(code)

    assert tree.type == "source-unit"
    assert tree.name == "main"
    assert _types(tree) == ["import-group"]
    group = tree.children[0]
    assert _types(group) == ["import-spec", "import-spec", "import-spec"]
    paths = [spec.children[-1].value for spec in group.children]
    assert paths == ['"fmt"', '"os"', '"strings"']


def test_single_import_with_alias():
    tree = convert_source('package main\n\nimport f "fmt"\n')
    spec = tree.children[0].children[0]
    assert spec.type == "import-spec"
    assert [(c.type, c.value) for c in spec.children] == [
        ("package-identifier", "f"),
        ("interpreted-string-literal", '"fmt"'),
    ]


def test_method_declaration_has_receiver_signature_body():
    code = '''package srv

type Server struct{}

func (s *Server) Close() error {
	return nil
}
'''
    tree = convert_source(code)

    decl = tree.find_all("function-decl")[0]
    assert decl.name == "Close"
    assert _types(decl) == ["field-list", "function-type", "block"]

    receiver, signature, body = decl.children
    assert _types(receiver) == ["field"]
    assert [c.type for c in receiver.children[0].children] == ["identifier", "pointer-type"]
    assert _types(signature) == ["field-list", "type-identifier"]
    assert signature.children[1].value == "error"
    assert _types(body) == ["return-statement"]
    assert body.children[0].children[0].to_dict() == {"type": "nil", "value": "nil"}


def test_function_without_receiver_has_signature_and_body():
    tree = convert_source("package main\n\nfunc main() {}\n")
    decl = tree.children[0]
    assert decl.name == "main"
    assert _types(decl) == ["function-type", "block"]


def test_type_declaration_binds_name():
    tree = convert_source("package geo\n\ntype Point struct {\n\tX, Y int `json:\"x\"`\n}\n")
    spec = tree.children[0].children[0]
    assert tree.children[0].type == "type-group"
    assert spec.type == "type-spec"
    assert spec.name == "Point"
    struct = spec.children[0]
    assert struct.type == "struct-type"
    field = struct.children[0].children[0]
    assert field.type == "field"
    assert [c.value for c in field.children] == ["X", "Y", "int", '`json:"x"`']


def test_comment_groups_at_top_level():
    code = '''package main

// Answer is the answer.
// It never changes.
const Answer = 42
'''
    tree = convert_source(code)

    assert _types(tree) == ["comment-group", "const-group"]
    group = tree.children[0]
    assert [c.comments for c in group.children] == [
        ["// Answer is the answer."],
        ["// It never changes."],
    ]
    spec = tree.children[1].children[0]
    assert [(c.type, c.value) for c in spec.children] == [
        ("identifier", "Answer"),
        ("int-literal", "42"),
    ]


def test_local_declaration_is_wrapped_in_declaration_statement():
    tree = convert_source("package main\n\nfunc f() {\n\tvar x int\n\t_ = x\n}\n")
    body = tree.find_all("block")[0]
    assert _types(body) == ["declaration-statement", "assignment-statement"]
    assert _types(body.children[0]) == ["var-group"]


def test_call_arguments_follow_callee_in_order():
    tree = convert_source('package main\n\nfunc f() {\n\tfmt.Println("a", 1, x)\n}\n')
    call = tree.find_all("call-expression")[0]
    assert _types(call) == [
        "selector-expression",
        "interpreted-string-literal",
        "int-literal",
        "identifier",
    ]
    selector = call.children[0]
    assert [c.value for c in selector.children] == ["fmt", "Println"]


def test_if_else_chain_order():
    code = '''package main

func f(x int) int {
	if y := x * 2; y > 10 {
		return 1
	} else if x < 0 {
		return -1
	} else {
		return 0
	}
}
'''
    tree = convert_source(code)
    stmt = tree.find_all("if-statement")[0]
    assert _types(stmt) == ["short-var-declaration", "binary-expression", "block", "if-statement"]
    assert _types(stmt.children[3]) == ["binary-expression", "block", "block"]


def test_broad_program_converts_without_unsupported_kinds():
    code = '''package sample

import (
	"context"
	. "strings"
	_ "embed"
)

type Number interface {
	~int | ~float64
}

type Store interface {
	Get(ctx context.Context, key string) ([]byte, error)
}

type Alias = map[string][]int

const (
	A = iota
	B
)

var (
	names = []string{"a", "b"}
	index = map[string]int{"a": 1}
	grid  [3][2]float64
)

func Sum[T Number](xs ...T) (total T) {
	for _, x := range xs {
		total += x
	}
	return
}

func work(ctx context.Context, ch chan<- int, done <-chan struct{}) {
	defer close(ch)
	go func(n int) { ch <- n }(1)
outer:
	for i := 0; i < 10; i++ {
		select {
		case <-done:
			break outer
		case v := <-ctx.Done():
			_ = v
		default:
			continue
		}
	}
	var any interface{} = 'x'
	switch t := any.(type) {
	case int, string:
		_ = t
	default:
	}
	switch n := len(names); {
	case n > 1:
		fallthrough
	default:
		names = names[1:len(names):cap(names)]
	}
	p := &struct{ X int }{X: 1}
	p.X--
	_ = Sum[int](1, 2, 3)
	_ = int64(p.X)
	_ = ToUpper("x")
	_ = grid[0][1]
	_ = index
}
'''
    tree = convert_source(code)

    found = {node.type for node in tree.walk()}
    for tag in (
        "import-group",
        "function-decl",
        "type-spec",
        "type-alias",
        "const-group",
        "var-group",
        "method-elem",
        "interface-type",
        "composite-literal",
        "key-value",
        "func-literal",
        "send-statement",
        "defer-statement",
        "go-statement",
        "labeled-statement",
        "break-statement",
        "select-statement",
        "type-switch-statement",
        "expression-switch-statement",
        "fallthrough-statement",
        "slice-expression",
        "dec-statement",
        "inc-statement",
        "range-clause",
        "for-clause",
        "channel-type",
        "map-type",
        "array-type",
        "ellipsis",
    ):
        assert tag in found, tag


def test_conversion_is_deterministic_on_real_source():
    code = "package main\n\n// c\nfunc main() {\n\tx := []int{1, 2}\n\t_ = x\n}\n"
    first = convert_source(code).to_dict()
    second = convert_source(code).to_dict()
    assert first == second


def test_file_scope_declarations_are_direct_children():
    code = '''package app

import "fmt"

type (
	A int
	B string
)

const Limit = 3

var x = 1
var y, z = 2, 3

func main() { fmt.Println(x, y, z) }

func helper() {}
'''
    tree = convert_source(code)
    assert _types(tree) == [
        "import-group",
        "type-group",
        "const-group",
        "var-group",
        "var-group",
        "function-decl",
        "function-decl",
    ]
    assert not tree.find_all("declaration-statement")


def test_long_expression_chain_renders_as_json():
    terms = 5000
    code = "package main\n\nvar v = " + " + ".join(['"s"'] * terms) + "\n"
    tree = convert_source(code)

    assert len(tree.find_all("binary-expression")) == terms - 1
    text = Serializer(indent=0).render(tree)
    assert text.count('"binary-expression"') == terms - 1


def test_long_expression_chain_renders_as_yaml():
    terms = 1000
    code = "package main\n\nvar v = " + " + ".join(['"s"'] * terms) + "\n"
    text = Serializer("yaml").render(convert_source(code))
    assert text.count("type: binary-expression") == terms - 1


# --- Frontend errors ---


def test_syntax_error_raises_parse_error_with_position():
    with pytest.raises(ParseError) as excinfo:
        parse_source(b"package main\n\nfunc main() {\n\t@\n}\n", "bad.go")
    assert excinfo.value.path == "bad.go"
    assert excinfo.value.line >= 1
    assert str(excinfo.value).startswith("bad.go:")


def test_missing_package_clause_is_a_parse_error():
    with pytest.raises(ParseError) as excinfo:
        parse_source(b"func main() {}\n", "nopkg.go")
    assert "package" in excinfo.value.message


def test_syntax_errors_can_be_tolerated():
    tree = convert_source("package main\n\nfunc main() {\n\t@\n}\n", allow_syntax_errors=True)
    assert tree.type == "source-unit"
    assert tree.name == "main"


def test_invalid_utf8_is_a_parse_error():
    with pytest.raises(ParseError) as excinfo:
        parse_source(b'package main\n\nvar s = "a\xff"\n', "enc.go")
    assert excinfo.value.message == "illegal UTF-8 encoding"
    assert (excinfo.value.line, excinfo.value.column) == (3, 11)
