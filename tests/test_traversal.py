import textwrap

from java_transform._utils import KindVisitor, StopToken, find_nodes, visit_ast
from java_transform.TransformedUnit import TransformedUnit
from java_transform.model import Directive, type_declarations

SOURCE = """\
class Outer
{
    int a;

    class Inner
    {
        int b;
    }

    void f()
    {
        int c;
    }
}
"""


def _unit():
    return TransformedUnit("Outer.java", SOURCE)


def test_find_nodes_in_source_order():
    unit = _unit()
    names = [unit.text(n.child_by_field_name("name")) for n in find_nodes(unit.cursor, ("class_declaration",))]
    assert names == ["Outer", "Inner"]


def test_visit_ast_can_skip_children():
    unit = _unit()
    seen = []

    def _visit(node):
        seen.append(node.type)
        return node.type != "class_body"

    visit_ast(unit.cursor, _visit)
    assert "class_body" in seen
    assert "field_declaration" not in seen


def test_visit_ast_can_stop():
    unit = _unit()
    seen = []

    def _visit(node):
        if node.type == "field_declaration":
            seen.append(unit.text(node))
            return StopToken()
        return True

    visit_ast(unit.cursor, _visit)
    assert seen == ["int a;"]


def test_kind_visitor_dispatch():
    class _Fields(KindVisitor):
        def __init__(self):
            self.found = []

        def visit_field_declaration(self, node):
            self.found.append(node.text.decode("utf-8"))

        def visit_method_declaration(self, node):
            # Don't look into methods
            pass

    visitor = _Fields()
    visitor.visit(_unit().cursor)
    assert visitor.found == ["int a;", "int b;"]


def test_declaration_views():
    source = """\
    //$gen:ordered-fields
    public abstract class Foo<E> extends Bar<E> implements Baz, Qux
    {
        private static final long X = 1;
        protected long a, b;

        Foo(int capacity) {}

        // $gen:ignore
        final void soA(final long v) {}
    }
    """
    unit = TransformedUnit("Foo.java", textwrap.dedent(source))
    [decl] = type_declarations(unit)

    assert decl.name == "Foo"
    assert decl.is_top_level
    assert decl.directive is Directive.REWRITE_ACCESSORS
    assert decl.modifiers == ["public", "abstract"]
    assert [unit.text(p) for p in decl.parents] == ["Bar<E>", "Baz", "Qux"]
    assert [(f.names, f.is_static) for f in decl.fields] == [(["X"], True), (["a", "b"], False)]
    assert [c.name for c in decl.constructors] == ["Foo"]
    [method] = decl.methods
    assert method.directive is Directive.IGNORE
    assert [p.name for p in method.params] == ["v"]
    assert unit.text(method.type_node) == "void"
