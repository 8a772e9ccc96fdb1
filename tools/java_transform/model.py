"""
Read-only views over the tree-sitter nodes of a Java unit.

The views extract the bits of the declarations the rules care about (names, types, modifiers, directives), so that the
rules don't need to know the details of the tree-sitter Java grammar.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from java_transform._utils import (
    TYPE_DECLARATION_KINDS,
    child_of_kind,
    comment_content,
    find_nodes,
    leading_comments,
    modifier_keywords,
)


class Directive(Enum):
    """Generator directives, written as comments in the input sources"""

    NONE = ""
    REWRITE_ACCESSORS = "$gen:ordered-fields"
    IGNORE = "$gen:ignore"

    @classmethod
    def from_comment(cls, text):
        """Returns the directive denoted by the comment text, or `Directive.NONE`"""
        content = comment_content(text)
        for d in cls:
            if d is not cls.NONE and d.value == content:
                return d
        return cls.NONE


class AccessKind(Enum):
    """The operation an accessor method performs on its field"""

    LAZY_SET = "lazy-set"
    COMPARE_AND_SET = "compare-and-set"
    GET_AND_SET = "get-and-set"
    ASSIGN = "assign"
    READ = "read"

    @property
    def uses_updater(self):
        return self in (AccessKind.LAZY_SET, AccessKind.COMPARE_AND_SET, AccessKind.GET_AND_SET)

    @property
    def arity(self):
        """Number of parameters an accessor of this kind takes"""
        return {
            AccessKind.LAZY_SET: 1,
            AccessKind.COMPARE_AND_SET: 2,
            AccessKind.GET_AND_SET: 1,
            AccessKind.ASSIGN: 1,
            AccessKind.READ: 0,
        }[self]


@dataclass
class AccessorField:
    """A field updater we need to declare, backing the atomic accessors of a field"""

    field_name: str
    updater_name: str
    # "long" or "reference"
    kind: str
    # The class of the values, for reference updaters
    value_class: Optional[str] = None


@dataclass
class Parameter:
    node: object
    name: str


@dataclass
class FieldDecl:
    node: object
    type_node: object
    names: List[str]
    modifiers: List[str]

    @property
    def is_static(self):
        return "static" in self.modifiers


@dataclass
class MethodDecl:
    """A method or a constructor"""

    node: object
    name: str
    name_node: object
    # None for constructors
    type_node: Optional[object]
    params: List[Parameter]
    body: Optional[object]
    modifiers: List[str]
    comments: list = field(default_factory=list)

    @property
    def directive(self):
        return _directive(self.comments)


@dataclass
class TypeDecl:
    node: object
    name: str
    name_node: object
    body: object
    modifiers: List[str]
    parents: list
    fields: List[FieldDecl]
    methods: List[MethodDecl]
    constructors: List[MethodDecl]
    static_initializers: list
    comments: list = field(default_factory=list)

    @property
    def directive(self):
        return _directive(self.comments)

    @property
    def is_top_level(self):
        return self.node.parent is not None and self.node.parent.type == "program"

    def methods_named(self, name):
        return [m for m in self.methods if m.name == name]


def _directive(comments):
    for c in comments:
        d = Directive.from_comment(c.text.decode("utf-8"))
        if d is not Directive.NONE:
            return d
    return Directive.NONE


def _text(node):
    return node.text.decode("utf-8")


def parameters(decl_node):
    """Returns the list of formal parameters of a method or constructor"""
    res = []
    params = decl_node.child_by_field_name("parameters")
    for p in params.named_children:
        if p.type not in ("formal_parameter", "spread_parameter"):
            continue
        name = p.child_by_field_name("name")
        if name is None:
            # spread parameters keep the name in their declarator
            name = child_of_kind(p, "variable_declarator").child_by_field_name("name")
        res.append(Parameter(p, _text(name)))
    return res


def field_decl(node):
    names = [_text(d.child_by_field_name("name")) for d in node.children_by_field_name("declarator")]
    return FieldDecl(node, node.child_by_field_name("type"), names, modifier_keywords(node))


def method_decl(unit, node):
    name_node = node.child_by_field_name("name")
    body = node.child_by_field_name("body")
    return MethodDecl(
        node,
        _text(name_node),
        name_node,
        node.child_by_field_name("type"),
        parameters(node),
        body,
        modifier_keywords(node),
        leading_comments(node),
    )


def type_decl(unit, node):
    """Build the view for a class or interface declaration node"""
    name_node = node.child_by_field_name("name")
    body = node.child_by_field_name("body")

    # Extended and implemented types
    parents = []
    for kind in ("superclass", "super_interfaces", "extends_interfaces"):
        clause = child_of_kind(node, kind)
        if clause is None:
            continue
        type_list = child_of_kind(clause, "type_list")
        holder = type_list if type_list is not None else clause
        parents.extend(c for c in holder.named_children if not c.type.endswith("comment"))

    fields, methods, constructors, initializers = [], [], [], []
    for member in body.named_children:
        if member.type in ("field_declaration", "constant_declaration"):
            fields.append(field_decl(member))
        elif member.type == "method_declaration":
            methods.append(method_decl(unit, member))
        elif member.type == "constructor_declaration":
            constructors.append(method_decl(unit, member))
        elif member.type == "static_initializer":
            initializers.append(member)

    return TypeDecl(
        node,
        _text(name_node),
        name_node,
        body,
        modifier_keywords(node),
        parents,
        fields,
        methods,
        constructors,
        initializers,
        leading_comments(node),
    )


def type_declarations(unit):
    """Returns the views of all the classes and interfaces in the unit, nested ones included, in source order"""
    return [type_decl(unit, n) for n in find_nodes(unit.cursor, TYPE_DECLARATION_KINDS)]
