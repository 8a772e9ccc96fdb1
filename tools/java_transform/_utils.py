COMMENT_KINDS = ("line_comment", "block_comment", "comment")
TYPE_DECLARATION_KINDS = ("class_declaration", "interface_declaration")

# Canonical Java order for modifier keywords
MODIFIER_ORDER = [
    "public",
    "protected",
    "private",
    "abstract",
    "static",
    "final",
    "transient",
    "volatile",
    "synchronized",
    "native",
    "strictfp",
]


class StopToken:
    """
    Class used to indicate that the AST exploration should completely stop.
    If the visiting function returns an instance of this object, then all the followup nodes will not be explored
    """

    pass


def visit_ast(node, f):
    """
    Visit all the AST nodes starting from the given node.
    :param node: The root node from where we start the exploration
    :param f: Functor to be called for the nodes; must match signature (node) -> bool/StopToken

    The functor will be called for each node in the tree, if the exploration is not limited. If the function will return
    False for a node, then the children of that node will not be explored; if True is returned, the children are
    explored.

    If the functor returns a `StopToken` object, then the whole exploration stops.
    """

    def _do_visit(node):
        # Apply the function
        visit_children = f(node)

        # Should we stop?
        if isinstance(visit_children, StopToken):
            return True

        # Visit children
        if visit_children:
            for c in node.children:
                should_stop = _do_visit(c)
                if should_stop:
                    return True

    # Start the exploration
    _do_visit(node)


class KindVisitor:
    """
    Depth-first visitor dispatching on the kind of the nodes.
    For a node of kind `foo_bar`, the method `visit_foo_bar` is called if it exists; otherwise the children of the node
    are visited. Overrides that want to continue the exploration must call `generic_visit`.
    """

    def visit(self, node):
        method = getattr(self, f"visit_{node.type}", None)
        if method is not None:
            return method(node)
        return self.generic_visit(node)

    def generic_visit(self, node):
        for c in node.named_children:
            self.visit(c)


def find_nodes(node, kinds):
    """
    Find all the nodes of the given kinds, in source order.
    :param node: The node from where we start the search (included)
    :param kinds: Tuple of node kinds we are searching for
    :return: The list of the nodes found
    """
    res = []

    def _visit_fun(n):
        if n.type in kinds:
            res.append(n)
        return True

    visit_ast(node, _visit_fun)
    return res


def child_of_kind(node, kind):
    """Returns the first direct child of the given kind, or None"""
    for c in node.children:
        if c.type == kind:
            return c
    return None


def is_comment(node):
    return node is not None and node.type in COMMENT_KINDS


def comment_content(text):
    """
    Get the content of a comment, without the comment delimiters and without surrounding whitespace.
    `//$gen:ignore`, `/* $gen:ignore */` and `/** $gen:ignore */` all have the content `$gen:ignore`.
    """
    if text.startswith("//"):
        text = text[2:]
    elif text.startswith("/*"):
        text = text[2:-2] if text.endswith("*/") else text[2:]
        if text.startswith("*"):
            text = text[1:]
    return text.strip()


def leading_comments(node):
    """
    Get the comments attached to a declaration: the run of comments directly preceding the node. A comment that
    trails the code of a previous line (e.g., `int x; // foo`) belongs to that code, and stops the run.
    """
    res = []
    prev = node.prev_sibling
    while is_comment(prev):
        before = prev.prev_sibling
        if before is not None and not is_comment(before) and before.end_point[0] == prev.start_point[0]:
            break
        res.insert(0, prev)
        prev = before
    return res


def javadoc_lines(text):
    """
    Get the text lines of a javadoc comment, without the comment decoration.
    Leading and trailing empty lines are dropped.
    """
    body = text[3:-2] if text.endswith("*/") else text[3:]
    lines = []
    for line in body.split("\n"):
        line = line.strip()
        if line.startswith("*"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        lines.append(line.rstrip())
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def format_javadoc(lines, indent):
    """
    Format the given lines as a javadoc comment. The first line is not indented, so that it can replace an existing
    comment in place; the following lines are indented with `indent`.
    """
    out = "/**\n"
    for line in lines:
        out += f"{indent} * {line}".rstrip() + "\n"
    out += f"{indent} */"
    return out


def capitalise(s):
    return s[:1].upper() + s[1:]


def modifier_keywords(decl_node):
    """Returns the modifier keywords of a declaration (annotations excluded)"""
    modifiers = child_of_kind(decl_node, "modifiers")
    if modifiers is None:
        return []
    return [c.type for c in modifiers.children if not c.is_named]


def sort_modifiers(keywords):
    def _key(k):
        return MODIFIER_ORDER.index(k) if k in MODIFIER_ORDER else len(MODIFIER_ORDER)

    return sorted(keywords, key=_key)


def type_base_name(type_node):
    """
    Get the node holding the (simple) name of a reference type.
    For `Foo`, `Foo<E>` and `a.b.Foo<E>` this is the `Foo` identifier node; for other types (primitives, arrays)
    this returns None.
    """
    if type_node is None:
        return None
    if type_node.type == "type_identifier":
        return type_node
    if type_node.type == "generic_type":
        return type_base_name(type_node.named_children[0])
    if type_node.type == "scoped_type_identifier":
        return type_node.named_children[-1]
    return None


def type_arguments(type_node):
    """Returns the `type_arguments` node of a generic type, or None"""
    if type_node is not None and type_node.type == "generic_type":
        return child_of_kind(type_node, "type_arguments")
    return None


def is_primitive(type_node, name=None):
    """Checks if the type is primitive; if a name is given, checks that it is this exact primitive"""
    if type_node is None or type_node.type not in ("integral_type", "floating_point_type", "boolean_type"):
        return False
    return name is None or type_node.text.decode("utf-8") == name


def array_element(type_node):
    """For one-dimensional array types, returns the element type node; None otherwise"""
    if type_node is None or type_node.type != "array_type":
        return None
    dims = type_node.child_by_field_name("dimensions")
    if dims is None or "".join(dims.text.decode("utf-8").split()) != "[]":
        return None
    return type_node.child_by_field_name("element")


def is_ref_type(type_node, class_name):
    """Checks if the type is a reference to the given class (type arguments are not checked)"""
    name = type_base_name(type_node)
    return name is not None and type_node.type != "scoped_type_identifier" and name.text.decode("utf-8") == class_name


def is_ref_array(type_node, class_name):
    return is_ref_type(array_element(type_node), class_name)


def is_long_array(type_node):
    return is_primitive(array_element(type_node), "long")


def erasure(type_text):
    """Returns the type without its type arguments: `Foo<E>` -> `Foo`"""
    return type_text.split("<", 1)[0].strip()


def patch_modifiers(unit, decl_node, add=(), remove=()):
    """
    Add/remove modifier keywords of a declaration; the resulting keywords are written in the canonical Java order.
    Annotations are kept in place.
    :return: True if a change was made
    """
    current = modifier_keywords(decl_node)
    wanted = [k for k in current if k not in remove]
    wanted += [k for k in add if k not in wanted]
    if wanted == current:
        return False
    new_text = " ".join(sort_modifiers(wanted))

    modifiers = child_of_kind(decl_node, "modifiers")
    keywords = [] if modifiers is None else [c for c in modifiers.children if not c.is_named]
    if keywords:
        start, end = keywords[0].start_byte, keywords[-1].end_byte
        if not new_text:
            # Also remove the whitespace after the last keyword
            nxt = keywords[-1].next_sibling or modifiers.next_sibling
            end = nxt.start_byte if nxt is not None else end
        unit.add_range_replacement(start, end, new_text)
    else:
        # Put the keywords right before the declaration itself (after the annotations, if any)
        nxt = decl_node.children[0] if modifiers is None else modifiers.next_sibling
        unit.insert(nxt.start_byte, new_text + " ")
    return True


def member_indent(unit, body):
    """Returns the indentation used for the members of a class body"""
    for member in body.named_children:
        return unit.line_indent(member.start_byte)
    return unit.line_indent(body.start_byte) + "    "


def append_member(unit, body, lines):
    """
    Add a new member at the end of a class body, preceded by an empty line.
    :param lines: The lines of the new member, without indentation
    """
    indent = member_indent(unit, body)
    code = "".join(f"{indent}{line}".rstrip() + "\n" for line in lines)
    close = body.children[-1]
    line_start = unit.line_start(close.start_byte)
    if not unit.text(line_start, close.start_byte).strip():
        unit.insert(line_start, "\n" + code)
    else:
        unit.insert(close.start_byte, "\n\n" + code)


def block_lines(unit, decl_node, statements):
    """
    Build a method body containing the given statements, formatted to replace the existing body of `decl_node`
    """
    indent = unit.line_indent(decl_node.start_byte)
    inner = "".join(f"{indent}    {s}\n" for s in statements)
    return "{\n" + inner + indent + "}"
