from java_transform._utils import KindVisitor, type_base_name
from java_transform.errors import ConfigurationError


class TypeSubstitution(KindVisitor):
    """
    Changes the types that differ between the raw-memory and the atomic queues: buffers become atomic arrays, offsets
    become indices, nodes become atomic nodes. Applies to parameters, fields, local variables, method results, casts
    and object creations.
    """

    def __init__(self, params, family):
        self._family = family
        self._types = family.types
        self._unit = None
        self._count = 0

    def run(self, unit, verbose):
        """Run this rule on the given Java unit"""

        if verbose:
            print("  trying special type substitutions...")
        self._unit = unit
        self._count = 0

        self.visit(unit.cursor)

        if verbose and self._count > 0:
            print(f"    made {self._count} replacements")

    def visit_formal_parameter(self, node):
        self._declared(node.child_by_field_name("type"), [self._name(node)])
        self.generic_visit(node)

    def visit_catch_formal_parameter(self, node):
        # Exception types never change
        pass

    def visit_field_declaration(self, node):
        self._declared_variables(node)
        self.generic_visit(node)

    def visit_local_variable_declaration(self, node):
        self._declared_variables(node)
        self.generic_visit(node)

    def visit_enhanced_for_statement(self, node):
        self._declared(node.child_by_field_name("type"), [self._name(node)])
        self.generic_visit(node)

    def visit_method_declaration(self, node):
        type_node = node.child_by_field_name("type")
        new_type = self._types.substitute(self._unit, type_node, self._name(node), is_method=True)
        self._replace(type_node, new_type)
        self.generic_visit(node)

    def visit_cast_expression(self, node):
        for type_node in node.children_by_field_name("type"):
            new_type = self._types.cast_type(self._unit, type_node)
            if new_type is not None:
                self._replace(type_node, new_type)
            else:
                # Casts to queue classes follow the class renames
                name_node = type_base_name(type_node)
                if name_node is not None and type_node.type != "scoped_type_identifier":
                    self._replace(name_node, self._family.translate(self._unit.text(name_node)))
        self.generic_visit(node)

    def visit_object_creation_expression(self, node):
        type_node = node.child_by_field_name("type")
        self._replace(type_node, self._types.node_type(self._unit, type_node))
        self.generic_visit(node)

    def _declared_variables(self, node):
        names = [self._name(d) for d in node.children_by_field_name("declarator")]
        self._declared(node.child_by_field_name("type"), names)

    def _declared(self, type_node, names):
        results = {self._types.substitute(self._unit, type_node, name) for name in names}
        if len(results) > 1:
            raise ConfigurationError(
                f"{self._unit.filename}: variables {', '.join(names)} share a type but need different replacements"
            )
        self._replace(type_node, results.pop())

    def _replace(self, type_node, new_type):
        if new_type is not None and new_type != self._unit.text(type_node):
            self._unit.add_replacement(type_node, new_type)
            self._count += 1

    def _name(self, node):
        return self._unit.text(node.child_by_field_name("name"))
