from java_transform._utils import TYPE_DECLARATION_KINDS, find_nodes, type_base_name
from java_transform.model import type_decl


class QueueRename:
    """
    Renames the queue classes to their atomic counterparts, everywhere a class name appears: class and constructor
    declarations, extended/implemented types and qualified field accesses (`SpscArrayQueue.FOO`).
    Some parent classes are not simply renamed, as the atomic queues derive from structurally different base classes;
    these are given in the `parents` parameter.
    """

    def __init__(self, params, family):
        self._family = family
        self._parents = params.get("parents", {}) if params else {}

    def run(self, unit, verbose):
        """Run this rule on the given Java unit"""

        if verbose:
            print(f"  trying queue rename ({self._family.name} queues)...")
        self._unit = unit
        self._count = 0

        for node in find_nodes(unit.cursor, TYPE_DECLARATION_KINDS):
            decl = type_decl(unit, node)
            self._rename(decl.name_node)
            for ctor in decl.constructors:
                self._rename(ctor.name_node)
            for parent in decl.parents:
                self._replace_parent(parent)

        for node in find_nodes(unit.cursor, ("field_access",)):
            scope = node.child_by_field_name("object")
            if scope is not None and scope.type == "identifier":
                self._rename(scope)

        if verbose and self._count > 0:
            print(f"    made {self._count} replacements")

    def _replace_parent(self, type_node):
        name_node = type_base_name(type_node)
        if name_node is None:
            return
        name = self._unit.text(name_node)
        if name in self._parents:
            self._unit.add_replacement(name_node, self._parents[name])
            self._count += 1
        else:
            # Padded super classes are to be renamed and thus so does the class we must extend
            self._rename(name_node)

    def _rename(self, name_node):
        name = self._unit.text(name_node)
        new_name = self._family.translate(name)
        if new_name != name:
            self._unit.add_replacement(name_node, new_name)
            self._count += 1
