from java_transform._utils import append_member
from java_transform.model import Directive, type_declarations


class DeprecatedRedirect:
    """
    Keeps the old name of a renamed method alive: for the classes having the method `to`, add a deprecated method
    `from` with the same signature, redirecting all the calls to `to`.
    """

    def __init__(self, params, family):
        self._from = params["from"]
        self._to = params["to"]
        self._types = family.types

    def run(self, unit, verbose):
        """Run this rule on the given Java unit"""

        if verbose:
            print(f"  trying to add deprecated redirect {self._from} -> {self._to}...")
        changes_count = 0

        for decl in type_declarations(unit):
            targets = decl.methods_named(self._to)
            if not targets:
                continue
            existing = [m for m in decl.methods_named(self._from) if m.directive is not Directive.IGNORE]
            if existing:
                continue

            target = targets[0]
            # The signature follows the type substitutions made on the target
            return_type = self._types.substitute(unit, target.type_node, target.name, is_method=True)
            if return_type is None:
                return_type = unit.text(target.type_node)
            params = "(" + ", ".join(self._parameter(unit, p) for p in target.params) + ")"
            call = f"this.{self._to}({', '.join(p.name for p in target.params)});"
            statement = call if return_type == "void" else f"return {call}"
            append_member(
                unit,
                decl.body,
                [
                    "/**",
                    f" * @deprecated This was renamed to {self._to} please migrate",
                    " */",
                    "@Deprecated",
                    f"public {return_type} {self._from}{params} {{",
                    f"    {statement}",
                    "}",
                ],
            )
            changes_count += 1

        if verbose and changes_count > 0:
            print(f"    made {changes_count} changes")

    def _parameter(self, unit, param):
        node = param.node
        type_node = node.child_by_field_name("type")
        new_type = None if type_node is None else self._types.substitute(unit, type_node, param.name)
        if new_type is None:
            return unit.text(node)
        before = unit.text(node.start_byte, type_node.start_byte)
        return before + new_type + unit.text(type_node.end_byte, node.end_byte)
