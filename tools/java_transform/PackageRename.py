from java_transform._utils import child_of_kind


class PackageRename:
    """Moves the unit to the given package"""

    def __init__(self, params, family):
        self._to = params["to"]

    def run(self, unit, verbose):
        """Run this rule on the given Java unit"""

        if verbose:
            print(f"  trying package rename -> {self._to}...")

        package = child_of_kind(unit.cursor, "package_declaration")
        if package is None:
            return

        # The name is the only named child that is not an annotation
        name = [c for c in package.named_children if c.type in ("identifier", "scoped_identifier")][0]
        if unit.text(name) != self._to:
            unit.add_replacement(name, self._to)
            if verbose:
                print("    made 1 replacements")
