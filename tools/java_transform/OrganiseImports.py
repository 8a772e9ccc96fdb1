from java_transform._utils import child_of_kind, is_comment


class OrganiseImports:
    """
    Normalizes the imports of the unit: drops the imports of the raw-memory mechanism, renames the imports of classes
    that have atomic counterparts, and adds the imports needed by the atomic queues.
    Comments found between the imports are kept in place; the added imports go after the existing ones.
    """

    def __init__(self, params, family):
        self._drop = params.get("drop", [])
        self._rename = params.get("rename", {})
        self._add = params.get("add", [])

    def run(self, unit, verbose):
        """Run this rule on the given Java unit"""

        if verbose:
            print("  organising imports...")

        imports = [c for c in unit.cursor.named_children if c.type == "import_declaration"]
        block = []
        if imports:
            block = [
                c
                for c in unit.cursor.named_children
                if imports[0].start_byte <= c.start_byte <= imports[-1].start_byte
                and (c.type == "import_declaration" or is_comment(c))
            ]

        # (is static, name) pairs, in order
        result = []
        lines = []
        for node in block:
            if is_comment(node):
                lines.append(unit.text(node))
                continue
            entry = _import_entry(unit, node)
            if any(entry[1].startswith(prefix) for prefix in self._drop):
                continue
            for old, new in self._rename.items():
                if entry[1].startswith(old):
                    entry = (entry[0], new + entry[1][len(old) :])
                    break
            if entry not in result:
                result.append(entry)
                lines.append(_import_line(entry))
        for name in self._add:
            entry = (True, name[len("static ") :]) if name.startswith("static ") else (False, name)
            if entry not in result:
                result.append(entry)
                lines.append(_import_line(entry))

        text = "\n".join(lines)
        if imports:
            unit.add_range_replacement(imports[0].start_byte, imports[-1].end_byte, text)
        elif text:
            package = child_of_kind(unit.cursor, "package_declaration")
            if package is not None:
                unit.insert(package.end_byte, "\n\n" + text)
            else:
                unit.insert(0, text + "\n\n")

        if verbose:
            print(f"    {len(imports)} imports -> {len(result)} imports")


def _import_entry(unit, node):
    """Returns the (is static, name) pair for an import; on-demand imports have names ending with `.*`"""
    is_static = any(c.type == "static" for c in node.children)
    name = "".join(unit.text(c) for c in node.children if c.type not in ("import", "static", ";"))
    return (is_static, "".join(name.split()))


def _import_line(entry):
    is_static, name = entry
    return f"import {'static ' if is_static else ''}{name};"
