from java_transform._utils import format_javadoc, javadoc_lines
from java_transform.model import Directive, type_declarations

DEFAULT_LINES = [
    "NOTE: This class was automatically generated by java_transform_tool using the {family} queue rules.",
    "The original source file is {source}.",
]


class GeneratedNotice:
    """
    Prepends a notice to the javadoc of the top-level classes, saying that the class was generated and from which
    source file. The existing javadoc text is kept after the notice.
    """

    def __init__(self, params, family):
        self._family = family
        self._lines = (params or {}).get("lines", DEFAULT_LINES)

    def run(self, unit, verbose):
        """Run this rule on the given Java unit"""

        if verbose:
            print("  adding generated notice...")
        changes_count = 0

        notice = [line.format(family=self._family.name, source=unit.source_name) for line in self._lines]
        for decl in type_declarations(unit):
            if not decl.is_top_level:
                continue

            javadocs = [
                c
                for c in decl.comments
                if unit.text(c).startswith("/**") and Directive.from_comment(unit.text(c)) is Directive.NONE
            ]
            indent = unit.line_indent(decl.node.start_byte)
            if javadocs:
                javadoc = javadocs[-1]
                old_lines = javadoc_lines(unit.text(javadoc))
                lines = notice + ([""] + old_lines if old_lines else [])
                unit.add_replacement(javadoc, format_javadoc(lines, indent))
            else:
                line_start = unit.line_start(decl.node.start_byte)
                unit.insert(line_start, indent + format_javadoc(notice, indent) + "\n")
            changes_count += 1

        if verbose and changes_count > 0:
            print(f"    made {changes_count} changes")
