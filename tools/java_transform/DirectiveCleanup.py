from java_transform._utils import COMMENT_KINDS, find_nodes
from java_transform.model import Directive


class DirectiveCleanup:
    """Removes all the generator directives from the unit; they must never reach the generated code"""

    def __init__(self, params, family):
        pass

    def run(self, unit, verbose):
        """Run this rule on the given Java unit"""

        if verbose:
            print("  trying to remove generator directives...")
        removed_count = 0

        for comment in find_nodes(unit.cursor, COMMENT_KINDS):
            if Directive.from_comment(unit.text(comment)) is not Directive.NONE:
                unit.remove_lines(comment.start_byte, comment.end_byte)
                removed_count += 1

        if verbose and removed_count > 0:
            print(f"    removed {removed_count} directives")
