from java_transform.model import Directive, type_declarations


class RemoveIgnoredMethods:
    """Removes the methods marked with the `$gen:ignore` directive; they only make sense for raw memory access"""

    def __init__(self, params, family):
        pass

    def run(self, unit, verbose):
        """Run this rule on the given Java unit"""

        if verbose:
            print("  trying to remove ignored methods...")
        removed_count = 0

        for decl in type_declarations(unit):
            for method in decl.methods + decl.constructors:
                if method.directive is Directive.IGNORE:
                    # Remove the method together with its comments
                    start = method.comments[0].start_byte if method.comments else method.node.start_byte
                    unit.remove_lines(start, method.node.end_byte)
                    removed_count += 1

        if verbose and removed_count > 0:
            print(f"    removed {removed_count} methods")
