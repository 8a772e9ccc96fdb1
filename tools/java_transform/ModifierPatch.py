from java_transform._utils import patch_modifiers
from java_transform.model import type_declarations


class ModifierPatch:
    """
    Changes the modifiers of a class (identified by its translated name) and of its constructors.
    Needed when the atomic variant of a class is used differently, e.g., when the original class is abstract and
    created through a factory method while the atomic one is instantiated directly.
    """

    def __init__(self, params, family):
        self._family = family
        self._class = params["class"]
        self._class_modifiers = params.get("class_modifiers", {})
        self._ctor_modifiers = params.get("constructor_modifiers", {})

    def run(self, unit, verbose):
        """Run this rule on the given Java unit"""

        if verbose:
            print(f"  trying to patch modifiers of {self._class}...")
        changes_count = 0

        for decl in type_declarations(unit):
            if self._family.translate(decl.name) != self._class:
                continue
            if _patch(unit, decl.node, self._class_modifiers):
                changes_count += 1
            for ctor in decl.constructors:
                if _patch(unit, ctor.node, self._ctor_modifiers):
                    changes_count += 1

        if verbose and changes_count > 0:
            print(f"    made {changes_count} changes")


def _patch(unit, node, params):
    return patch_modifiers(unit, node, add=params.get("add", []), remove=params.get("remove", []))
