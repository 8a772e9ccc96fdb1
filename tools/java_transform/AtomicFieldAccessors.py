from java_transform._utils import (
    append_member,
    block_lines,
    capitalise,
    erasure,
    is_primitive,
    leading_comments,
    member_indent,
    patch_modifiers,
)
from java_transform.errors import ConfigurationError
from java_transform.model import AccessKind, AccessorField, Directive, type_declarations


class AtomicFieldAccessors:
    """
    For the classes marked with the `$gen:ordered-fields` directive, rewrite the field accessors to use field updaters
    instead of raw memory access.

    Accessors are the methods named <prefix><CapitalisedFieldName>; the prefix determines the operation (see the
    `prefixes` parameter). Ordered/plain stores, CAS and exchange go through an Atomic*FieldUpdater; volatile loads and
    stores are plain field accesses (the field becomes volatile).
    The static fields and initializers of these classes hold the field offsets, so they are removed.
    """

    def __init__(self, params, family):
        self._family = family
        self._updaters = params["updaters"]
        self._prefixes = {p: AccessKind(k) for p, k in params["prefixes"].items()}
        # Longest prefixes first, so that `sv` never shadows a longer prefix starting the same way
        self._prefix_order = sorted(self._prefixes, key=len, reverse=True)
        self._exchange = params.get("exchange", {})

    def run(self, unit, verbose):
        """Run this rule on the given Java unit"""

        if verbose:
            print("  trying to rewrite field accessors...")
        self._unit = unit
        self._count = 0

        for decl in type_declarations(unit):
            if decl.directive is Directive.REWRITE_ACCESSORS:
                self._remove_static_layout(decl)
                self._patch_accessors(decl)

        if verbose and self._count > 0:
            print(f"    made {self._count} changes")

    def _remove_static_layout(self, decl):
        nodes = [f.node for f in decl.fields if f.is_static] + decl.static_initializers
        for node in nodes:
            # Their comments go with them
            comments = leading_comments(node)
            start = comments[0].start_byte if comments else node.start_byte
            self._unit.remove_lines(start, node.end_byte)
            self._count += 1

    def _patch_accessors(self, decl):
        class_name = self._family.translate(decl.name)
        methods = [m for m in decl.methods if m.directive is not Directive.IGNORE]
        updaters = []

        for f in decl.fields:
            if f.is_static:
                continue

            field_uses_updater = False
            for name in f.names:
                uses_updater = False
                suffix = capitalise(name)
                for method in methods:
                    if not method.name.endswith(suffix):
                        # Leave it untouched
                        continue
                    kind = self._access_kind(method.name)
                    self._rewrite_body(method, kind, name)
                    uses_updater = uses_updater or kind.uses_updater

                if name in self._exchange:
                    uses_updater = self._add_exchange(decl, name) or uses_updater

                if uses_updater:
                    updaters.append(self._accessor_field(f, name))
                    field_uses_updater = True

            if field_uses_updater and patch_modifiers(self._unit, f.node, add=["volatile"]):
                self._count += 1

        if updaters:
            indent = member_indent(self._unit, decl.body)
            code = "".join(f"\n{indent}{_updater_declaration(class_name, u)}" for u in updaters)
            self._unit.insert(decl.body.children[0].end_byte, code)
            self._count += len(updaters)

    def _access_kind(self, method_name):
        for prefix in self._prefix_order:
            if method_name.startswith(prefix):
                return self._prefixes[prefix]
        raise ConfigurationError(f"{self._unit.filename}: Unhandled method: {method_name}")

    def _rewrite_body(self, method, kind, field_name):
        if method.body is None:
            raise ConfigurationError(f"{self._unit.filename}: accessor {method.name} has no body")
        if len(method.params) != kind.arity:
            raise ConfigurationError(
                f"{self._unit.filename}: accessor {method.name} should have {kind.arity} parameter(s) for {kind.value}"
            )

        args = [p.name for p in method.params]
        if kind.uses_updater:
            updater = self._updater_name(field_name)
            call_args = ", ".join(["this"] + args)
            if kind is AccessKind.LAZY_SET:
                statement = f"{updater}.lazySet({call_args});"
            elif kind is AccessKind.COMPARE_AND_SET:
                statement = f"return {updater}.compareAndSet({call_args});"
            else:
                statement = f"return {updater}.getAndSet({call_args});"
        elif kind is AccessKind.ASSIGN:
            statement = f"{field_name} = {args[0]};"
        else:
            statement = f"return {field_name};"

        self._unit.add_replacement(method.body, block_lines(self._unit, method.node, [statement]))
        self._count += 1

    def _add_exchange(self, decl, field_name):
        """Add the exchange accessor for the field, if the class doesn't have one already"""
        ex = self._exchange[field_name]
        # An ignored exchange method is removed, so it must be replaced
        if any(m.directive is not Directive.IGNORE for m in decl.methods_named(ex["method"])):
            return False
        node_type = ex["type"]
        updater = self._updater_name(field_name)
        append_member(
            self._unit,
            decl.body,
            [
                f"protected final {node_type} {ex['method']}({node_type} newValue) {{",
                f"    return {updater}.getAndSet(this, newValue);",
                "}",
            ],
        )
        self._count += 1
        return True

    def _accessor_field(self, f, field_name):
        updater = self._updater_name(field_name)
        if is_primitive(f.type_node, "long"):
            return AccessorField(field_name, updater, "long")
        if is_primitive(f.type_node) or f.type_node.type == "array_type":
            raise ConfigurationError(
                f"{self._unit.filename}: no field updater for field {field_name} of type {self._unit.text(f.type_node)}"
            )
        type_text = self._family.types.substitute(self._unit, f.type_node, field_name)
        if type_text is None:
            type_text = self._unit.text(f.type_node)
        return AccessorField(field_name, updater, "reference", erasure(type_text))

    def _updater_name(self, field_name):
        if field_name not in self._updaters:
            raise ConfigurationError(f"{self._unit.filename}: Unhandled field: {field_name}")
        return self._updaters[field_name]


def _updater_declaration(class_name, accessor):
    """
    Generates something like:
    `private static final AtomicLongFieldUpdater<SpscAtomicArrayQueueProducerIndexFields> P_INDEX_UPDATER =
        AtomicLongFieldUpdater.newUpdater(SpscAtomicArrayQueueProducerIndexFields.class, "producerIndex");`
    """
    if accessor.kind == "long":
        updater_type = "AtomicLongFieldUpdater"
        type_args = class_name
        new_args = f'{class_name}.class, "{accessor.field_name}"'
    else:
        updater_type = "AtomicReferenceFieldUpdater"
        type_args = f"{class_name}, {accessor.value_class}"
        new_args = f'{class_name}.class, {accessor.value_class}.class, "{accessor.field_name}"'
    return (
        f"private static final {updater_type}<{type_args}> {accessor.updater_name} = "
        f"{updater_type}.newUpdater({new_args});"
    )
