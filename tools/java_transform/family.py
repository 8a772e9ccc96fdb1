from java_transform._utils import (
    array_element,
    is_long_array,
    is_primitive,
    is_ref_array,
    is_ref_type,
    type_arguments,
)

ANY_NAME = "*"


class QueueNaming:
    """
    Translates the names of the queue classes to the names of their atomic counterparts.

    Two styles are supported:
      - arity tags (array queues): `SpscArrayQueue` -> `SpscAtomicArrayQueue`; the marker is inserted after the tag
      - linked tokens (linked queues): `MpscLinkedQueue` -> `MpscLinkedAtomicQueue`,
        `MpscChunkedArrayQueue` -> `MpscChunkedAtomicArrayQueue`
    """

    def __init__(self, params):
        self.marker = params["marker"]
        self.suffix = params["suffix"]
        self._tags = params.get("arity_tags", [])
        self._linked_tokens = params.get("linked_tokens", [])
        self._linked_word = params.get("linked_word", "Linked")

    def translate(self, name):
        """Returns the translated name, or the name unchanged if no rule matches"""
        if len(name) < 5 or self.marker in name:
            return name

        if self._tags:
            start, end = name[:4], name[4:]
            if start in self._tags and end.startswith(self.suffix):
                return start + self.marker + end
            return name

        if any(t in name for t in self._linked_tokens):
            return name.replace(self._linked_word, self._linked_word + self.marker)
        if self.suffix in name:
            return name.replace(self.suffix, self.marker + self.suffix)
        return name


class TypeRules:
    """
    Decides how the types of fields, parameters, variables and method results change between the raw-memory and the
    atomic queues. The decision is based on the declared type and on the name of the declared entity.
    """

    def __init__(self, params):
        self._int_methods = set(params.get("int_methods", []))
        self._ref_array_names = set(params.get("ref_array", {}).get("names", []))
        self._long_array_names = set(params.get("long_array", {}).get("names", []))
        self._narrow_long = set(params.get("narrow_long", []))
        self._nodes = params.get("nodes", {})
        self.casts = params.get("casts", False)

    def substitute(self, unit, type_node, name, is_method=False):
        """
        Get the replacement for the given type.
        :param unit: The unit the type belongs to
        :param type_node: The node of the declared type
        :param name: The name of the declared field/parameter/variable/method
        :param is_method: True if `type_node` is the return type of method `name`
        :return: The text of the new type, or None if the type stays the same
        """
        if type_node is None:
            return None
        if is_method and name in self._int_methods:
            return None if is_primitive(type_node, "int") else "int"
        if is_ref_array(type_node, "E") and _matches(name, self._ref_array_names):
            return self.atomic_ref_array(unit, type_node)
        if is_long_array(type_node) and _matches(name, self._long_array_names):
            return "AtomicLongArray"
        if is_primitive(type_node, "long") and name in self._narrow_long:
            return "int"
        return self.node_type(unit, type_node)

    def atomic_ref_array(self, unit, type_node):
        """`E[]` -> `AtomicReferenceArray<E>`"""
        return f"AtomicReferenceArray<{unit.text(array_element(type_node))}>"

    def node_type(self, unit, type_node):
        """Replacement for references to node classes (`LinkedQueueNode<E>` -> `LinkedQueueAtomicNode<E>`)"""
        for old, new in self._nodes.items():
            if is_ref_type(type_node, old):
                args = type_arguments(type_node)
                return new + (unit.text(args) if args is not None else "<E>")
        return None

    def cast_type(self, unit, type_node):
        """Replacement for the type of a cast expression (buffer arrays and node classes)"""
        if self.casts and is_ref_array(type_node, "E"):
            return self.atomic_ref_array(unit, type_node)
        return self.node_type(unit, type_node)


def _matches(name, names):
    return ANY_NAME in names or name in names


class QueueFamily:
    """The configuration shared by all the rules of a queue family: naming and type rules"""

    def __init__(self, params):
        self.name = params["name"]
        self.naming = QueueNaming(params["naming"])
        self.types = TypeRules(params.get("types", {}))

    def translate(self, name):
        return self.naming.translate(name)
