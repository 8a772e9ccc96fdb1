import os
import tree_sitter_java
from tree_sitter import Language, Parser
from java_transform.errors import ParseError, TransformError

JAVA_LANGUAGE = Language(tree_sitter_java.language())


class TransformedUnit:
    """
    Represents a Java compilation unit, possible with transformations applied to it.
    Multiple transformations passes can be applied to a single unit; all of them see the original tree and record
    edits against it. An edit fully contained in a bigger edit is dropped (the bigger edit wins); edits that partially
    overlap, or that replace the same range with different texts, are an error.
    At the end, the unit can be saved to disk.
    """

    def __init__(self, filename, contents=None):
        """Create a transformed unit from the given filename; if `contents` is given, the file is not read"""
        if contents is None:
            with open(filename, "rb") as f:
                contents = f.read()
        elif isinstance(contents, str):
            contents = contents.encode("utf-8")
        self._contents = contents
        self._filename = filename

        self._parser = Parser(JAVA_LANGUAGE)
        self._parse()
        # We store here all the edits we need to make
        # list of (offset start, offset end, text)
        self.replacements = []

    @property
    def filename(self):
        """The name of the file this unit was loaded from"""
        return self._filename

    @property
    def source_name(self):
        """The base name of the source file"""
        return os.path.basename(self._filename)

    @property
    def tree(self):
        """Returns the tree-sitter tree object"""
        return self._tree

    @property
    def cursor(self):
        """Returns the top-level node, representing the whole AST of the unit"""
        return self._tree.root_node

    def save(self, filename):
        """Saves the content of the transformed unit to disk."""
        # Compute everything before touching the output file
        new_content = self.get_modified_content()
        with open(filename, "w", encoding="utf-8", newline="") as f:
            f.write(new_content)

    def text(self, node_or_start, end=None):
        """Returns the original source text of a node, or of a [start, end) byte range"""
        if end is None:
            start, end = node_or_start.start_byte, node_or_start.end_byte
        else:
            start = node_or_start
        return self._contents[start:end].decode("utf-8")

    def add_replacement(self, node, new_text):
        """Replace the text of the given node"""
        self.add_range_replacement(node.start_byte, node.end_byte, new_text)

    def add_range_replacement(self, start, end, new_text):
        """Add a replacement text for the characters in the [start, end) byte range"""
        assert 0 <= start <= end <= len(self._contents), f"Invalid range: {start}-{end}"
        self.replacements.append((start, end, new_text))

    def insert(self, offset, new_text):
        """Insert text at the given byte offset"""
        self.add_range_replacement(offset, offset, new_text)

    def remove_lines(self, start, end):
        """
        Remove the [start, end) byte range. If the range is the only thing on its lines, the whole lines are removed,
        so that we don't leave lines with just whitespace behind.
        """
        line_start = self.line_start(start)
        if not self._contents[line_start:start].strip():
            start = line_start
        nl = self._contents.find(b"\n", end)
        line_end = len(self._contents) if nl < 0 else nl + 1
        if not self._contents[end:line_end].strip():
            end = line_end
        self.add_range_replacement(start, end, "")

    def line_start(self, offset):
        """Returns the offset of the beginning of the line containing `offset`"""
        return self._contents.rfind(b"\n", 0, offset) + 1

    def line_indent(self, offset):
        """Returns the whitespace at the beginning of the line containing `offset`"""
        start = self.line_start(offset)
        end = start
        while end < len(self._contents) and self._contents[end : end + 1] in (b" ", b"\t"):
            end += 1
        return self.text(start, end)

    def get_modified_content(self):
        """Applies the replacements and get the modified content"""
        if not self.replacements:
            return self._contents.decode("utf-8")

        # Sort by start; insertions go before replacements starting at the same offset, then bigger ranges first.
        # Python's sort is stable, so edits with the same key keep their registration order.
        replacements = sorted(
            self.replacements, key=lambda r: (r[0], r[0] != r[1], -r[1])
        )

        cur = 0
        last = None
        result = []
        for (rstart, rend, text) in replacements:
            if rstart < cur:
                if (rstart, rend) == last[:2] and text != last[2]:
                    raise TransformError(
                        f"{self._filename}: conflicting edits at bytes {rstart}-{rend} ('{last[2]}' and '{text}')"
                    )
                if rend <= cur:
                    # Already covered by a bigger edit
                    continue
                raise TransformError(
                    f"{self._filename}: overlapping edits at bytes {rstart}-{rend} (when writing '{text}')"
                )
            result.append(self._contents[cur:rstart].decode("utf-8"))
            result.append(text)
            cur = rend
            last = (rstart, rend, text)
        result.append(self._contents[cur:].decode("utf-8"))
        return "".join(result)

    def _parse(self):
        """Parses the contents of the file"""
        self._tree = self._parser.parse(self._contents)
        if self._tree.root_node.has_error:
            raise ParseError(f"{self._filename}: {_describe_error(self._tree.root_node)}")


def _describe_error(node):
    # Find the first error/missing node to get a useful location
    stack = [node]
    while stack:
        n = stack.pop()
        if n.type == "ERROR" or n.is_missing:
            row, col = n.start_point
            return f"syntax error at line {row + 1}, column {col + 1}"
        stack.extend(reversed(n.children))
    return "syntax error"
