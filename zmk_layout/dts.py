"""
Helper module to parse ZMK devicetree-like syntax into a tree of nodes, and
utilities to extract their properties.

The implementation strips C-style comments with a line-oriented scanner, then
delimits nodes with an explicit brace-depth scanner so that nested nodes are
found no matter how irregularly they are laid out. The C preprocessor is not
run: directive lines are dropped and macros are left unexpanded.
"""

import logging
import re
from typing import Iterator

logger = logging.getLogger(__name__)


def strip_comments(in_str: str) -> str:
    """
    Remove `//` line comments and `/* */` block comments from `in_str`, copying every other
    character verbatim and keeping the line structure. Block comments can span multiple lines
    and do not nest: the first `*/` always closes the open block comment.
    """
    in_block_comment = False
    out_lines = []
    for line in in_str.split("\n"):
        out = []
        pos = 0
        while pos < len(line):
            pair = line[pos : pos + 2]
            if in_block_comment:
                if pair == "*/":
                    in_block_comment = False
                    pos += 2
                else:
                    pos += 1
            elif pair == "//":
                break
            elif pair == "/*":
                in_block_comment = True
                pos += 2
            else:
                out.append(line[pos])
                pos += 1
        out_lines.append("".join(out))
    return "\n".join(out_lines)


class DTNode:
    """Class representing a DT node with helper methods to extract fields."""

    name: str
    label: str | None
    content: str
    children: list["DTNode"]

    _prop_prefix = r"(?<![\w,.+#?-])"
    _cells_re = re.compile(r"<([^<>]*)>")

    def __init__(self, header: str, start: int = 0):
        """
        Initialize a node from its header (which may be in the form of `label: name`)
        and the buffer offset `start` of its opening brace.
        """
        header = " ".join(header.split())
        if ":" in header:
            label, name = header.split(":", maxsplit=1)
            self.label, self.name = label.strip(), name.strip()
        else:
            self.label, self.name = None, header
        self.start = start
        self.content = ""
        self.children = []

    def add_content(self, text: str) -> None:
        """Append text found directly inside this node, i.e. outside any child node."""
        if text.strip():
            self.content += " " + text

    def walk(self) -> Iterator["DTNode"]:
        """Yield all descendant nodes in document order."""
        for child in self.children:
            yield child
            yield from child.walk()

    def get_string(self, property_re: str) -> str | None:
        """Extract last defined value for a `string` type property matching the `property_re` regex."""
        out = None
        for m in re.finditer(rf'{self._prop_prefix}(?:{property_re})\s*=\s*"(.*?)"\s*;', self.content, re.DOTALL):
            out = m.group(1)
        return out

    def get_array(self, property_re: str) -> list[str] | None:
        """
        Extract last defined values for a `array` type property matching the `property_re` regex.
        Multiple cell groups such as `<1 2>, <3>` are concatenated.
        """
        out = None
        for m in re.finditer(
            rf"{self._prop_prefix}(?:{property_re})\s*=\s*(<[^;]*?>(?:\s*,\s*<[^;]*?>)*)\s*;", self.content
        ):
            out = [cell for cells in self._cells_re.findall(m.group(1)) for cell in cells.split()]
        return out

    def get_phandle_array(self, property_re: str) -> list[str] | None:
        """
        Extract last defined values for a `phandle-array` type property matching the `property_re` regex,
        grouping each `&behavior` token with the parameter tokens that follow it.
        Tokens before the first `&` reference are dropped.
        """
        if (array_vals := self.get_array(property_re)) is None:
            return None
        bindings: list[list[str]] = []
        for token in array_vals:
            if token.startswith("&"):
                bindings.append([token])
            elif bindings:
                bindings[-1].append(token)
        return [" ".join(binding) for binding in bindings]

    def __repr__(self) -> str:
        return (
            f"DTNode(name={self.name!r}, label={self.label!r}, content={' '.join(self.content.split())!r}, "
            f"children={[node.name for node in self.children]})"
        )


class DeviceTree:
    """
    Class that parses a DTS file (after removing comments) into a tree of DTNode's,
    with methods to find nodes by name, label or `compatible` value.
    """

    _directive_re = re.compile(
        r"^[ \t]*#[ \t]*(?:include|define|undef|ifdef|ifndef|if|elif|else|endif|pragma|error|warning|line)\b"
        r".*?(?:\\\n.*?)*$",
        re.MULTILINE,
    )

    def __init__(self, in_str: str, file_name: str | None = None, strip: bool = True):
        """
        Given an input DTS string `in_str` and `file_name` it is read from, parse it into an internal
        tree representation. If `strip` is False, `in_str` is assumed to be free of comments already.
        """
        self.file_name = file_name
        stripped = strip_comments(in_str) if strip else in_str
        self.buffer = self._directive_re.sub("", stripped)
        self.root = self._scan(self.buffer)

    def _scan(self, buf: str) -> DTNode:
        """Build the node tree by tracking brace depth, ignoring braces inside string literals."""
        root = DTNode("ROOT")
        stack = [root]
        segment_start = 0
        in_string = False
        for pos, char in enumerate(buf):
            if in_string:
                in_string = not (char == '"' and buf[pos - 1] != "\\")
                continue
            if char == '"':
                in_string = True
            elif char == "{":
                segment = buf[segment_start:pos]
                header_start = segment.rfind(";") + 1
                stack[-1].add_content(segment[:header_start])
                child = DTNode(segment[header_start:], start=pos)
                stack[-1].children.append(child)
                stack.append(child)
                segment_start = pos + 1
            elif char == "}":
                stack[-1].add_content(buf[segment_start:pos])
                segment_start = pos + 1
                if len(stack) == 1:
                    logger.warning("%s: ignoring unbalanced closing brace at offset %d", self._source, pos)
                    continue
                stack.pop()
        stack[-1].add_content(buf[segment_start:])

        if len(stack) > 1:
            logger.warning(
                "%s: blocks left open at end of input: %s", self._source, [node.name for node in stack[1:]]
            )
        return root

    @property
    def _source(self) -> str:
        return self.file_name or "<string>"

    def find_nodes(self, name_re: str, label_re: str | None = None) -> list[DTNode]:
        """Return nodes with names (and labels, if `label_re` is given) fully matching the given regexes."""
        return [
            node
            for node in self.root.walk()
            if re.fullmatch(name_re, node.name)
            and (label_re is None or (node.label is not None and re.fullmatch(label_re, node.label)))
        ]

    def get_compatible_nodes(self, compatible_value: str) -> list[DTNode]:
        """Return a list of nodes that have the given compatible value."""
        return [node for node in self.root.walk() if node.get_string("compatible") == compatible_value]
