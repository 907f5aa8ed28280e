"""Tcl list values.

A Tcl list is a string whose elements are separated by whitespace, with
braces grouping an element that itself contains separators.
"""

from typing import Iterable, Optional


class TclList(list):
    """List of string elements with Tcl brace-quoting semantics.

    ``str()`` formats the list back into its canonical braced form.
    """

    def __init__(self, elements: Iterable[str] = ()):
        super().__init__(elements)

    @classmethod
    def parse(cls, text: str, split_chars: Optional[str] = None) -> "TclList":
        """Split text into list elements.

        Args:
            text: The list text.
            split_chars: Characters separating elements. Defaults to any
                whitespace, in which case leading and trailing whitespace
                is ignored.
        """
        if split_chars is None:
            is_split = str.isspace
            text = text.strip()
        else:
            def is_split(char: str) -> bool:
                return char in split_chars

        elements = cls()
        if not text:
            return elements

        element: list[str] = []
        length = len(text)
        i = 0
        while i < length:
            char = text[i]
            if char == "{":
                depth = 1
                i += 1
                while depth and i < length:
                    char = text[i]
                    # An outer brace only closes in front of a separator
                    if char == "}" and (depth > 1 or i + 1 == length or is_split(text[i + 1])):
                        depth -= 1
                    elif char == "{" and is_split(text[i - 1]):
                        depth += 1
                    if depth:
                        element.append(char)
                    i += 1
            elif is_split(char):
                elements.append("".join(element))
                element = []
                while i < length and is_split(text[i]):
                    i += 1
            else:
                element.append(char)
                i += 1
        elements.append("".join(element))
        return elements

    def format(self) -> str:
        """Wrap each element in braces and join them with spaces."""
        return " ".join("{" + element + "}" for element in self)

    def __str__(self) -> str:
        return self.format()
