"""
Recognizer for method signature text.

    signature := name "(" types ")" [ ":" "(" outputs ")" ]
    name      := [_a-zA-Z] [_a-zA-Z0-9]*
    types     := any characters except ":", "(", ")" and whitespace
    outputs   := any non-whitespace characters

`outputs` runs up to the final character, which must be the closing
parenthesis. Type names are not resolved here, see
`ParameterList.from_canonical`.
"""
import string
from dataclasses import dataclass
from typing import Optional

from abikit.exceptions import SignatureSyntaxException

_NAME_START = frozenset(string.ascii_letters + "_")
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_TYPES_FORBIDDEN = frozenset(":()")


@dataclass(frozen=True)
class ParsedSignature:
    name: str
    inputs: str
    # None when the signature has no output clause
    outputs: Optional[str] = None


class _Scanner:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def fail(self, message, col=None):
        raise SignatureSyntaxException(
            f"Wrong ABI method signature: {message}", self.text, self.pos if col is None else col
        )

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> Optional[str]:
        if self.at_end():
            return None
        return self.text[self.pos]

    def expect(self, char: str) -> None:
        if self.peek() != char:
            found = "end of input" if self.at_end() else repr(self.peek())
            self.fail(f"expected {char!r}, found {found}")
        self.pos += 1

    def name(self) -> str:
        start = self.pos
        if self.peek() not in _NAME_START:
            self.fail("method name must start with a letter or underscore")
        self.pos += 1
        while not self.at_end() and self.text[self.pos] in _NAME_CHARS:
            self.pos += 1
        return self.text[start : self.pos]

    def types(self) -> str:
        start = self.pos
        while not self.at_end():
            c = self.text[self.pos]
            if c == ")":
                break
            if c in _TYPES_FORBIDDEN or c.isspace():
                self.fail(f"unexpected character {c!r} in parameter types")
            self.pos += 1
        return self.text[start : self.pos]

    def outputs(self) -> str:
        end = len(self.text) - 1
        if end < self.pos or self.text[end] != ")":
            self.fail("output types must end with ')'", len(self.text))
        for i in range(self.pos, end):
            if self.text[i].isspace():
                self.fail("unexpected whitespace in output types", i)
        ret = self.text[self.pos : end]
        self.pos = len(self.text)
        return ret


def parse_signature(text: str) -> ParsedSignature:
    """
    Split a signature like `balanceOf(address):(uint256)` into its name,
    input types and output types.
    """
    if not isinstance(text, str):
        raise SignatureSyntaxException(f"Expected signature string, got {type(text).__name__}", "")

    s = _Scanner(text)
    name = s.name()
    s.expect("(")
    inputs = s.types()
    s.expect(")")

    if s.at_end():
        return ParsedSignature(name, inputs)

    s.expect(":")
    s.expect("(")
    outputs = s.outputs()
    return ParsedSignature(name, inputs, outputs)


def is_valid_signature(text: str) -> bool:
    try:
        parse_signature(text)
    except SignatureSyntaxException:
        return False
    return True
