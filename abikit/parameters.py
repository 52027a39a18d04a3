from typing import Any, Iterable, List, Optional, Sequence

from abikit.abi_types import ABIType
from abikit.exceptions import (
    ArgumentException,
    SignatureSyntaxException,
    TruncatedData,
    UnknownType,
    tag_exceptions,
)
from abikit.word import ByteWord, FixedWord


class ParameterList:
    """
    Ordered, immutable sequence of ABI types: the inputs or the outputs
    of a contract method.
    """

    __slots__ = ("_types",)

    def __init__(self, types: Iterable[ABIType] = ()):
        types = tuple(types)
        for i, typ in enumerate(types):
            if not isinstance(typ, ABIType):
                raise TypeError(f"Parameter {i} is not an ABIType: {typ!r}")
        object.__setattr__(self, "_types", types)

    def __setattr__(self, name, value):
        raise AttributeError("ParameterList is immutable")

    @classmethod
    def from_canonical(cls, registry, text: Optional[str]) -> "ParameterList":
        """
        Parse comma separated canonical type names, e.g. `address,uint256`.

        Arguments
        ---------
        registry : TypeRegistry
            Resolves each name to an `ABIType`.
        text : str | None
            The type list. `None` and the empty string are the empty list.
        """
        if not text:
            return EMPTY

        types = []
        col = 0
        for i, name in enumerate(text.split(",")):
            if name == "" or any(c.isspace() for c in name):
                raise SignatureSyntaxException(
                    f"Malformed type name at position {i}: {name!r}", text, col
                )
            with tag_exceptions(f"parameter {i} ({name})"):
                typ = registry.resolve(name)
            if typ is None:
                raise UnknownType(f"Unknown type at position {i}: {name!r}", name=name, index=i)
            types.append(typ)
            col += len(name) + 1

        return cls(types)

    def to_canonical(self) -> str:
        return ",".join(t.selector_name() for t in self._types)

    def selector_names(self) -> List[str]:
        return [t.selector_name() for t in self._types]

    def static_size(self) -> int:
        return sum(t.static_size() for t in self._types)

    def encode(self, values: Sequence[Any]) -> ByteWord:
        values = list(values)
        if len(values) != len(self._types):
            raise ArgumentException(
                f"Invalid argument count: expected {len(self._types)}, got {len(values)}",
                expected=len(self._types),
                actual=len(values),
            )

        words: List[FixedWord] = []
        for i, (typ, value) in enumerate(zip(self._types, values)):
            with tag_exceptions(f"argument {i} ({typ.selector_name()})"):
                words.extend(typ.encode_words(value))

        return ByteWord().concat(*words)

    def decode(self, data) -> List[Any]:
        data = ByteWord.coerce(data)

        ret = []
        offset = 0
        for i, typ in enumerate(self._types):
            needed = typ.static_size()
            if offset + needed > data.size:
                raise TruncatedData(
                    f"Data too short to decode value {i} ({typ.selector_name()}): "
                    f"need {offset + needed} bytes, got {data.size}",
                    index=i,
                    needed=offset + needed,
                    available=data.size,
                )
            words = [FixedWord.from_word(w) for w in data.slice(offset, offset + needed).chunks()]
            with tag_exceptions(f"value {i} ({typ.selector_name()})"):
                ret.append(typ.decode_words(words))
            offset += needed

        return ret

    def is_empty(self) -> bool:
        return len(self._types) == 0

    def __len__(self):
        return len(self._types)

    def __iter__(self):
        return iter(self._types)

    def __getitem__(self, idx):
        return self._types[idx]

    def __eq__(self, other):
        if not isinstance(other, ParameterList):
            return NotImplemented
        return self._types == other._types

    def __hash__(self):
        return hash(self._types)

    def __str__(self):
        return self.to_canonical()

    def __repr__(self):
        return f"ParameterList({self.to_canonical()!r})"


EMPTY = ParameterList()
