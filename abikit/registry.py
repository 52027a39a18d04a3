from typing import Callable, Iterable, List, Optional

from abikit.abi_types import ABI_Address, ABI_Bool, ABI_BytesM, ABI_IntM, ABI_UIntM, ABIType

TypeParser = Callable[[str], Optional[ABIType]]


class TypeRegistry:
    """
    Resolves canonical type names to `ABIType` instances.

    Each parser either claims a name (returning a type, or raising
    `InvalidABIType` when the name is a malformed member of its family) or
    returns `None` to let the next parser try. Registries are populated at
    startup and only read afterwards.
    """

    def __init__(self, parsers: Iterable[TypeParser] = ()):
        self._parsers: List[TypeParser] = list(parsers)

    def register(self, parser: TypeParser) -> None:
        self._parsers.append(parser)

    def resolve(self, name: str) -> Optional[ABIType]:
        for parse in self._parsers:
            typ = parse(name)
            if typ is not None:
                return typ
        return None

    def __contains__(self, name):
        return self.resolve(name) is not None


_default_registry = TypeRegistry(
    [
        ABI_UIntM.from_name,
        ABI_IntM.from_name,
        ABI_Bool.from_name,
        ABI_Address.from_name,
        ABI_BytesM.from_name,
    ]
)


def default_registry() -> TypeRegistry:
    return _default_registry
