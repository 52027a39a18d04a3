import json
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from abikit.exceptions import (
    InvalidABIType,
    JSONError,
    StructureException,
    TruncatedData,
    UnknownType,
)
from abikit.method import ContractMethod
from abikit.method_id import MethodSelector
from abikit.registry import TypeRegistry
from abikit.warnings import SkippedABIEntry, abikit_warn
from abikit.word import ByteWord


class Contract:
    """
    An ordered collection of contract methods, addressable by name or by
    selector.
    """

    def __init__(self, methods: Iterable[ContractMethod] = ()):
        self._methods: Dict[MethodSelector, ContractMethod] = {}
        for m in methods:
            if m.selector in self._methods:
                prev = self._methods[m.selector]
                raise StructureException(
                    f"Methods produce colliding method ID `{m.selector}`: "
                    f"{prev.canonical_signature}, {m.canonical_signature}"
                )
            self._methods[m.selector] = m

    @classmethod
    def from_json_abi(cls, abi, registry: Optional[TypeRegistry] = None) -> "Contract":
        """
        Generate a `Contract` from a JSON ABI.

        Only `function` entries are loaded. Other entries, and functions
        whose types cannot be resolved, are skipped with a warning.

        Arguments
        ---------
        abi : list | str
            Contract ABI, either decoded or as JSON text.
        registry : TypeRegistry, optional
            Resolves the parameter types.
        """
        if isinstance(abi, str):
            try:
                abi = json.loads(abi)
            except json.JSONDecodeError as e:
                raise JSONError(f"Invalid JSON ABI: {e}") from e
        if not isinstance(abi, list):
            raise JSONError(f"JSON ABI must be a list, got {type(abi).__name__}")

        methods = []
        for entry in abi:
            if not isinstance(entry, dict):
                raise JSONError(f"JSON ABI entry must be an object: {entry!r}", entry)
            if entry.get("type", "function") != "function":
                msg = f"Skipping {entry.get('type')} entry {entry.get('name')}"
                abikit_warn(SkippedABIEntry(msg))
                continue
            try:
                methods.append(ContractMethod.from_abi(entry, registry))
            except (UnknownType, InvalidABIType) as e:
                abikit_warn(SkippedABIEntry(f"Skipping function {entry.get('name')}: {e}"))

        return cls(methods)

    def get(self, name: str) -> ContractMethod:
        """
        Look up a method by name. Overloaded names must be resolved by selector.
        """
        found = [m for m in self._methods.values() if m.name == name]
        if not found:
            raise KeyError(name)
        if len(found) > 1:
            sigs = ", ".join(m.canonical_signature for m in found)
            raise StructureException(f"Ambiguous method name {name}: {sigs}")
        return found[0]

    def by_selector(self, selector) -> ContractMethod:
        if not isinstance(selector, MethodSelector):
            selector = MethodSelector(ByteWord.coerce(selector).bytes)
        return self._methods[selector]

    def decode_call(self, data) -> Tuple[ContractMethod, List]:
        """
        Split call data into its method and decoded arguments.
        """
        data = ByteWord.coerce(data)
        if data.size < MethodSelector.SIZE_BYTES:
            raise TruncatedData(
                f"Call data too short for a method selector: {data}",
                needed=MethodSelector.SIZE_BYTES,
                available=data.size,
            )
        method = self.by_selector(data.slice(0, MethodSelector.SIZE_BYTES))
        return method, method.inputs.decode(data.slice(MethodSelector.SIZE_BYTES, data.size))

    def method_identifiers(self) -> Dict[str, str]:
        return {m.canonical_signature: m.selector.to_hex() for m in self._methods.values()}

    def __contains__(self, item):
        if isinstance(item, ContractMethod):
            return item.selector in self._methods
        return any(m.name == item for m in self._methods.values())

    def __iter__(self) -> Iterator[ContractMethod]:
        return iter(self._methods.values())

    def __len__(self):
        return len(self._methods)
