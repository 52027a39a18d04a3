import enum
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

from abikit.abi_types import ABIType
from abikit.exceptions import InstantiationException, JSONError, tag_exceptions
from abikit.method_id import Digest, MethodSelector
from abikit.parameters import EMPTY, ParameterList
from abikit.registry import TypeRegistry, default_registry
from abikit.signature import parse_signature
from abikit.utils import keccak256
from abikit.word import ByteWord

TypesLike = Union[ParameterList, Iterable[ABIType]]


class StateMutability(enum.Enum):
    PURE = "pure"
    VIEW = "view"
    NONPAYABLE = "nonpayable"
    PAYABLE = "payable"

    @classmethod
    def from_abi(cls, abi_dict: Dict) -> "StateMutability":
        """
        Extract stateMutability from an entry in a contract's ABI
        """
        if "stateMutability" in abi_dict:
            return cls(abi_dict["stateMutability"])
        elif abi_dict.get("payable"):
            return StateMutability.PAYABLE
        elif "constant" in abi_dict and abi_dict["constant"]:
            return StateMutability.VIEW
        else:  # Assume nonpayable if neither field is there, or constant/payable not set
            return StateMutability.NONPAYABLE

    @property
    def is_constant(self) -> bool:
        return self in (StateMutability.PURE, StateMutability.VIEW)


def _as_parameters(types: TypesLike) -> ParameterList:
    if isinstance(types, ParameterList):
        return types
    return ParameterList(types)


class ContractMethod:
    """
    A contract method: its name, constness and parameter types, plus the
    selector derived from `name(inputs)`.

    Two methods are equal when their selectors are equal. Constness and
    output types do not take part in equality or hashing, since the
    selector is what identifies a method on chain.
    """

    def __init__(
        self,
        name: str,
        constant: bool = False,
        inputs: TypesLike = EMPTY,
        outputs: TypesLike = EMPTY,
        digest: Digest = keccak256,
    ):
        if not isinstance(name, str) or name == "":
            raise InstantiationException(f"Undefined contract method name: {name!r}")

        self.name = name
        self.constant = bool(constant)
        self.inputs = _as_parameters(inputs)
        self.outputs = _as_parameters(outputs)
        self.selector = MethodSelector.from_signature(name, self.inputs.selector_names(), digest)
        self._frozen = True

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError("ContractMethod is immutable")
        super().__setattr__(name, value)

    @classmethod
    def from_signature(
        cls, signature: str, registry: Optional[TypeRegistry] = None, constant: bool = False
    ) -> "ContractMethod":
        """
        Create a method from a signature like `transfer(address,uint256)` or
        `balanceOf(address):(uint256)`.

        Parameter types are split by a single comma, no spaces are used.
        """
        registry = registry or default_registry()
        parsed = parse_signature(signature)

        with tag_exceptions(signature):
            inputs = ParameterList.from_canonical(registry, parsed.inputs)
            outputs = ParameterList.from_canonical(registry, parsed.outputs)

        return cls(parsed.name, constant, inputs, outputs)

    @classmethod
    def from_abi(cls, abi: dict, registry: Optional[TypeRegistry] = None) -> "ContractMethod":
        """
        Generate a `ContractMethod` object from a JSON ABI function entry.

        Arguments
        ---------
        abi : dict
            An object from a JSON ABI interface, representing a function.
        registry : TypeRegistry, optional
            Resolves the `type` of each input and output.

        Returns
        -------
        ContractMethod object.
        """
        registry = registry or default_registry()
        try:
            name = abi["name"]
            input_names = ",".join(item["type"] for item in abi.get("inputs", []))
            output_names = ",".join(item["type"] for item in abi.get("outputs", []))
            mutability = StateMutability.from_abi(abi)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise JSONError(f"Malformed ABI function entry: {e}", abi) from e

        with tag_exceptions(f"function {name}"):
            inputs = ParameterList.from_canonical(registry, input_names)
            outputs = ParameterList.from_canonical(registry, output_names)

        return cls(name, mutability.is_constant, inputs, outputs)

    @property
    def canonical_signature(self) -> str:
        return f"{self.name}({self.inputs.to_canonical()})"

    def encode_call(self, *args: Any) -> ByteWord:
        """
        Encode call data: the selector followed by the encoded arguments.

        `baz(uint32,bool)` with arguments `(69, True)` becomes
        `0xcdcd77c0` + 32-byte word for 69 + 32-byte word for 1.
        """
        return self.selector.concat(self.inputs.encode(args))

    def decode_response(self, data) -> List[Any]:
        return self.outputs.decode(data)

    def abi_signature(self) -> str:
        ret = self.canonical_signature
        if not self.outputs.is_empty():
            ret += f":({self.outputs.to_canonical()})"
        return ret

    def __eq__(self, other):
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented
        return self.selector == other.selector

    def __hash__(self):
        return hash((type(self), self.selector))

    def __str__(self):
        return self.abi_signature()

    def __repr__(self):
        return f"ContractMethod({self.abi_signature()!r}, constant={self.constant})"


@dataclass
class MethodSpec:
    """
    Field-by-field description of a method, validated by `build()`.
    """

    name: Optional[str] = None
    constant: bool = False
    inputs: TypesLike = EMPTY
    outputs: TypesLike = EMPTY

    def build(self, digest: Digest = keccak256) -> ContractMethod:
        if self.name is None:
            raise InstantiationException("Undefined contract method name")
        return ContractMethod(self.name, self.constant, self.inputs, self.outputs, digest)
