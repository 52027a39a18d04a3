from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

from abikit.abi_types import ABI_Address, ABI_Bool, ABI_BytesM, ABI_IntM, ABI_UIntM, ABIType
from abikit.contract import Contract
from abikit.method import ContractMethod, MethodSpec, StateMutability
from abikit.method_id import MethodSelector
from abikit.parameters import ParameterList
from abikit.registry import TypeRegistry, default_registry
from abikit.word import ByteWord, FixedWord

__version__: str
try:
    __version__ = _version(__name__)
except PackageNotFoundError:
    from abikit.version import version

    __version__ = version
