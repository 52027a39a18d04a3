import contextlib
import dataclasses
import os
from dataclasses import dataclass
from typing import Generator, Optional

ABIKIT_CHECKSUM_ADDRESSES = os.environ.get("ABIKIT_CHECKSUM_ADDRESSES", "1") == "1"

ABIKIT_TRACEBACK_LIMIT: Optional[int]

_tb_limit_str = os.environ.get("ABIKIT_TRACEBACK_LIMIT")
if _tb_limit_str is not None:
    ABIKIT_TRACEBACK_LIMIT = int(_tb_limit_str)
else:
    ABIKIT_TRACEBACK_LIMIT = None


@dataclass
class Settings:
    # decode addresses to their EIP-55 checksummed form
    checksum_addresses: Optional[bool] = None

    def __post_init__(self):
        # sanity check inputs
        if self.checksum_addresses is not None:
            assert isinstance(self.checksum_addresses, bool)

    def get_checksum_addresses(self) -> bool:
        if self.checksum_addresses is None:
            return ABIKIT_CHECKSUM_ADDRESSES
        return self.checksum_addresses

    def as_dict(self):
        ret = dataclasses.asdict(self)
        return {k: v for (k, v) in ret.items() if v is not None}

    @classmethod
    def from_dict(cls, data):
        return cls(**data)


_settings = Settings()


def get_global_settings() -> Settings:
    return _settings


def set_global_settings(new_settings: Settings) -> None:
    assert isinstance(new_settings, Settings)

    global _settings
    _settings = new_settings


@contextlib.contextmanager
def anchor_settings(new_settings: Settings) -> Generator:
    """
    Set the globally available settings for the duration of this context manager
    """
    assert new_settings is not None
    tmp = get_global_settings()
    try:
        set_global_settings(new_settings)
        yield
    finally:
        set_global_settings(tmp)
