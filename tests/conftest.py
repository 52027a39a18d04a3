import hypothesis
import pytest

from abikit.registry import default_registry
from abikit.settings import Settings, anchor_settings
from abikit.utils import keccak256

############
# PATCHING #
############


# disable hypothesis deadline globally
hypothesis.settings.register_profile("ci", deadline=None)
hypothesis.settings.load_profile("ci")


def pytest_configure(config):
    config.addinivalue_line("markers", "fuzzing: hypothesis driven property tests")


@pytest.fixture
def keccak():
    return keccak256


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def lowercase_addresses():
    with anchor_settings(Settings(checksum_addresses=False)):
        yield


@pytest.fixture
def make_file(tmp_path):
    # writes file_contents to file_name, creating it in the
    # tmp_path directory. returns final path.
    def fn(file_name, file_contents):
        path = tmp_path / file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w") as f:
            f.write(file_contents)

        return path

    return fn
