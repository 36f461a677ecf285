import pytest
from nm_elgamal.core import Group, PrivateKey, PublicKey, generate_key_pair


@pytest.fixture
def toy_group() -> Group:
    # p = 23, q = 11, g = 2: 2^11 = 2048 = 89 * 23 + 1.
    return Group(23, 11, 2)


@pytest.fixture
def toy_keys(toy_group: Group) -> tuple[PublicKey, PrivateKey]:
    public_key = PublicKey(toy_group, 8)
    return public_key, PrivateKey(toy_group, 3, public_key)


@pytest.fixture(scope="session")
def group() -> Group:
    return Group.standard(512)


@pytest.fixture(scope="session")
def keys(group: Group) -> tuple[PublicKey, PrivateKey]:
    return generate_key_pair(group)
