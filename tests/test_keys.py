import pytest

from nm_elgamal.core import (
    Group,
    PrivateKey,
    PublicKey,
    generate_exponents,
    generate_key_pair,
)


def test_generate_exponents(group: Group) -> None:
    y, x = generate_exponents(group)
    assert 1 <= x < group.q
    assert y == pow(group.g, x, group.p)


def test_generate_key_pair(group: Group) -> None:
    public_key, private_key = generate_key_pair(group)

    assert public_key.group == group
    assert private_key.group == group
    assert public_key.y == pow(group.g, private_key.x, group.p)
    assert private_key.public_key is public_key
    assert (public_key.p, public_key.q, public_key.g) == group.parameters
    assert (private_key.p, private_key.q, private_key.g) == group.parameters


def test_key_pairs_differ(group: Group) -> None:
    _, private_key0 = generate_key_pair(group)
    _, private_key1 = generate_key_pair(group)
    assert private_key0.x != private_key1.x


def test_public_key_recomputed(toy_group: Group) -> None:
    private_key = PrivateKey(toy_group, 3)
    assert private_key.public is None
    assert private_key.public_key == PublicKey(toy_group, 8)


def test_cached_public_key_ignored_by_equality(
    toy_keys: tuple[PublicKey, PrivateKey]
) -> None:
    _, private_key = toy_keys
    assert private_key == PrivateKey(private_key.group, 3)


def test_repr_hides_private_exponent() -> None:
    private_key = PrivateKey(Group.standard(512), 0x1234567)
    assert "x=" not in repr(private_key)


@pytest.mark.parametrize("x", [0, -1, 11, 12])
def test_rejects_invalid_private_exponent(toy_group: Group, x: int) -> None:
    with pytest.raises(ValueError):
        PrivateKey(toy_group, x)


@pytest.mark.parametrize("y", [0, 23, 24])
def test_rejects_invalid_public_value(toy_group: Group, y: int) -> None:
    with pytest.raises(ValueError):
        PublicKey(toy_group, y)


def test_rejects_mismatching_public_key(toy_group: Group) -> None:
    with pytest.raises(ValueError):
        PrivateKey(toy_group, 3, PublicKey(toy_group, 16))
