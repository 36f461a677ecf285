from dataclasses import dataclass, field
from typing import Protocol
from Crypto.Util import number

from .group import Group, RandFunc


class GroupElements(Protocol):
    """Read access to the parameters of a group."""

    @property
    def p(self) -> int:
        ...

    @property
    def q(self) -> int:
        ...

    @property
    def g(self) -> int:
        ...


class _GroupAccess:
    group: Group

    @property
    def p(self) -> int:
        """The prime modulus of the group."""
        return self.group.p

    @property
    def q(self) -> int:
        """The order of the group."""
        return self.group.q

    @property
    def g(self) -> int:
        """The generator of the group."""
        return self.group.g

    @property
    def byte_length(self) -> int:
        return self.group.byte_length


@dataclass(frozen=True)
class PublicKey(_GroupAccess):
    """An ElGamal public key.

    Attributes:
        group: The group the key belongs to.
        y: The public exponentiation `g^x mod p`.
    """

    group: Group
    y: int

    def __post_init__(self) -> None:
        if self.y <= 0 or self.y >= self.group.p:
            raise ValueError("An invalid public key.")


@dataclass(frozen=True)
class PrivateKey(_GroupAccess):
    """An ElGamal private key.

    Attributes:
        group: The group the key belongs to.
        x: The private exponent in the range [1, q).
        public: The corresponding public key if already known. It is
            recomputed on demand otherwise.
    """

    group: Group
    x: int = field(repr=False)
    public: PublicKey | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.x <= 0 or self.x >= self.group.q:
            raise ValueError("An invalid private key.")
        if self.public is not None:
            if self.public.group != self.group:
                raise ValueError("The public key belongs to another group.")
            if self.public.y != pow(self.group.g, self.x, self.group.p):
                raise ValueError("The public key does not match.")

    @property
    def public_key(self) -> PublicKey:
        """Returns the public key corresponding to this private key."""
        if self.public is not None:
            return self.public
        return PublicKey(self.group, pow(self.g, self.x, self.p))


def random_exponent(
    group: GroupElements,
    randfunc: RandFunc | None = None,
    nonce: int | None = None,
) -> int:
    """Returns an exponent drawn uniformly from [1, q).

    If `nonce` is given, it is validated and returned instead.
    """
    if nonce is None:
        return number.getRandomRange(1, group.q, randfunc)
    if nonce <= 0 or nonce >= group.q:
        raise ValueError("An invalid nonce.")
    return nonce


def generate_exponents(
    group: Group, randfunc: RandFunc | None = None
) -> tuple[int, int]:
    """Generates a pair of public and private exponents.

    Args:
        group: The group to generate the exponents for.
        randfunc: A function returning random bytes.

    Returns:
        A tuple `(y, x)` where `x` is drawn uniformly from [1, q) and
        `y = g^x mod p`.
    """
    x = random_exponent(group, randfunc)
    y = pow(group.g, x, group.p)
    return y, x


def generate_key_pair(
    group: Group, randfunc: RandFunc | None = None
) -> tuple[PublicKey, PrivateKey]:
    """Generates a new key pair.

    Args:
        group: The group to generate the key pair for.
        randfunc: A function returning random bytes.

    Returns:
        A tuple of the public key and the corresponding private key.
    """
    y, x = generate_exponents(group, randfunc)
    public_key = PublicKey(group, y)
    return public_key, PrivateKey(group, x, public_key)
