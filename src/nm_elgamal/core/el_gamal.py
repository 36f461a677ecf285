#!/usr/bin/env python3

from typing import TypeAlias
from Crypto.Util import number

from .encoding import decode_components, encode_components
from .errors import InvalidPrivateKeyError, MessageTooLongError
from .group import Group, RandFunc
from .keys import PrivateKey, PublicKey, generate_key_pair, random_exponent


Ciphertext: TypeAlias = tuple[int, int]


def _check_plaintext(public_key: PublicKey, m: int) -> None:
    """Checks that `m` can be encrypted under `public_key`.

    Raises:
        MessageTooLongError: `m` is longer than the modulus, or not
            smaller than it.
    """
    if m < 0:
        raise ValueError("The plaintext must be non-negative.")
    if m.bit_length() > public_key.p.bit_length():
        raise MessageTooLongError("The plaintext is longer than the modulus.")
    if m >= public_key.p:
        raise MessageTooLongError("The plaintext must be in the range [0, p).")


def encrypt(
    public_key: PublicKey,
    m: int,
    randfunc: RandFunc | None = None,
    nonce: int | None = None,
) -> Ciphertext:
    """Encrypts a plaintext using the ElGamal cryptosystem.

    Args:
        public_key: The public key.
        m: The plaintext.
        randfunc: A function returning random bytes.
        nonce: The ephemeral exponent. If `None`, a random exponent in
            [1, q) is used.

    Returns:
        The ciphertext `(g^r mod p, m * y^r mod p)`.
    """
    _check_plaintext(public_key, m)

    p = public_key.p
    r = random_exponent(public_key, randfunc, nonce)
    a = pow(public_key.g, r, p)
    b = (m * pow(public_key.y, r, p)) % p
    return a, b


def reencrypt(
    public_key: PublicKey,
    ciphertext: Ciphertext,
    randfunc: RandFunc | None = None,
    nonce: int | None = None,
) -> Ciphertext:
    """Re-encrypts a ciphertext using the ElGamal cryptosystem.

    The result decrypts to the same plaintext as `ciphertext` but is
    independent of its randomness. The plaintext is never recovered.

    Args:
        public_key: The public key.
        ciphertext: The ciphertext.
        randfunc: A function returning random bytes.
        nonce: The fresh ephemeral exponent. If `None`, a random
            exponent in [1, q) is used.

    Returns:
        The re-encrypted ciphertext.
    """
    a, b = ciphertext
    p = public_key.p
    r = random_exponent(public_key, randfunc, nonce)
    a = (a * pow(public_key.g, r, p)) % p
    b = (b * pow(public_key.y, r, p)) % p
    return a, b


def decrypt(private_key: PrivateKey, ciphertext: Ciphertext) -> int:
    """Decrypts a ciphertext using the ElGamal cryptosystem.

    Args:
        private_key: The private key.
        ciphertext: The ciphertext.

    Returns:
        The plaintext.

    Raises:
        InvalidPrivateKeyError: `a^x mod p` is not invertible.
    """
    a, b = ciphertext
    p = private_key.p
    shared = pow(a, private_key.x, p)
    if number.GCD(shared, p) != 1:
        raise InvalidPrivateKeyError("Failed to invert `a^x mod p'.")
    denominator = number.inverse(shared, p)
    return (b * denominator) % p


def encrypt_message(
    public_key: PublicKey, message: bytes, randfunc: RandFunc | None = None
) -> bytes:
    """Encrypts a big-endian encoded plaintext.

    Returns:
        The fixed-width encodings of `a` and `b`, concatenated.
    """
    m = number.bytes_to_long(message)
    ciphertext = encrypt(public_key, m, randfunc)
    return encode_components(ciphertext, public_key.byte_length)


def decrypt_message(private_key: PrivateKey, ciphertext: bytes) -> bytes:
    """Decrypts the output of `encrypt_message`.

    The plaintext is returned in its minimal big-endian form: leading
    zero bytes are dropped, and an empty message comes back as a single
    zero byte.

    Raises:
        InvalidDataError: The length of `ciphertext` is odd.
    """
    a, b = decode_components(ciphertext, 2)
    return number.long_to_bytes(decrypt(private_key, (a, b)))


def _main() -> None:
    group = Group.standard(3072)
    public_key, private_key = generate_key_pair(group)

    plaintext = 0xDEADBEEF
    ciphertext = encrypt(public_key, plaintext)
    decrypted_text = decrypt(private_key, ciphertext)
    assert decrypted_text == plaintext

    reencrypted_ciphertext = reencrypt(public_key, ciphertext)
    decrypted_text = decrypt(private_key, reencrypted_ciphertext)
    assert decrypted_text == plaintext

    message = b"An important message !"
    decrypted_message = decrypt_message(
        private_key, encrypt_message(public_key, message)
    )
    assert decrypted_message == message


if __name__ == "__main__":
    _main()
