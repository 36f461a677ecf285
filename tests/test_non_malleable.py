import pytest
from Crypto.Hash import SHA512
from Crypto.Util import number

from nm_elgamal.core import (
    InvalidDataError,
    InvalidPrivateKeyError,
    MessageTooLongError,
    PrivateKey,
    PublicKey,
    VerificationError,
    decrypt,
    non_malleable_decrypt,
    non_malleable_decrypt_message,
    non_malleable_encrypt,
    non_malleable_encrypt_message,
)


Keys = tuple[PublicKey, PrivateKey]


def test_encrypt_decrypt(keys: Keys) -> None:
    public_key, private_key = keys
    for _ in range(8):
        m = number.getRandomRange(0, public_key.p)
        ciphertext = non_malleable_encrypt(public_key, m)
        a, b, c, d = ciphertext
        assert 0 <= a < public_key.p
        assert 0 <= b < public_key.p
        assert 0 <= c < public_key.q
        assert 0 <= d < public_key.q
        assert non_malleable_decrypt(private_key, ciphertext) == m


def test_inner_ciphertext_is_plain_el_gamal(keys: Keys) -> None:
    public_key, private_key = keys
    a, b, _, _ = non_malleable_encrypt(public_key, 0xDEADBEEF)
    assert decrypt(private_key, (a, b)) == 0xDEADBEEF


def test_toy_group(toy_keys: Keys) -> None:
    public_key, private_key = toy_keys
    for m in range(23):
        ciphertext = non_malleable_encrypt(public_key, m)
        assert non_malleable_decrypt(private_key, ciphertext) == m


def test_custom_hash(keys: Keys) -> None:
    public_key, private_key = keys
    ciphertext = non_malleable_encrypt(public_key, 42, hash_algo=SHA512)
    assert non_malleable_decrypt(private_key, ciphertext, hash_algo=SHA512) == 42
    with pytest.raises(VerificationError):
        non_malleable_decrypt(private_key, ciphertext)


@pytest.mark.parametrize("index", [0, 1, 2, 3])
def test_rejects_tampered_component(keys: Keys, index: int) -> None:
    public_key, private_key = keys
    ciphertext = list(non_malleable_encrypt(public_key, 0xDEADBEEF))

    ciphertext[index] ^= 1
    with pytest.raises(VerificationError):
        non_malleable_decrypt(private_key, tuple(ciphertext))


def test_rejects_mauled_plaintext(keys: Keys) -> None:
    # Multiplying `b` by 2 would double the plaintext of a plain
    # ElGamal ciphertext.
    public_key, private_key = keys
    a, b, c, d = non_malleable_encrypt(public_key, 21)
    assert decrypt(private_key, (a, (2 * b) % public_key.p)) == 42
    with pytest.raises(VerificationError):
        non_malleable_decrypt(private_key, (a, (2 * b) % public_key.p, c, d))


def _shift(
    ciphertext: tuple[int, ...], index: int, offset: int
) -> tuple[int, ...]:
    shifted = list(ciphertext)
    shifted[index] += offset
    return tuple(shifted)


@pytest.mark.parametrize(
    ("index", "modulus"), [(0, "p"), (1, "p"), (2, "q"), (3, "q")]
)
def test_rejects_out_of_range_component(
    keys: Keys, index: int, modulus: str
) -> None:
    # `g` has order `q`, so `d + q` would reproduce the same commitment.
    public_key, private_key = keys
    ciphertext = non_malleable_encrypt(public_key, 0xDEADBEEF)
    offset = getattr(public_key, modulus)

    with pytest.raises(VerificationError):
        non_malleable_decrypt(private_key, _shift(ciphertext, index, offset))


@pytest.mark.parametrize("index", [0, 1, 2, 3])
def test_rejects_negative_component(keys: Keys, index: int) -> None:
    public_key, private_key = keys
    ciphertext = non_malleable_encrypt(public_key, 0xDEADBEEF)

    with pytest.raises(VerificationError):
        non_malleable_decrypt(private_key, _shift(ciphertext, index, -10**6))


@pytest.mark.parametrize(
    ("index", "modulus"), [(0, "p"), (2, "q"), (3, "q")]
)
def test_rejects_out_of_range_encoded_component(
    toy_keys: Keys, index: int, modulus: str
) -> None:
    public_key, private_key = toy_keys
    ciphertext = non_malleable_encrypt(public_key, 5)
    offset = getattr(public_key, modulus)

    encoded = b"".join(
        number.long_to_bytes(value, public_key.byte_length)
        for value in _shift(ciphertext, index, offset)
    )
    assert len(encoded) == 4 * public_key.byte_length
    with pytest.raises(VerificationError):
        non_malleable_decrypt_message(private_key, encoded)


@pytest.mark.parametrize("index", [2, 3])
def test_rejects_shifted_response_bytes(keys: Keys, index: int) -> None:
    public_key, private_key = keys
    width = public_key.byte_length
    ciphertext = bytearray(
        non_malleable_encrypt_message(public_key, b"An important message !")
    )

    chunk = slice(index * width, (index + 1) * width)
    value = number.bytes_to_long(ciphertext[chunk]) + public_key.q
    ciphertext[chunk] = number.long_to_bytes(value, width)
    assert len(ciphertext) == 4 * width
    with pytest.raises(VerificationError):
        non_malleable_decrypt_message(private_key, bytes(ciphertext))


def test_rejects_non_invertible(keys: Keys) -> None:
    _, private_key = keys
    with pytest.raises(InvalidPrivateKeyError):
        non_malleable_decrypt(private_key, (0, 1, 1, 1))


def test_rejects_long_plaintext(toy_keys: Keys) -> None:
    public_key, _ = toy_keys
    with pytest.raises(MessageTooLongError):
        non_malleable_encrypt(public_key, 23)


def test_encrypt_decrypt_message(keys: Keys) -> None:
    public_key, private_key = keys
    message = b"An important message !"

    ciphertext = non_malleable_encrypt_message(public_key, message)
    assert len(ciphertext) == 4 * public_key.byte_length
    assert non_malleable_decrypt_message(private_key, ciphertext) == message


@pytest.mark.parametrize("position", [0, 63, 64, 127, 128, 191, 192, 255])
def test_rejects_flipped_byte(keys: Keys, position: int) -> None:
    public_key, private_key = keys
    ciphertext = bytearray(
        non_malleable_encrypt_message(public_key, b"An important message !")
    )

    ciphertext[position] ^= 0x01
    with pytest.raises(VerificationError):
        non_malleable_decrypt_message(private_key, bytes(ciphertext))


@pytest.mark.parametrize("ciphertext", [b"", b"\x01\x02", b"\x00" * 255])
def test_decrypt_message_rejects_length(keys: Keys, ciphertext: bytes) -> None:
    _, private_key = keys
    with pytest.raises(InvalidDataError):
        non_malleable_decrypt_message(private_key, ciphertext)
