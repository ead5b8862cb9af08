# https://datatracker.ietf.org/doc/html/rfc9496
# https://libsodium.gitbook.io/doc/advanced/point-arithmetic/ristretto

from typing import Callable
from nacl.utils import random
from nacl.bindings import sodium_memcmp
from pysodium import crypto_core_ristretto255_is_valid_point, crypto_core_ristretto255_add, \
    crypto_core_ristretto255_from_hash, crypto_scalarmult_ristretto255, crypto_scalarmult_ristretto255_base, \
    crypto_core_ristretto255_scalar_add, crypto_core_ristretto255_scalar_sub, crypto_core_ristretto255_scalar_mul, \
    crypto_core_ristretto255_scalar_negate, crypto_core_ristretto255_scalar_invert, \
    crypto_core_ristretto255_scalar_reduce
from .errors import MalformedEncoding, InvalidElement, InvalidScalar, DivisionByZero

Ns = 32
Ne = 32
HASH_BYTES = 64

# 2^252 + 27742317777372353535851937790883648493
ORDER = 0x1000000000000000000000000000000014def9dea2f79cd65812631a5cf5d3ed

IDENTITY = bytes(Ne)
ZERO = bytes(Ns)
ONE = (1).to_bytes(Ns, 'little')

Rng = Callable[[int], bytes]


# Scalars

def scalar_from_int(value: int) -> bytes:
    return (value % ORDER).to_bytes(Ns, 'little')


def scalar_to_int(scalar: bytes) -> int:
    return int.from_bytes(scalar, 'little')


def scalar_is_zero(scalar: bytes) -> bool:
    return sodium_memcmp(scalar, ZERO)


def scalar_add(x: bytes, y: bytes) -> bytes:
    return crypto_core_ristretto255_scalar_add(x, y)


def scalar_sub(x: bytes, y: bytes) -> bytes:
    return crypto_core_ristretto255_scalar_sub(x, y)


def scalar_mul(x: bytes, y: bytes) -> bytes:
    return crypto_core_ristretto255_scalar_mul(x, y)


def scalar_negate(x: bytes) -> bytes:
    return crypto_core_ristretto255_scalar_negate(x)


def scalar_invert(x: bytes) -> bytes:
    if scalar_is_zero(x):
        raise DivisionByZero("Cannot invert the zero scalar")
    try:
        return crypto_core_ristretto255_scalar_invert(x)
    except ValueError:
        raise DivisionByZero("Cannot invert the zero scalar")


def scalar_reduce(uniform_bytes: bytes) -> bytes:
    if len(uniform_bytes) != HASH_BYTES:
        raise ValueError("scalar_reduce needs %d bytes, got %d" % (HASH_BYTES, len(uniform_bytes)))
    return crypto_core_ristretto255_scalar_reduce(uniform_bytes)


def random_scalar(rng: Rng = random) -> bytes:
    """Uniform nonzero scalar. 64 bytes from rng are reduced mod ORDER; a zero
    result is thrown away and a fresh sample drawn."""
    while True:
        scalar = scalar_reduce(rng(HASH_BYTES))
        if not scalar_is_zero(scalar):
            return scalar


def serialize_scalar(scalar: bytes) -> bytes:
    return bytes(scalar)


def deserialize_scalar(data: bytes) -> bytes:
    if len(data) != Ns:
        raise MalformedEncoding("Scalar must be %d bytes, got %d" % (Ns, len(data)))
    if scalar_to_int(data) >= ORDER:
        raise InvalidScalar("Non-canonical scalar encoding")
    return bytes(data)


# Elements

def is_identity(element: bytes) -> bool:
    return sodium_memcmp(element, IDENTITY)


def element_equal(p: bytes, q: bytes) -> bool:
    return sodium_memcmp(p, q)


def element_from_hash(uniform_bytes: bytes) -> bytes:
    return crypto_core_ristretto255_from_hash(uniform_bytes)


def element_add(p: bytes, q: bytes) -> bytes:
    try:
        return crypto_core_ristretto255_add(p, q)
    except ValueError:
        raise InvalidElement("Point addition on an invalid element")


def scalar_mult(scalar: bytes, element: bytes) -> bytes:
    # libsodium refuses invalid points and an identity result
    try:
        return crypto_scalarmult_ristretto255(scalar, element)
    except ValueError:
        raise InvalidElement("Scalar multiplication produced no valid element")


def scalar_mult_base(scalar: bytes) -> bytes:
    try:
        return crypto_scalarmult_ristretto255_base(scalar)
    except ValueError:
        raise InvalidElement("Scalar multiplication produced no valid element")


def serialize_element(element: bytes) -> bytes:
    return bytes(element)


def deserialize_element(data: bytes) -> bytes:
    if len(data) != Ne:
        raise MalformedEncoding("Element must be %d bytes, got %d" % (Ne, len(data)))
    data = bytes(data)
    if is_identity(data):
        raise InvalidElement("Identity element is not allowed")
    if not crypto_core_ristretto255_is_valid_point(data):
        raise InvalidElement("Not a canonical ristretto255 encoding")
    return data


def validate_element(element: bytes) -> bytes:
    """Same checks as deserialize_element, for values that did not come off the wire."""
    return deserialize_element(element)


GENERATOR = scalar_mult_base(ONE)
