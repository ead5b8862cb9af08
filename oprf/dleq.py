# https://www.rfc-editor.org/rfc/rfc9497#section-2.2
#
# Discrete log equality proof: log_A(B) == log_C(D), i.e. the evaluated
# element D was computed from the blinded element C with the key behind the
# public key B = k*A. Single (C, D) pair, no batching.

import logging
from typing import NamedTuple
from nacl.utils import random
from cryptography.hazmat.primitives import constant_time
from .errors import InvalidElement, MalformedEncoding
from .hash_to_group import MODE_VOPRF, CreateContextString, HashToScalar, Hash, I2OSP, encode_vector
from .ristretto255 import Ns, Rng, deserialize_scalar, element_add, random_scalar, scalar_mult, scalar_mul, \
    scalar_sub, serialize_element, serialize_scalar

logger = logging.getLogger(__name__)

Np = 2 * Ns


class Proof(NamedTuple):
    c: bytes
    s: bytes

    def serialize(self) -> bytes:
        return serialize_scalar(self.c) + serialize_scalar(self.s)

    @classmethod
    def deserialize(cls, data: bytes) -> "Proof":
        if len(data) != Np:
            raise MalformedEncoding("Proof must be %d bytes, got %d" % (Np, len(data)))
        return cls(deserialize_scalar(data[:Ns]), deserialize_scalar(data[Ns:]))


def _composite_scalar(B: bytes, C: bytes, D: bytes, mode: int) -> bytes:
    Bm = serialize_element(B)
    seedDST = b"Seed-" + CreateContextString(mode)
    seed = Hash(encode_vector(Bm) + encode_vector(seedDST))

    compositeTranscript = encode_vector(seed) + I2OSP(0, 2) + \
        encode_vector(serialize_element(C)) + encode_vector(serialize_element(D)) + b"Composite"
    return HashToScalar(compositeTranscript, mode)


def ComputeComposites(B: bytes, C: bytes, D: bytes, mode: int = MODE_VOPRF) -> tuple[bytes, bytes]:
    d = _composite_scalar(B, C, D, mode)
    return scalar_mult(d, C), scalar_mult(d, D)


def ComputeCompositesFast(k: bytes, B: bytes, C: bytes, D: bytes, mode: int = MODE_VOPRF) -> tuple[bytes, bytes]:
    d = _composite_scalar(B, C, D, mode)
    M = scalar_mult(d, C)
    return M, scalar_mult(k, M)


def _challenge(B: bytes, M: bytes, Z: bytes, t2: bytes, t3: bytes, mode: int) -> bytes:
    challengeTranscript = encode_vector(serialize_element(B)) + \
                          encode_vector(serialize_element(M)) + \
                          encode_vector(serialize_element(Z)) + \
                          encode_vector(serialize_element(t2)) + \
                          encode_vector(serialize_element(t3)) + \
                          b"Challenge"
    return HashToScalar(challengeTranscript, mode)


def GenerateProof(k: bytes, A: bytes, B: bytes, C: bytes, D: bytes, rng: Rng = random,
                  mode: int = MODE_VOPRF) -> Proof:
    M, Z = ComputeCompositesFast(k, B, C, D, mode)

    r = random_scalar(rng)
    t2 = scalar_mult(r, A)
    t3 = scalar_mult(r, M)

    c = _challenge(B, M, Z, t2, t3, mode)
    s = scalar_sub(r, scalar_mul(c, k))
    return Proof(c, s)


def VerifyProof(A: bytes, B: bytes, C: bytes, D: bytes, proof: Proof, mode: int = MODE_VOPRF) -> bool:
    c, s = proof
    try:
        M, Z = ComputeComposites(B, C, D, mode)
        t2 = element_add(scalar_mult(s, A), scalar_mult(c, B))
        t3 = element_add(scalar_mult(s, M), scalar_mult(c, Z))
    except InvalidElement as e:
        # only reachable with a degenerate (zero) c or s
        logger.warning("Rejecting degenerate proof: %s", e)
        return False

    expectedC = _challenge(B, M, Z, t2, t3, mode)
    return constant_time.bytes_eq(expectedC, c)
