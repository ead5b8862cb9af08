# https://www.rfc-editor.org/rfc/rfc9380#section-5.3.1
# https://www.rfc-editor.org/rfc/rfc9497#section-4.1
# https://github.com/algorand/bls_sigs_ref/blob/master/sage-impl/hash_to_field.py

import hashlib
from .ristretto255 import HASH_BYTES, element_from_hash, scalar_reduce

MODE_OPRF = 0x00
MODE_VOPRF = 0x01
identifier = b"ristretto255-SHA512"

hash_fn = hashlib.sha512
Nh = hash_fn().digest_size


def strxor(str1: bytes, str2: bytes) -> bytes:
    return bytes(s1 ^ s2 for (s1, s2) in zip(str1, str2))


def I2OSP(val: int, length: int) -> bytes:
    val = int(val)
    if val < 0 or val >= (1 << (8 * length)):
        raise ValueError("bad I2OSP call: val=%d length=%d" % (val, length))
    return val.to_bytes(length, 'big')


def OS2IP(octets: bytes) -> int:
    return int.from_bytes(octets, 'big')


def encode_vector(data: bytes) -> bytes:
    return I2OSP(len(data), 2) + data


def CreateContextString(mode: int) -> bytes:
    return b'OPRFV1-' + I2OSP(mode, 1) + b'-' + identifier


def expand_message_xmd(msg: bytes, DST: bytes, len_in_bytes: int, hash_fn=hash_fn) -> bytes:
    # block and output sizes in bytes
    b_in_bytes = hash_fn().digest_size
    r_in_bytes = hash_fn().block_size

    # ell: number of blocks to hash
    ell = (len_in_bytes + b_in_bytes - 1) // b_in_bytes
    if ell < 1 or ell > 255:
        raise ValueError("expand_message_xmd: ell was %d; need 0 < ell <= 255" % ell)
    if len(DST) > 255:
        raise ValueError("expand_message_xmd: DST longer than 255 bytes")

    DST_prime = DST + I2OSP(len(DST), 1)
    Z_pad = I2OSP(0, r_in_bytes)
    l_i_b_str = I2OSP(len_in_bytes, 2)

    b_0 = hash_fn(Z_pad + msg + l_i_b_str + I2OSP(0, 1) + DST_prime).digest()
    b_vals = [hash_fn(b_0 + I2OSP(1, 1) + DST_prime).digest()]
    for idx in range(1, ell):
        b_vals.append(hash_fn(strxor(b_0, b_vals[idx - 1]) + I2OSP(idx + 1, 1) + DST_prime).digest())
    pseudo_random_bytes = b''.join(b_vals)
    return pseudo_random_bytes[0:len_in_bytes]


def HashToGroup(input: bytes, mode: int = MODE_VOPRF) -> bytes:
    DST = b'HashToGroup-' + CreateContextString(mode)
    return element_from_hash(expand_message_xmd(input, DST, HASH_BYTES))


def HashToScalar(input: bytes, mode: int = MODE_VOPRF, DST: bytes = b'') -> bytes:
    if not DST:
        DST = b'HashToScalar-' + CreateContextString(mode)
    return scalar_reduce(expand_message_xmd(input, DST, HASH_BYTES))


def Hash(input: bytes) -> bytes:
    return hash_fn(input).digest()
