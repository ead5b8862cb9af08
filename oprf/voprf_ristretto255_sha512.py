# https://www.rfc-editor.org/rfc/rfc9497
# VOPRF(ristretto255, SHA-512), mode 0x01

import logging
from typing import NamedTuple
from nacl.utils import random
from .dleq import Np, Proof, GenerateProof, VerifyProof
from .errors import ClientStateReused, DeriveKeyPairError, InvalidElement, InvalidInput, InvalidScalar, \
    InvalidSeed, MalformedEncoding, ProofVerificationFailed
from .hash_to_group import MODE_VOPRF, CreateContextString, Hash, HashToGroup, HashToScalar, I2OSP, encode_vector
from .ristretto255 import Ne, Ns, Rng, GENERATOR, deserialize_element, is_identity, random_scalar, scalar_invert, \
    scalar_is_zero, scalar_mult, scalar_mult_base, serialize_element, validate_element

logger = logging.getLogger(__name__)

Nseed = 32
MAX_INPUT_LENGTH = (1 << 16) - 1
RESPONSE_LENGTH = Ne + Np


class KeyPair(NamedTuple):
    skS: bytes
    pkS: bytes


class ClientState(object):
    """Blind and input of one in-flight exchange. Finalize consumes it."""

    def __init__(self, input: bytes, blind: bytes, blinded_element: bytes, mode: int = MODE_VOPRF):
        self.input = input
        self.blind = blind
        self.blinded_element = blinded_element
        self.mode = mode
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def consume(self):
        if self._consumed:
            raise ClientStateReused("Client state was already used for a finalize")
        self._consumed = True


class EvaluationResponse(NamedTuple):
    evaluated_element: bytes
    proof: Proof

    def serialize(self) -> bytes:
        return serialize_element(self.evaluated_element) + self.proof.serialize()

    @classmethod
    def deserialize(cls, data: bytes) -> "EvaluationResponse":
        if len(data) != RESPONSE_LENGTH:
            raise MalformedEncoding("Evaluation response must be %d bytes, got %d" % (RESPONSE_LENGTH, len(data)))
        return cls(deserialize_element(data[:Ne]), Proof.deserialize(data[Ne:]))


# https://www.rfc-editor.org/rfc/rfc9497#section-3.2.1
def DeriveKeyPair(seed: bytes, info: bytes, mode: int = MODE_VOPRF) -> KeyPair:
    if len(seed) < Nseed:
        raise InvalidSeed("Seed must be at least %d bytes, got %d" % (Nseed, len(seed)))
    deriveInput = seed + encode_vector(info)
    DST = b"DeriveKeyPair" + CreateContextString(mode)
    counter = 0
    skS = bytes(Ns)
    while scalar_is_zero(skS):
        if counter > 255:
            raise DeriveKeyPairError("Derive Key Pair Error")
        skS = HashToScalar(deriveInput + I2OSP(counter, 1), mode, DST)
        counter = counter + 1
    pkS = scalar_mult_base(skS)
    return KeyPair(skS, pkS)


def _check_input(input: bytes):
    if len(input) > MAX_INPUT_LENGTH:
        raise InvalidInput("Input longer than %d bytes" % MAX_INPUT_LENGTH)


def Blind(input: bytes, rng: Rng = random, mode: int = MODE_VOPRF) -> tuple[ClientState, bytes]:
    _check_input(input)
    inputElement = HashToGroup(input, mode)
    if is_identity(inputElement):
        raise InvalidElement("Input hashes to the identity element")
    blind = random_scalar(rng)
    blindedElement = scalar_mult(blind, inputElement)
    return ClientState(input, blind, blindedElement, mode), blindedElement


def BlindEvaluate(keyPair: KeyPair, blindedElement: bytes, rng: Rng = random,
                  mode: int = MODE_VOPRF) -> tuple[bytes, Proof]:
    blindedElement = validate_element(blindedElement)
    evaluatedElement = scalar_mult(keyPair.skS, blindedElement)
    proof = GenerateProof(keyPair.skS, GENERATOR, keyPair.pkS, blindedElement, evaluatedElement, rng, mode)
    return evaluatedElement, proof


def Unblind(blind: bytes, evaluatedElement: bytes) -> bytes:
    return serialize_element(scalar_mult(scalar_invert(blind), evaluatedElement))


def FinalizeHash(input: bytes, unblindedElement: bytes) -> bytes:
    hashInput = encode_vector(input) + encode_vector(unblindedElement) + b'Finalize'
    return Hash(hashInput)


def Finalize(state: ClientState, evaluatedElement: bytes, proof: Proof, pkS: bytes) -> bytes:
    state.consume()
    evaluatedElement = validate_element(evaluatedElement)
    pkS = validate_element(pkS)
    if not VerifyProof(GENERATOR, pkS, state.blinded_element, evaluatedElement, proof, state.mode):
        logger.warning("Proof verification failed, discarding evaluation")
        raise ProofVerificationFailed("Server proof does not verify against the public key")
    return FinalizeHash(state.input, Unblind(state.blind, evaluatedElement))


def Evaluate(skS: bytes, input: bytes, mode: int = MODE_VOPRF) -> bytes:
    _check_input(input)
    inputElement = HashToGroup(input, mode)
    if is_identity(inputElement):
        raise InvalidElement("Input hashes to the identity element")
    evaluatedElement = scalar_mult(skS, inputElement)
    return FinalizeHash(input, serialize_element(evaluatedElement))


class VoprfServer(object):
    def __init__(self, key_pair: KeyPair, rng: Rng = random):
        self._key_pair = key_pair
        self._rng = rng

    @classmethod
    def new_from_seed(cls, seed: bytes, info: bytes, rng: Rng = random) -> "VoprfServer":
        return cls(DeriveKeyPair(seed, info), rng)

    def public_key(self) -> bytes:
        return self._key_pair.pkS

    def blind_evaluate(self, blinded_element: bytes) -> EvaluationResponse:
        evaluated_element, proof = BlindEvaluate(self._key_pair, blinded_element, self._rng)
        return EvaluationResponse(evaluated_element, proof)

    def evaluate(self, input: bytes) -> bytes:
        return Evaluate(self._key_pair.skS, input)


class VoprfClient(object):
    def __init__(self, public_key: bytes, rng: Rng = random):
        self.public_key = deserialize_element(public_key)
        self._rng = rng

    def blind(self, input: bytes) -> tuple[ClientState, bytes]:
        return Blind(input, self._rng)

    def finalize(self, state: ClientState, evaluated_element: bytes, proof: Proof) -> bytes:
        return Finalize(state, evaluated_element, proof, self.public_key)

    def finalize_response(self, state: ClientState, body: bytes) -> bytes:
        try:
            response = EvaluationResponse.deserialize(body)
        except (MalformedEncoding, InvalidElement, InvalidScalar):
            # a reused state still reports the decode error
            if not state.consumed:
                state.consume()
            raise
        return self.finalize(state, response.evaluated_element, response.proof)
