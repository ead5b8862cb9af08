class VoprfError(Exception):
    pass


# request scoped

class MalformedEncoding(VoprfError):
    pass


class InvalidElement(VoprfError):
    pass


class InvalidScalar(VoprfError):
    pass


class InvalidInput(VoprfError):
    pass


class ProofVerificationFailed(VoprfError):
    pass


class ClientStateReused(VoprfError):
    pass


class TransportError(VoprfError):
    pass


# initialization scoped

class DivisionByZero(VoprfError):
    pass


class InvalidSeed(VoprfError):
    pass


class DeriveKeyPairError(VoprfError):
    pass


class SecretUnavailable(VoprfError):
    pass
