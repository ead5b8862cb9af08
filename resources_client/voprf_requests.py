import logging
import requests
from oprf.errors import TransportError, VoprfError
from oprf.ristretto255 import Ne
from oprf.voprf_ristretto255_sha512 import RESPONSE_LENGTH, VoprfClient, VoprfServer

logger = logging.getLogger(__name__)


class HttpTransport(object):
    def __init__(self, base_url: str, timeout: float = 10.0):
        if not base_url.endswith('/'):
            base_url += '/'
        self.base_url = base_url
        self.timeout = timeout

    def evaluate(self, body: bytes) -> bytes:
        headers = {"accept": "application/octet-stream",
                   "Content-Type": "application/octet-stream"}
        try:
            response = requests.post(self.base_url + "voprf", data=body, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"voprf request failed: {e}")
        return self._content(response)

    def public_key(self) -> bytes:
        headers = {"accept": "application/octet-stream"}
        try:
            response = requests.get(self.base_url + "pubkey", headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"public key request failed: {e}")
        return self._content(response)

    @staticmethod
    def _content(response) -> bytes:
        if response.status_code == 200:
            return response.content
        else:
            raise TransportError('Response Code: ' + str(response.status_code) + ' ' + response.text.strip())


class DirectTransport(object):
    """Calls a VoprfServer in process, speaking the same wire encoding."""

    def __init__(self, server: VoprfServer):
        self.server = server

    def evaluate(self, body: bytes) -> bytes:
        return self.server.blind_evaluate(body).serialize()

    def public_key(self) -> bytes:
        return self.server.public_key()


def get_public_key(transport) -> bytes:
    public_key = transport.public_key()
    if len(public_key) != Ne:
        raise TransportError(f"invalid public key length {len(public_key)}")
    return public_key


def voprf(transport, input: bytes, public_key: bytes = b'') -> bytes:
    client = VoprfClient(public_key or get_public_key(transport))
    state, blinded_element = client.blind(input)

    response = transport.evaluate(blinded_element)
    if len(response) != RESPONSE_LENGTH:
        raise TransportError(f"invalid response length {len(response)}")

    try:
        return client.finalize_response(state, response)
    except VoprfError as e:
        logger.warning("Discarding server response: %s", e)
        raise
