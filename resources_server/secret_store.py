import os
import logging
import binascii
from typing import Optional
from nacl.encoding import Base64Encoder
from oprf.errors import SecretUnavailable

logger = logging.getLogger(__name__)

ENVIRONMENT_PREFIX = "VOPRF_SECRET_"


class SecretStore(object):
    """Read-only source of server key material."""

    def get(self, name: str) -> Optional[bytes]:
        raise NotImplementedError


class DatabaseSecretStore(SecretStore):
    # needs an app context
    def __init__(self, db):
        self.db = db

    def get(self, name: str) -> Optional[bytes]:
        from model import Secrets
        secret_db = self.db.session.get(Secrets, name)
        if not secret_db:
            return None
        return _decode(name, secret_db.value)


class EnvironmentSecretStore(SecretStore):
    def __init__(self, environ=None, prefix=ENVIRONMENT_PREFIX):
        self.environ = os.environ if environ is None else environ
        self.prefix = prefix

    def get(self, name: str) -> Optional[bytes]:
        value = self.environ.get(self.prefix + name.upper())
        if not value:
            return None
        return _decode(name, value)


def _decode(name: str, value: str) -> bytes:
    try:
        return Base64Encoder.decode(value.encode('utf-8'))
    except (binascii.Error, ValueError):
        raise SecretUnavailable(f"secret ({name}) is not valid base64")


def open_secret_store(kind: str, db=None) -> SecretStore:
    if kind == "database":
        if db is None:
            raise SecretUnavailable("secret store could not be opened: no database")
        return DatabaseSecretStore(db)
    elif kind == "environment":
        return EnvironmentSecretStore()
    else:
        raise SecretUnavailable(f"secret store could not be opened: unknown store {kind}")


def load_seed(store: SecretStore, name: str) -> bytes:
    seed = store.get(name)
    if not seed:
        raise SecretUnavailable(f"missing secret ({name}) from store")
    logger.info("Loaded secret %s (%d bytes)", name, len(seed))
    return seed
