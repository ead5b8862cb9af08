import os
os.environ.setdefault("VOPRF_DATABASE_URI", "sqlite://")

import time
import unittest
from nacl.encoding import Base64Encoder
from config import app, db
from model import Secrets
from oprf.errors import SecretUnavailable
from resources_server.secret_store import DatabaseSecretStore, EnvironmentSecretStore, \
    load_seed, open_secret_store

seed = bytes(range(32))
seed_b64 = Base64Encoder.encode(seed).decode('utf-8')


class TestEnvironmentSecretStore(unittest.TestCase):
    def test_get(self):
        store = EnvironmentSecretStore({'VOPRF_SECRET_SEED': seed_b64})
        self.assertEqual(store.get('seed'), seed)
        self.assertIsNone(store.get('other'))

    def test_empty_value(self):
        store = EnvironmentSecretStore({'VOPRF_SECRET_SEED': ''})
        self.assertIsNone(store.get('seed'))

    def test_invalid_base64(self):
        store = EnvironmentSecretStore({'VOPRF_SECRET_SEED': 'abc'})
        with self.assertRaises(SecretUnavailable):
            store.get('seed')

    def test_load_seed(self):
        store = EnvironmentSecretStore({'VOPRF_SECRET_SEED': seed_b64})
        self.assertEqual(load_seed(store, 'seed'), seed)
        with self.assertRaises(SecretUnavailable):
            load_seed(store, 'missing')


class TestDatabaseSecretStore(unittest.TestCase):
    def setUp(self):
        self.ctx = app.app_context()
        self.ctx.push()
        db.create_all()
        db.session.add(Secrets('store_test_seed', seed_b64, int(time.time())))
        db.session.commit()

    def tearDown(self):
        db.session.delete(db.session.get(Secrets, 'store_test_seed'))
        db.session.commit()
        self.ctx.pop()

    def test_get(self):
        store = DatabaseSecretStore(db)
        self.assertEqual(store.get('store_test_seed'), seed)
        self.assertIsNone(store.get('missing'))

    def test_open(self):
        self.assertIsInstance(open_secret_store('database', db), DatabaseSecretStore)


class TestOpenSecretStore(unittest.TestCase):
    def test_environment(self):
        self.assertIsInstance(open_secret_store('environment'), EnvironmentSecretStore)

    def test_unknown(self):
        with self.assertRaises(SecretUnavailable):
            open_secret_store('vault')

    def test_database_without_db(self):
        with self.assertRaises(SecretUnavailable):
            open_secret_store('database')


if __name__ == '__main__':
    unittest.main()
