import time
from nacl.utils import random
from nacl.encoding import Base64Encoder
from config import app, db
from model import Secrets
from oprf.voprf_ristretto255_sha512 import Nseed


def provision_seed(name: str) -> bool:
    if db.session.get(Secrets, name):
        return False
    seed = Base64Encoder.encode(random(Nseed)).decode('utf-8')
    db.session.add(Secrets(name, seed, int(time.time())))
    db.session.commit()
    app.logger.info("Provisioned secret %s", name)
    return True


if __name__ == '__main__':
    # an existing seed is kept, the public key depends on it
    with app.app_context():
        db.create_all()
        provision_seed(app.config['VOPRF_SECRET_NAME'])
