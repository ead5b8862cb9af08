import sys
from flask import Flask, make_response, request, current_app
from flask_restful import Api, Resource
import config
from oprf.errors import VoprfError
from oprf.voprf_ristretto255_sha512 import VoprfServer
from resources_server.secret_store import open_secret_store, load_seed


def octet_stream(body: bytes, status: int = 200):
    response = make_response(body, status)
    response.mimetype = 'application/octet-stream'
    return response


def text_plain(body: str, status: int):
    response = make_response(body, status)
    response.mimetype = 'text/plain'
    return response


class VoprfEvaluation(Resource):
    # blinded element in, evaluated element || proof out
    def __init__(self, server: VoprfServer):
        self.server = server

    def post(self):
        try:
            result = self.server.blind_evaluate(request.get_data())
        except VoprfError as e:
            # the only errors that arise are from bad requests
            current_app.logger.warning("Rejected evaluation request: %s", e)
            return text_plain(f"VOPRF error: {e}\n", 400)
        return octet_stream(result.serialize())


class PublicKey(Resource):
    def __init__(self, server: VoprfServer):
        self.server = server

    def get(self):
        return octet_stream(self.server.public_key())


def init_server(store=None, secret_name=None, info=None) -> VoprfServer:
    if store is None:
        store = open_secret_store(config.app.config['VOPRF_SECRET_STORE'], config.db)
    secret_name = secret_name or config.app.config['VOPRF_SECRET_NAME']
    info = info or config.app.config['VOPRF_SERVER_INFO']

    seed = load_seed(store, secret_name)
    server = VoprfServer.new_from_seed(seed, info)
    config.app.logger.info("Server created")
    return server


def register_resources(api, server: VoprfServer):
    kwargs = {'server': server}
    api.add_resource(VoprfEvaluation, '/voprf', resource_class_kwargs=kwargs)
    api.add_resource(PublicKey, '/pubkey', resource_class_kwargs=kwargs)


def create_app(store=None, secret_name=None, info=None) -> Flask:
    """Build a servable app with both routes registered.

    The key is loaded before anything is registered, so a missing or bad
    secret raises here and no app is returned.
    """
    with config.app.app_context():
        server = init_server(store, secret_name, info)
    voprf_app = Flask(__name__)
    voprf_app.config.from_mapping(config.app.config)
    register_resources(Api(voprf_app), server)
    return voprf_app


if __name__ == '__main__':
    try:
        app = create_app()
    except VoprfError as e:
        config.app.logger.critical("Unable to initialize VOPRF server: %s", e)
        sys.exit(1)
    app.run()
