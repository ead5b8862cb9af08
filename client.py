import os
import sys
import logging
from oprf.errors import VoprfError
from resources_client.voprf_requests import HttpTransport, voprf

DEFAULT_URL = os.environ.get("VOPRF_URL", "http://127.0.0.1:5000/")


def main(argv=None, stdin=None, stdout=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    stdin = sys.stdin.buffer if stdin is None else stdin
    stdout = sys.stdout.buffer if stdout is None else stdout

    url = argv[0] if argv else DEFAULT_URL
    input = stdin.read()

    try:
        output = voprf(HttpTransport(url), input)
    except VoprfError as e:
        logging.getLogger(__name__).error("VOPRF exchange failed: %s", e)
        return 1

    stdout.write(output)
    stdout.flush()
    return 0


if __name__ == '__main__':
    sys.exit(main())
