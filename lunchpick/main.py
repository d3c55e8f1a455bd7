import logging
import socket

import uvicorn

from lunchpick.api.api_run import app
from lunchpick.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL


def lan_address() -> str:
    """Best-effort LAN address of this machine, falling back to loopback.

    Connecting a UDP socket only asks the OS for a route; nothing is sent.
    """
    probe = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        probe.connect(("10.255.255.255", 1))
        return str(probe.getsockname()[0])
    except OSError:
        return "127.0.0.1"
    finally:
        probe.close()


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print(f"LunchPick console on http://localhost:{APP_PORT}/console/state (Press CTRL+C to quit)")
    address = lan_address()
    if address != "127.0.0.1":
        print(f"Reachable from the LAN at http://{address}:{APP_PORT}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
