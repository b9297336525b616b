import logging

import uvicorn

from locmatrix.api.app import create_app
from locmatrix.container import Container


def main(container: Container = None, host: str = "0.0.0.0", port: int = 8000):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    container = container or Container()
    app = create_app(container)
    print(f"Control server listening on {host}:{port}")
    uvicorn.run(app, host=host, port=port)


if __name__ == '__main__':
    main()
