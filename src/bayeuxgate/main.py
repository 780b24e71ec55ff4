import os
from typing import Optional

import dotenv
import uvicorn
from fastapi import FastAPI, Request

from bayeuxgate.adapter import BayeuxAdapter
from bayeuxgate.config import AdapterConfig, load_config
from bayeuxgate.engine import Engine
from bayeuxgate.utils.logger_util import get_logger

dotenv.load_dotenv(".env")
logger = get_logger(__name__)

# every method reaches the adapter so unmatched paths get its 404, not FastAPI's 405
METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def create_app(engine: Optional[Engine] = None, config: Optional[AdapterConfig] = None) -> FastAPI:
    config = config or load_config()
    adapter = BayeuxAdapter(engine=engine, config=config)
    app = FastAPI(title="bayeuxgate", version="0.1.0", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.adapter = adapter

    async def bayeux_endpoint(request: Request):
        return await adapter.handle(request)

    app.add_api_route("/{path:path}", bayeux_endpoint, methods=METHODS, include_in_schema=False)
    logger.info("serving Bayeux endpoint at %s (script at %s)", config.mount, config.script_mount)
    return app


app = create_app()


def run() -> None:
    host = os.environ.get("BAYEUX_HOST", "127.0.0.1")
    port = int(os.environ.get("BAYEUX_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
