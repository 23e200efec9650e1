import argparse
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from certledger.api import router as api_router
from certledger.config import Settings
from certledger.db import Store
from certledger.errors import ServiceError, service_error_handler

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="Customer Certificate Server")
    app.state.settings = settings

    # connect and create tables
    @app.on_event("startup")
    async def startup_event():
        app.state.store = Store(settings)
        await app.state.store.create_all()
        url = app.state.store.engine.url.render_as_string(hide_password=True)
        logger.info(f"Connected to database {url}")

    @app.on_event("shutdown")
    async def shutdown_event():
        store = getattr(app.state, "store", None)
        if store is not None:
            await store.close()

    app.add_exception_handler(ServiceError, service_error_handler)
    app.include_router(api_router)

    @app.get("/")
    def root():
        return {"message": "Customer Certificate Server is running."}

    return app


app = create_app()


def parse_args(argv=None) -> Settings:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Customer and certificate record server")
    parser.add_argument("--dbhost", default=settings.db_host, help="Hostname of the database server")
    parser.add_argument("--dbname", default=settings.db_name, help="Database name to store customer information")
    parser.add_argument("--host", default=settings.host, help="Address for the server to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port for the server to run on")
    args = parser.parse_args(argv)

    settings.db_host = args.dbhost
    settings.db_name = args.dbname
    settings.host = args.host
    settings.port = args.port
    return settings


def run(argv=None):
    settings = parse_args(argv)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
