"""
Prjbrain - Project folder dashboard backend
FastAPI service exposing the document catalog of one project folder.

Run server:
    prjbrain path/to/project/prjbrain.env
or:
    PRJBRAIN_CONFIG=path/to/project/prjbrain.env uvicorn --factory prjbrain.main:create_app
"""
from __future__ import annotations

import logging
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from prjbrain import __version__
from prjbrain.core.errors import ConfigError, PrjbrainError
from prjbrain.core.scanner import CatalogStore
from prjbrain.routers import catalog as catalog_router
from prjbrain.settings import CONFIG_ENV_VAR, Settings, get_settings, load_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Looked up in the working directory when no config file is given
DEFAULT_CONFIG_FILE = "prjbrain.env"


def create_app(settings: Optional[Settings] = None, scan_on_startup: bool = True) -> FastAPI:
    """
    Build the FastAPI app for one project folder.

    The first scan runs at startup; a scan that fails with a config or
    root access error aborts startup.
    """
    settings = settings or get_settings()
    store = CatalogStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Prjbrain API starting up...")
        logger.info(f"Root: {settings.root_dir}")
        logger.info(f"Number log: {settings.number_log}")
        if scan_on_startup:
            try:
                store.rescan(settings)
            except PrjbrainError as e:
                logger.error(f"✗ Initial scan failed: {e}")
                raise
        yield
        logger.info("Prjbrain API shutting down")

    app = FastAPI(
        title="Prjbrain API",
        description="Document catalog for a product development folder",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.catalog_store = store

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    @app.get("/health")
    async def health_check():
        return {
            "status": "ok" if store.ready else "starting",
            "catalog_ready": store.ready,
        }

    @app.get("/")
    async def root():
        return {
            "name": "Prjbrain API",
            "version": __version__,
            "root_dir": settings.root_dir,
            "docs": "/docs",
            "catalog": "/catalog",
        }

    app.include_router(catalog_router.router)
    return app


def run(argv: Optional[List[str]] = None) -> None:
    """
    Command line entry point: `prjbrain [config-file]`.

    Config file lookup: argument, then $PRJBRAIN_CONFIG, then
    ./prjbrain.env, then environment only.
    """
    argv = sys.argv[1:] if argv is None else argv
    config_file = argv[0] if argv else os.getenv(CONFIG_ENV_VAR)
    if not config_file and Path(DEFAULT_CONFIG_FILE).is_file():
        config_file = DEFAULT_CONFIG_FILE

    try:
        settings = load_settings(config_file)
    except ConfigError as e:
        logger.error(f"✗ {e}")
        raise SystemExit(1)

    logging.getLogger().setLevel(settings.log_level.upper())

    app = create_app(settings)
    print(f"Prjbrain is monitoring {settings.root_dir} and serving at http://{settings.host}:{settings.port}")
    print("Press Ctrl+C to quit")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
