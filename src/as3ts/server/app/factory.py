"""Application factory that builds the FastAPI app with all wiring."""

from __future__ import annotations

import logging
from functools import partial
from typing import Optional

from fastapi import FastAPI

from ...config import ConvertConfig
from ...converter import convert_with_changes
from ...version import __version__
from ..routes.convert import build_convert_router
from ..routes.health import build_health_router

log = logging.getLogger(__name__)


def create_app(config: Optional[ConvertConfig] = None) -> FastAPI:
    """Create the FastAPI app."""

    config = config or ConvertConfig()
    app = FastAPI(title="as3ts", version=__version__)
    app.include_router(build_health_router())
    app.include_router(build_convert_router(partial(convert_with_changes, config=config)))
    log.debug("as3ts API ready")
    return app
