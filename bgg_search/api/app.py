"""
FastAPI application exposing ``POST /bgg-search``.

Responses always carry permissive CORS headers so browser clients can call
the endpoint directly; ``OPTIONS`` pre-flight requests succeed with no body.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field, StrictStr, ValidationError
from starlette.concurrency import run_in_threadpool

from ..catalog import CatalogClient
from ..config import CORS_ALLOW_HEADERS, CORS_ALLOW_ORIGINS, DATABASE_PATH
from ..database import GameCache, GamesDatabase
from ..errors import InvalidArgument

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": ", ".join(CORS_ALLOW_ORIGINS),
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
}

INVALID_QUERY_MESSAGE = "Query parameter is required and must be a string"


class SearchRequest(BaseModel):
    """Body of a search request."""
    query: StrictStr = Field(description="Free-text game name to look up on BGG")


def _json(content: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def create_app(client: Optional[CatalogClient] = None,
               db_path: Union[str, Path] = DATABASE_PATH) -> FastAPI:
    """
    Build the API application.

    Args:
        client: Catalog client to serve; built over db_path when omitted
        db_path: Database used when no client is given

    Returns:
        The FastAPI app
    """
    if client is None:
        client = CatalogClient(GameCache(GamesDatabase(db_path)))

    app = FastAPI(title="BGG Search API", version="0.1.0")
    app.state.catalog_client = client

    @app.options("/bgg-search")
    async def search_preflight() -> Response:
        return Response(status_code=200, headers=CORS_HEADERS)

    @app.post("/bgg-search")
    async def search_games(request: Request) -> JSONResponse:
        try:
            payload = SearchRequest.model_validate(await request.json())
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError):
            return _json({"error": INVALID_QUERY_MESSAGE}, status_code=400)

        logger.info(f"Processing search request for: {payload.query}")
        try:
            results = await run_in_threadpool(app.state.catalog_client.search, payload.query)
        except InvalidArgument as e:
            return _json({"error": str(e)}, status_code=400)
        except Exception as e:
            logger.error(f"Search request failed: {e}")
            return _json({"error": str(e) or "Internal server error", "details": repr(e)},
                         status_code=500)

        return _json({"games": [item.to_dict() for item in results]})

    @app.get("/health")
    async def health() -> JSONResponse:
        return _json({"status": "ok"})

    return app
