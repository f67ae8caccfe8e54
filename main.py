"""
FastAPI application for the items API.
"""
from typing import Optional
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.items.routes import router as items_router
from core.config import ITEMS_COLLECTION, PORT, get_allowed_origins, setup_logging
from core.exception_handlers import (
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler,
)
from core.exceptions import AppException
from store.base import BaseDocumentStorage
from store.factory import create_document_storage


def create_app(
    storage: Optional[BaseDocumentStorage] = None,
    collection: Optional[str] = None,
) -> FastAPI:
    """Build the application around a storage backend.

    Args:
        storage: Storage backend instance. If not provided, one is created
                 based on environment configuration.
        collection: Collection holding the items (defaults to ITEMS_COLLECTION)
    """
    setup_logging()

    app = FastAPI(title="Items API")
    app.state.document_storage = storage if storage is not None else create_document_storage()
    app.state.items_collection = collection or ITEMS_COLLECTION

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(),
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(items_router, tags=["items"])
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    print(f"Server is listening on port {PORT}...", flush=True)
    uvicorn.run(app, host="0.0.0.0", port=PORT)
