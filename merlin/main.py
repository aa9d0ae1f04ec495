import logging

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response

from .config import Settings, get_settings
from .enums import StoreName
from .responses import empty_response
from .routes import build_router
from .storage import MemoryMessageStore, MessageStore

logger = logging.getLogger("uvicorn")


async def method_not_allowed(request: Request, exc: Exception) -> Response:
    """
    Methods no route lists still get the relay's empty 200 instead of a 405 error body.
    """
    logger.info(f"[Merlin] No handler for {request.method} on '{request.url.path}'")
    return empty_response()


def create_app(
    settings: Settings,
    pending_store: Optional[MessageStore] = None,
    approved_store: Optional[MessageStore] = None,
) -> FastAPI:
    """
    Builds the relay application. Stores default to fresh in-memory pools.
    """
    pending_store = pending_store or MemoryMessageStore(StoreName.PENDING.value)
    approved_store = approved_store or MemoryMessageStore(StoreName.APPROVED.value)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager to handle startup and shutdown events.
        """
        logger.info(f"[Merlin] Serving public endpoint on '/' and admin endpoint on '{settings.admin_path}'")
        yield
        logger.info(
            f"[Merlin] Shutting down with {pending_store.count()} pending "
            f"and {approved_store.count()} approved messages (not persisted)"
        )

    # Built-in docs routes would shadow the public fall-through and the admin path.
    app = FastAPI(
        title="Merlin message relay",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.add_exception_handler(405, method_not_allowed)
    app.state.pending_store = pending_store
    app.state.approved_store = approved_store
    app.include_router(build_router(settings, pending_store, approved_store))

    return app


def main():
    import uvicorn

    # A missing or empty secret raises here, before anything is served.
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    main()
