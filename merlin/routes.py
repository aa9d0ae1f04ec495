from fastapi import APIRouter, Request, Response

from .config import Settings
from .services import authorised_handler, non_authorised_handler
from .storage import MessageStore

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def build_router(settings: Settings, pending_store: MessageStore, approved_store: MessageStore) -> APIRouter:
    """
    Wires the public and admin endpoints to the two pools, crossed:

    - public: POST into pending, GET from approved, no secret.
    - admin: POST into approved, GET from pending, secret required on POST.

    Any path other than the admin path and /health is served by the public endpoint.
    Methods outside ALL_METHODS never reach a handler; see main.method_not_allowed.
    """
    router = APIRouter()

    public = non_authorised_handler(pending_store, approved_store, settings.secret)
    admin = authorised_handler(approved_store, pending_store, settings.secret)

    @router.get("/health", tags=["Health"])
    async def health_check():
        return {
            "status": "ok",
            "pending": pending_store.count(),
            "approved": approved_store.count(),
        }

    @router.api_route(settings.admin_path, methods=ALL_METHODS, tags=["Admin"])
    async def admin_endpoint(request: Request) -> Response:
        return admin.handle(request.method, await request.body())

    @router.api_route("/{path:path}", methods=ALL_METHODS, tags=["Public"])
    async def public_endpoint(path: str, request: Request) -> Response:
        return public.handle(request.method, await request.body())

    return router
