"""
Health Check API Routes.
"""

from typing import Optional

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from core import get_settings
from core.document_store import IDocumentStore
from core.logger import logger
from internal.api.schemas import HealthResponse
from internal.api.schemas.common_schemas import StandardResponse
from internal.api.utils import error_response, success_response


def create_health_routes(store: Optional[IDocumentStore] = None) -> APIRouter:
    """
    Factory function to create health routes.

    Args:
        store: Document store whose connectivity is reported

    Returns:
        APIRouter: Configured router with health endpoints
    """
    router = APIRouter(tags=["Health"])

    @router.get(
        "/",
        response_model=StandardResponse,
        summary="Root Endpoint",
        description="Get basic API information",
        operation_id="get_root",
        responses={
            200: {
                "description": "API information",
                "content": {
                    "application/json": {
                        "example": {
                            "success": True,
                            "message": "API service is running",
                            "data": {
                                "service": "Deck Task Manager",
                                "version": "1.0.0",
                                "status": "running",
                            },
                        }
                    }
                },
            }
        },
    )
    async def root():
        """
        Root endpoint.

        Returns basic information about the API service including
        service name, version, and current status.
        """
        settings = get_settings()
        return success_response(
            message="API service is running",
            data={
                "service": settings.app_name,
                "version": settings.app_version,
                "status": "running",
            },
        )

    @router.get(
        "/health",
        response_model=StandardResponse,
        summary="Health Check",
        description="Check service and document store health",
        operation_id="health_check",
        responses={
            503: {"description": "Document store unreachable", "model": StandardResponse}
        },
    )
    async def health_check():
        """
        Health check endpoint.

        **Returns:**
        Health status object indicating:
        - Overall health status (healthy / unhealthy)
        - Service name and version
        - Document store connectivity
        """
        settings = get_settings()

        database_ok = False
        if store is not None:
            try:
                database_ok = await store.health_check()
            except Exception as e:
                logger.error(f"❌ Health check failed: {e}")

        health_data = HealthResponse(
            status="healthy" if database_ok else "unhealthy",
            service=settings.app_name,
            version=settings.app_version,
            database="connected" if database_ok else "disconnected",
        )

        if not database_ok:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content=error_response(
                    message="Service is unhealthy", data=health_data.model_dump()
                ),
            )
        return success_response(message="Service is healthy", data=health_data.model_dump())

    return router
