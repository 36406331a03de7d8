"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Depends

from app.services.catalog_service import CatalogService, get_catalog_service


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, service: CatalogService):
        self._service = service

    def check_source(self) -> str:
        """Check that the catalog workbook is present."""
        return "healthy" if self._service.source_available() else "unavailable"

    def get_health(self) -> dict:
        """Get full health status."""
        source_status = self.check_source()
        overall = "healthy" if source_status == "healthy" else "degraded"

        return {
            "status": overall,
            "message": "Use GET /api/v1/catalog?market=AO|US",
            "components": {
                "api": "healthy",
                "workbook": source_status
            }
        }


@router.get("")
def health_check(service: CatalogService = Depends(get_catalog_service)):
    """
    Health check endpoint.

    Returns API status and whether the catalog workbook is present.
    """
    controller = HealthController(service)
    return controller.get_health()


@router.get("/ready")
async def readiness_check():
    """Readiness probe for container orchestration."""
    return {"ready": True}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
