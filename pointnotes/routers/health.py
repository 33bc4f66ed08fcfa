from pointnotes_sdk.models.point_cloud import HealthResponse

from pointnotes.responses import HandlerResult
from pointnotes.routers.dispatcher import RouteRequest, Router
from pointnotes.services.storage_service import utc_now

router = Router()


@router.get("/health")
def health(request: RouteRequest, context) -> HandlerResult:
    return HandlerResult(200, HealthResponse(status="ok", timestamp=utc_now()).model_dump())
