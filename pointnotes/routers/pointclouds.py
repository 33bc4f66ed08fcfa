from pointnotes import validators
from pointnotes.responses import HandlerResult
from pointnotes.routers.dispatcher import RouteRequest, Router

router = Router()


@router.get("/pointclouds")
def list_point_clouds(request: RouteRequest, context) -> HandlerResult:
    return HandlerResult(200, context.point_clouds.list_point_clouds())


@router.post("/pointclouds")
def create_point_cloud(request: RouteRequest, context) -> HandlerResult:
    """
    登记新的点云数据集 (path is normalized to end with "/")
    """
    payload = validators.parse_body(request.body)
    return HandlerResult(201, context.point_clouds.create_point_cloud(payload))


@router.delete("/pointclouds/{id}", id_label="point cloud")
def delete_point_cloud(request: RouteRequest, context) -> HandlerResult:
    context.point_clouds.delete_point_cloud(request.path_params["id"])
    return HandlerResult(204)
