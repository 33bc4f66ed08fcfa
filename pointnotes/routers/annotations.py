from pointnotes import validators
from pointnotes.responses import HandlerResult
from pointnotes.routers.dispatcher import RouteRequest, Router

router = Router()


@router.get("/annotations")
def list_annotations(request: RouteRequest, context) -> HandlerResult:
    """
    获取标注列表，支持按 pointCloudId 过滤
    """
    point_cloud_id = request.query_params.get("pointCloudId") or None
    return HandlerResult(200, context.annotations.list_annotations(point_cloud_id))


@router.post("/annotations")
def create_annotation(request: RouteRequest, context) -> HandlerResult:
    payload = validators.parse_body(request.body)
    return HandlerResult(201, context.annotations.create_annotation(payload))


@router.put("/annotations/{id}", id_label="annotation")
def update_annotation(request: RouteRequest, context) -> HandlerResult:
    """
    更新标注文本
    """
    payload = validators.parse_body(request.body)
    annotation_id = request.path_params["id"]
    return HandlerResult(200, context.annotations.update_annotation(annotation_id, payload))


@router.delete("/annotations/{id}", id_label="annotation")
def delete_annotation(request: RouteRequest, context) -> HandlerResult:
    context.annotations.delete_annotation(request.path_params["id"])
    return HandlerResult(204)
