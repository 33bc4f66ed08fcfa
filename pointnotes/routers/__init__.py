from pointnotes.routers.dispatcher import Dispatcher, RouteRequest, Router


def build_dispatcher(context) -> Dispatcher:
    from pointnotes.routers.annotations import router as annotations_router
    from pointnotes.routers.health import router as health_router
    from pointnotes.routers.pointclouds import router as pointclouds_router

    dispatcher = Dispatcher(context)
    dispatcher.include_router(annotations_router)
    dispatcher.include_router(pointclouds_router)
    dispatcher.include_router(health_router)
    return dispatcher


__all__ = ["Dispatcher", "RouteRequest", "Router", "build_dispatcher"]
