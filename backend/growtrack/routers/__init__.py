from growtrack.routers.auth import router as auth_router
from growtrack.routers.genetics import router as genetics_router
from growtrack.routers.batches import router as batches_router
from growtrack.routers.plants import router as plants_router
from growtrack.routers.dashboard import router as dashboard_router

__all__ = ["auth_router", "genetics_router", "batches_router", "plants_router", "dashboard_router"]
