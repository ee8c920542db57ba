# Recipe Workbench API: app assembly
import logging
import sys
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from .settings import settings
from .rate_limit import limiter
from .routers.ready import router as ready_router
from .routers.workspaces import router as workspaces_router
from .routers.recipes import router as recipes_router
from .routers.units import router as units_router
from .routers.inventory import router as inventory_router
from .routers.editor import router as editor_router

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("workbench")

app = FastAPI(title="Recipe Workbench API", version="0.1.0")

# settings.rate_limit_default on every route; editor saves have their own budget
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ready_router, prefix="/api", tags=["ready"])
app.include_router(workspaces_router, prefix="/api", tags=["workspaces"])
app.include_router(recipes_router, prefix="/api", tags=["recipes"])
app.include_router(units_router, prefix="/api/units", tags=["units"])
app.include_router(inventory_router, prefix="/api", tags=["inventory"])
app.include_router(editor_router, prefix="/api", tags=["editor"])

logger.info("Recipe Workbench API ready (default rate limit %s)", settings.rate_limit_default)
