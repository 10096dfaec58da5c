import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from database import engine, Base, AsyncSessionLocal
from api.controllers import serveurs, routes
from api.routes import register_routes
from errors import ServeurApiError

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Create tables
    async with engine.begin() as conn:
        # In production, we might use alembic instead of create_all
        await conn.run_sync(Base.metadata.create_all)

    # Publish the route table for API discovery
    async with AsyncSessionLocal() as session:
        await register_routes(session, serveurs.ROUTES, "serveurs")
        await register_routes(session, routes.ROUTES, "routes")

    yield
    # Shutdown
    await engine.dispose()

app = FastAPI(title="Serveurs API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(serveurs.router)
app.include_router(routes.router)


@app.exception_handler(ServeurApiError)
async def serveur_api_error_handler(request: Request, exc: ServeurApiError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"message": "Internal Server Error"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("%s %s crashed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal Server Error"})


@app.get("/")
async def root():
    return {"message": "Serveurs API is running"}
