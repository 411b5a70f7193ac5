import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from marketplace_api.core.config import Settings, settings as default_settings
from marketplace_api.core.errors import Internal
from marketplace_api.database.mongo import MongoDB, ensure_indexes
from marketplace_api.routers.auth_router import router as auth_router
from marketplace_api.routers.products_router import router as products_router
from marketplace_api.routers.users_router import router as users_router
from marketplace_api.routers.wishlist_router import router as wishlist_router
from marketplace_api.services.user_service import bootstrap_admin_if_needed

logger = logging.getLogger(__name__)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        name = ".".join(loc) or "body"
        if name not in fields:
            fields.append(name)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": f"Missing or invalid fields: {', '.join(fields)}", "fields": fields},
    )


async def store_error_handler(request: Request, exc: PyMongoError):
    logger.error("Store error on %s %s", request.method, request.url.path, exc_info=exc)
    err = Internal()
    return JSONResponse(status_code=err.status_code, content={"detail": err.detail})


def create_app(settings: Settings | None = None, mongodb: MongoDB | None = None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    logging.getLogger("marketplace_api").setLevel(settings.LOG_LEVEL.upper())
    mongodb = mongodb or MongoDB(settings.MONGO_URL, settings.DATABASE_NAME)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await mongodb.connect()
        await ensure_indexes(mongodb.db)
        await bootstrap_admin_if_needed(mongodb.db, settings)
        yield
        await mongodb.close()

    app = FastAPI(title="Marketplace API", lifespan=lifespan)
    app.state.mongodb = mongodb
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(PyMongoError, store_error_handler)

    @app.get("/")
    async def root():
        return {"message": "Marketplace API is running"}

    app.include_router(auth_router, prefix="/api")
    app.include_router(users_router, prefix="/api")
    app.include_router(products_router, prefix="/api")
    app.include_router(wishlist_router, prefix="/api")
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)
