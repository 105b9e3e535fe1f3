import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from admin import router as admin_router
from articles import router as articles_router
from articles import service as articles_service
from catalog import router as catalog_router
from core import db, settings
from core.errors import CatalogError, StorageError
from importer import router as importer_router
from importer import service as importer_service

logging.basicConfig(
    level=settings.log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("catalog_api")


@asynccontextmanager
async def lifespan(_: FastAPI):
    articles_service.ensure_articles_dir(settings.articles_dir())

    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        if settings.apply_schema_on_startup():
            await db.apply_schema()
        await importer_service.bootstrap(
            seed_enabled=settings.seed_on_startup(),
            init_data_path=settings.init_data_path(),
        )
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="Sonido Sigiloso", lifespan=lifespan)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        detail = "Storage error."
    else:
        detail = str(exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": detail})


app.include_router(admin_router.router, tags=["admin"])
app.include_router(catalog_router.router, tags=["catalog"])
app.include_router(importer_router.router, tags=["import"])
app.include_router(articles_router.router, tags=["articles"])


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.host(), port=settings.port(), log_level=settings.log_level().lower())
