import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import Settings, settings as default_settings
from core.sales_mirror import MirrorPublisher, SalesMirror
from db.database import Database
from routers.dashboard import router as dashboard_router
from routers.inventory import router as inventory_router
from routers.mirror import router as mirror_router
from routers.sales import router as sales_router
from routers.scan import router as scan_router


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(settings.database_url, echo=settings.database_echo)
        await database.open()
        mirror = SalesMirror(settings.sales_mirror_path)
        publisher = MirrorPublisher(mirror)
        publisher.start()

        app.state.database = database
        app.state.sales_mirror = mirror
        app.state.mirror_publisher = publisher
        try:
            yield
        finally:
            await publisher.stop()
            await database.close()

    app = FastAPI(
        title="Stall POS API",
        description="Inventory upload, QR labels, scan-to-sale and sales statistics for market stalls",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Durable store: inventory, scanning, sales, dashboard
    app.include_router(inventory_router, prefix="/inventory", tags=["inventory"])
    app.include_router(scan_router, prefix="/scan", tags=["scan"])
    app.include_router(sales_router, prefix="/sales", tags=["sales"])
    app.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])

    # Flat-file sales mirror and its report
    app.include_router(mirror_router, prefix="/api", tags=["mirror"])

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
