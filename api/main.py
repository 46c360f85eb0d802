from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from boards import router as boards_router
from core import db, errors, logs, schema, settings
from users import router as users_router


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        if settings.db_auto_schema():
            await schema.ensure_schema()
        yield
    finally:
        await db.close_pool()


def create_app() -> FastAPI:
    logs.configure_logging()

    app = FastAPI(title="bulletin-board api", lifespan=lifespan)

    # Allow the local frontend dev server to call this API (with cookies).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    errors.install_handlers(app)

    app.include_router(users_router.router, tags=["users"])
    app.include_router(boards_router.router, tags=["boards"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "bulletin-board api"}

    return app


app = create_app()
