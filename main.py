from fastapi import FastAPI
from contextlib import asynccontextmanager
from linguachat.core.config import settings
from linguachat.core.logging import setup_logging
from linguachat.apis.session.main import router as session_router
from linguachat.apis.vocabulary.main import router as vocabulary_router
from linguachat.apis.flashcards.main import router as flashcards_router

import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from linguachat.modules.session import session_manager


@asynccontextmanager
async def lifespan(app: FastAPI):
    session_manager.start()
    try:
        yield
    finally:
        await session_manager.stop()


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(
        title=settings.app.name, version=settings.app.version, lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(session_router)
    app.include_router(vocabulary_router)
    app.include_router(flashcards_router)

    @app.get("/")
    async def root():
        return {
            "status": "ok",
            "app": settings.app.name,
            "version": settings.app.version,
            "sessions": len(session_manager.sessions),
        }

    return app


app = create_app()


if __name__ == "__main__":
    try:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.app.port,
            reload=not settings.app.is_production,
        )
    except Exception as e:
        print(f"An error occurred when starting the server: {e}.")
