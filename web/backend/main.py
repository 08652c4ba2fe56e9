from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from songbook import __version__
from songbook.core.config import Config, load_config
from songbook.domain.library import FavoritesIndex, FileStore, SongCatalog, UploadGate


def build_services(app: FastAPI, config: Config) -> None:
    """Construct the store, catalog and favorites index and attach them to app.state."""
    storage = config.storage
    store = FileStore(
        Path(storage.library_dir),
        favorites_dirname=storage.favorites_dirname,
        staging_dirname=storage.staging_dirname,
    )
    store.ensure_root()

    catalog = SongCatalog(store, default_description=config.upload.default_description)
    favorites = FavoritesIndex(
        store,
        description=config.favorites.description,
        updated_description=config.favorites.updated_description,
    )
    upload_gate = UploadGate(
        store,
        catalog,
        allowed_media_types=config.upload.allowed_media_types,
        chunk_size=config.upload.chunk_size,
    )

    app.state.config = config
    app.state.store = store
    app.state.catalog = catalog
    app.state.favorites = favorites
    app.state.upload_gate = upload_gate


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Build the web application.

    Services are created in the lifespan, so each app (and each TestClient
    context) gets its own catalog.
    """
    config = config if config is not None else load_config()

    @asynccontextmanager
    async def lifespan(app_instance: FastAPI):
        # Startup
        build_services(app_instance, config)
        logger.info(f"Songbook ready. Library at {app_instance.state.store.root}")

        yield

        # Shutdown: catalog is volatile, drop it with the app
        app_instance.state.catalog.clear()
        logger.info("Songbook stopped; in-memory catalog discarded")

    app = FastAPI(title="Songbook API", version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.web.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from web.backend.routers import favorites, files, songs

    app.include_router(favorites.router, prefix="/api", tags=["favorites"])
    app.include_router(songs.router, prefix="/api", tags=["songs"])
    app.include_router(files.router, tags=["files"])

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
