"""
FastAPI Service - Main entry point for the Deck Task Manager API.
Implements clean separation of concerns with comprehensive logging and error handling:
- Routes are separated into modules
- MongoDB document store for persistence
- Every request logged with its status and elapsed time
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from core.config import get_settings
from core.container import Container, bootstrap_container
from core.database import MongoDocumentStore, get_database
from core.document_store import IDocumentStore
from core.logger import logger
from internal.api.routes import (
    create_health_routes,
    create_task_folder_routes,
    create_task_routes,
)
from internal.api.utils import register_exception_handlers
from services.interfaces import ITaskFolderService, ITaskService


# Lifespan context manager
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan - startup and shutdown.
    Connects the document store on startup with comprehensive logging.
    """
    settings = get_settings()
    store = app.state.store
    logger.info(
        f"========== Starting {settings.app_name} v{settings.app_version} API service =========="
    )
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"API: {settings.api_host}:{settings.api_port}")

    if isinstance(store, MongoDocumentStore):
        try:
            logger.info("Initializing MongoDB connection...")
            await store.connect()
            await store.create_indexes()

            logger.info("Performing MongoDB health check...")
            if await store.health_check():
                logger.info("MongoDB health check passed")
            else:
                logger.warning("MongoDB health check failed")
        except Exception as e:
            logger.error(f"Failed to initialize MongoDB: {e}")
            logger.exception("MongoDB initialization error details:")
            raise

    logger.info(f"========== {settings.app_name} API service started successfully ==========")

    yield

    logger.info("========== Shutting down API service ==========")
    if isinstance(store, MongoDocumentStore):
        try:
            await store.disconnect()
        except Exception as e:
            logger.error(f"Error disconnecting from MongoDB: {e}")
            logger.exception("MongoDB disconnect error details:")
    logger.info("========== API service stopped successfully ==========")


def create_app(store: Optional[IDocumentStore] = None) -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.

    Args:
        store: Document store to use (defaults to the global MongoDB store)

    Returns:
        FastAPI: Configured application instance
    """
    try:
        logger.info("Creating FastAPI application...")
        settings = get_settings()
        store = store or get_database()

        description = """
## Deck Task Manager API

Backend for a personal task manager: folders of tasks per user.

### Key Features

* **Folders** - Create, rename and delete folders; listing includes task counts
* **Tasks** - Per-folder CRUD with status (Pending / In Progress / Completed) and priority
* **Status board** - A folder's tasks grouped into pending, in_progress and completed
* **Calendar view** - Tasks starting on a given day, across folders or in one folder
* **Deadline alerts** - Open tasks due within a configurable number of days

### Authentication

The caller's user id is read from the `X-User-Id` header.
        """

        tags_metadata = [
            {"name": "Task Folders", "description": "Folder management with task statistics."},
            {"name": "Tasks", "description": "Task CRUD, date views and nearing-due alerts."},
            {"name": "Health", "description": "Service and document store health."},
        ]

        logger.debug("Configuring FastAPI instance...")
        app = FastAPI(
            title=settings.app_name,
            version=settings.app_version,
            description=description,
            lifespan=lifespan,
            openapi_tags=tags_metadata,
            docs_url="/docs",
            redoc_url="/redoc",
            openapi_url="/openapi.json",
        )
        app.state.store = store

        logger.debug("Adding CORS middleware...")
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            start_time = time.time()
            response = await call_next(request)
            elapsed_ms = (time.time() - start_time) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
            )
            return response

        register_exception_handlers(app)

        bootstrap_container(store, settings)

        logger.debug("Including API routes...")
        app.include_router(create_task_folder_routes(Container.resolve(ITaskFolderService)))
        logger.info("✅ Task folder routes registered")

        app.include_router(create_task_routes(Container.resolve(ITaskService)))
        logger.info("✅ Task routes registered")

        app.include_router(create_health_routes(store))
        logger.info("✅ Health routes registered")

        logger.info("FastAPI application created successfully")
        return app

    except Exception as e:
        logger.error(f"Failed to create FastAPI application: {e}")
        logger.exception("Application creation error details:")
        raise


# Create application instance
try:
    logger.info("Initializing Deck Task Manager API...")
    app = create_app()
    logger.info("Application instance created successfully")
except Exception as e:
    logger.error(f"Failed to create application instance: {e}")
    logger.exception("Startup error details:")
    raise


# Run with: uvicorn cmd.api.main:app --host 0.0.0.0 --port 8000 --reload
if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    logger.info("========== Starting Uvicorn Server ==========")
    logger.info(f"Host: {settings.api_host}")
    logger.info(f"Port: {settings.api_port}")
    logger.info(f"Reload: {settings.api_reload}")
    logger.info(f"Workers: {settings.api_workers}")

    if settings.api_reload:
        uvicorn.run(
            "cmd.api.main:app",
            host=settings.api_host,
            port=settings.api_port,
            reload=True,
            log_level="info" if settings.debug else "warning",
        )
    else:
        uvicorn.run(
            app,
            host=settings.api_host,
            port=settings.api_port,
            workers=1,
            log_level="info" if settings.debug else "warning",
        )
