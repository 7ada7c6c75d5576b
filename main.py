import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from routes.api import router as api_router
from healthbot.utils.settings import settings
from healthbot.utils.logger import get_server_logger, configure_root_logger, get_uvicorn_log_config
from healthbot.utils.initializer import lifespan
from healthbot.utils.registry import registry
from fastapi.responses import JSONResponse
import traceback

# Configure logging
configure_root_logger()
logger = get_server_logger()

origins = [
    settings.CLIENT_ORIGIN,
    settings.CLIENT_ORIGIN_ONLINE
]
origins = [origin for origin in origins if origin is not None]

app = FastAPI(
    title="WhatsApp Health Assistant API",
    description="Multilingual WhatsApp health chatbot with disease outbreak alerts",
    version="1.0.0",
    lifespan=lifespan,
)

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Log all unhandled exceptions"""
    logger.error(f"UNHANDLED EXCEPTION: {str(exc)}")
    logger.error(f"Request path: {request.url.path}")
    logger.error("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. Please check the logs."},
    )

@app.get("/")
async def read_root():
    return {
        "message": f"Welcome to the {settings.BOT_NAME}!",
        "version": "1.0.0",
        "documentation": "/docs"
    }

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    try:
        database = "not initialized"
        if registry.has("store"):
            database = "connected" if await registry.get("store").ping() else "unreachable"

        scheduler_status = None
        if registry.has("scheduler"):
            scheduler_status = registry.get("scheduler").get_status()

        return {
            "status": "healthy" if database == "connected" else "degraded",
            "database": database,
            "scheduler": scheduler_status,
            "services": sorted(registry.snapshot()),
            "api": "running"
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return {
            "status": "unhealthy",
            "error": str(e)
        }

app.include_router(api_router)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def main():
    # Determine if we're in development or production
    is_dev = settings.ENVIRONMENT.lower() == "development"

    # Configure reload settings
    reload_settings = {}
    if is_dev:
        reload_settings = {
            "reload": True,
            "reload_dirs": ["healthbot", "routes"],
            "reload_delay": 2.0,
            "reload_excludes": ["logs/*", "__pycache__/*", "*.pyc", ".git/*"]
        }

    # Run the application
    uvicorn.run(
        "main:app",
        log_level="info",
        log_config=get_uvicorn_log_config(),
        host=settings.HOST,
        port=settings.PORT,
        **reload_settings
    )


if __name__ == "__main__":
    main()
