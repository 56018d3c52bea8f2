from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from animal_facts.api.deps import get_fact_service, get_http_client
from animal_facts.api.middleware import request_id_middleware
from animal_facts.api.v1.router import api_router
from animal_facts.core.config import settings
from animal_facts.core.logging import configure_logging

logger = configure_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
)
app.middleware("http")(request_id_middleware)

app.include_router(api_router)


@app.on_event("startup")
def startup_event():
    """
    Build the provider registry up front so a bad default animal or upstream
    configuration stops the process instead of failing the first request.
    """
    service = get_fact_service()
    logger.info(
        "%s starting: animals=%s default=%s forced=%s",
        settings.app_name,
        list(service.registry.kinds()),
        settings.default_animal,
        settings.forced_animal,
    )


@app.on_event("shutdown")
async def shutdown_event():
    # only close the shared upstream client if a request or startup built it
    if get_http_client.cache_info().currsize:
        await get_http_client().aclose()


@app.get("/health", tags=["Health"])
def health_check():
    return {
        "status": "ok",
        "environment": settings.app_env
    }


@app.get("/health-check", tags=["Health"])
def liveness():
    logger.info("Health check performed!")
    return Response(status_code=200)


def run():
    import uvicorn

    logger.info("Application starting on: %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
