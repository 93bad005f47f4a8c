from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
import os
import logging

from app.config import settings
from app.exceptions import PortalError
from app.services.blob_store import UPLOADS_URL_PATH
from app.services.notification_outbox import dispatcher

# Init app
app = FastAPI(title="IOCL Recruitment Portal Backend")

# Enable logging
logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)

# CORS Setup
origins = settings.CORS_ORIGINS

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600
)


# Reject oversized bodies (base64 documents) before they are read
@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > settings.MAX_REQUEST_BODY_BYTES:
        logger.warning(f"Rejected {request.method} {request.url.path}: body of {content_length} bytes")
        return JSONResponse(
            status_code=413,
            content={"success": False, "message": "Request body too large"},
        )
    return await call_next(request)


# Uploaded documents
UPLOAD_DIR = os.path.abspath(settings.UPLOAD_DIR)
os.makedirs(UPLOAD_DIR, exist_ok=True)
app.mount(UPLOADS_URL_PATH, StaticFiles(directory=UPLOAD_DIR), name="uploads")
logger.info(f"Uploads mounted at {UPLOADS_URL_PATH} from {UPLOAD_DIR}")


# Exception handlers
@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    content = {"success": False, "message": exc.message}
    if exc.errors:
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Validation failed", "errors": errors},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404 and message == "Not Found":
        message = f"Endpoint {request.url.path} not found"
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.exception(f"Internal server error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal server error"},
    )


# Route Registrations
from app.routes import auth_router, sections_router, admin_router, health_router

routers = [
    auth_router,
    sections_router,
    admin_router,
]

for router in routers:
    app.include_router(router, prefix=settings.API_PREFIX)
    logger.info(f"Included router: {settings.API_PREFIX}{router.prefix}")

app.include_router(health_router)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "status": "ok",
        "message": "Welcome to the IOCL Recruitment Portal API",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": [
            f"{settings.API_PREFIX}/register, /login, /generate-otp ... - Authentication",
            f"{settings.API_PREFIX}/<section>-details/{{userId}} - Application sections",
            f"{settings.API_PREFIX}/admin/* - Payment review",
            "/health - System health check"
        ]
    }


# Startup event
@app.on_event("startup")
async def startup_event():
    logger.info("🚀 Recruitment portal backend starting up...")
    logger.info(f"🌐 CORS enabled for origins: {origins}")
    if settings.NOTIFICATION_DISPATCHER_ENABLED:
        dispatcher.start()
    logger.info("✅ Server is ready to handle requests")


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    logger.info("🛑 Recruitment portal backend shutting down...")
    await dispatcher.stop()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level="info"
    )
