from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
# FastAPI's HTTPException subclasses this; router 404/405 errors are raised as the base
from starlette.exceptions import HTTPException
import logging
import time

from string_analyzer.config import CORS_ORIGINS, HOST, LOG_LEVEL, PORT
from string_analyzer.database import init_db
from string_analyzer.api.routes import router
from string_analyzer.exceptions import ErrorKind, StringAnalyzerError

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Status code and user-facing message per error kind
ERROR_RESPONSES = {
    ErrorKind.INVALID_INPUT: (
        status.HTTP_422_UNPROCESSABLE_ENTITY, "Invalid data type for 'value'. It must be a string."
    ),
    ErrorKind.INVALID_QUERY: (status.HTTP_400_BAD_REQUEST, "Missing or empty 'query' parameter."),
    ErrorKind.UNRECOGNIZED_QUERY: (status.HTTP_400_BAD_REQUEST, "Unable to parse natural language query."),
    ErrorKind.CONFLICTING_FILTERS: (
        status.HTTP_422_UNPROCESSABLE_ENTITY, "Query parsed but resulted in conflicting filters."
    ),
    ErrorKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "String does not exist in the system."),
    ErrorKind.DUPLICATE_CONTENT: (status.HTTP_409_CONFLICT, "String already exists in the system."),
}

# Create FastAPI app
app = FastAPI(
    title="String Analyzer Service",
    description="Analyze, store and filter strings by their computed properties",
    version="1.0.0"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
    return response


# Initialize database on startup
@app.on_event("startup")
def on_startup():
    logger.info("Initializing database...")
    init_db()
    logger.info("Database initialized successfully")


# Include routers
app.include_router(router, tags=["strings"])


# Root endpoint
@app.get("/")
def root():
    return {
        "message": "String Analyzer Service",
        "version": "1.0.0",
        "endpoints": {
            "POST /strings": "Analyze and store a string",
            "GET /strings/{string_value}": "Get specific string analysis",
            "GET /strings": "Get all strings with optional filters",
            "GET /strings/filter-by-natural-language": "Filter using natural language",
            "DELETE /strings/{string_value}": "Delete a string",
            "GET /docs": "API documentation"
        }
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


# Domain error handler
@app.exception_handler(StringAnalyzerError)
async def string_analyzer_exception_handler(request: Request, exc: StringAnalyzerError):
    status_code, message = ERROR_RESPONSES[exc.kind]
    logger.info(f"{exc.kind.value} on {request.url.path}: {exc.message}")

    content = {"error": message}
    if exc.kind is ErrorKind.CONFLICTING_FILTERS and exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=status_code, content=content)


# Validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        field = error['loc'][-1]
        message = error['msg']
        errors[field] = message

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation failed",
            "details": errors
        }
    )


# HTTPException handler (unknown routes, wrong methods)
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


# Generic error handler
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error"
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("string_analyzer.main:app", host=HOST, port=PORT, reload=True)
