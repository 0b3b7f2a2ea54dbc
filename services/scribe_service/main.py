from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .src.routers import scribe
from .src.config import settings
from .src.exceptions import ScribeError
from .src.generation import make_generation_client
from .src.logging import jlog
from .otel import init_tracing

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # One backend client per process, injected into handlers via get_generation_client
    app.state.generation_client = make_generation_client()
    if app.state.generation_client is None:
        jlog(event="generation_client_missing", severity="WARNING", reason="OPENAI_API_KEY not set")
    try:
        yield
    finally:
        app.state.generation_client = None

app = FastAPI(title="Scribe API", version="1.0.0", lifespan=lifespan)
app.include_router(scribe.router, prefix="/api")

@app.exception_handler(ScribeError)
async def scribe_error_handler(request: Request, exc: ScribeError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    jlog(event="request_invalid", severity="WARNING", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": "Corpo da requisição inválido."})

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=getattr(exc, "headers", None))

tracer = init_tracing(app, service_name=settings.service_name, service_version="v1")

@app.get("/health")
def health():
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
