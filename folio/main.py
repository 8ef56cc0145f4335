from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from folio import __version__
from folio.api.router import limiter, router
from folio.config import settings
from folio.services.document_loader import DocumentLoadError

app = FastAPI(
    title="Folio API",
    description="Portfolio document as a command surface, timeline and search index",
    version=__version__,
    debug=settings.debug,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DocumentLoadError)
async def document_load_error_handler(request: Request, exc: DocumentLoadError):
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to load portfolio data", "message": str(exc)},
    )


app.include_router(router)
