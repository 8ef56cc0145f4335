from fastapi import APIRouter, Depends, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from folio import __version__
from folio.api.dependencies import get_document
from folio.config import settings
from folio.models.document import Document
from folio.models.requests import CommandRequest
from folio.models.views import CommandInfo, CommandOutput, SearchOutcome, Timeline
from folio.services import search as search_service
from folio.services.build import interactive_view
from folio.services.projector import project_document
from folio.services.registry import registry
from folio.services.terminal import run_command
from folio.services.timeline import build_timeline

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "version": __version__,
        "generator": settings.generator,
    }


@router.get("/portfolio")
async def portfolio(document: Document = Depends(get_document)):
    return interactive_view(document)


@router.get("/portfolio/resume")
async def portfolio_resume(document: Document = Depends(get_document)):
    return project_document(document, settings)


@router.get("/commands", response_model=list[CommandInfo])
async def commands(document: Document = Depends(get_document)):
    return [cmd.info() for cmd in registry.list_available(document)]


@router.post("/commands/run", response_model=CommandOutput)
@limiter.limit("30/minute")
async def commands_run(
    request: Request,
    body: CommandRequest,
    document: Document = Depends(get_document),
):
    return run_command(document, body.line, settings)


@router.get("/search", response_model=SearchOutcome)
async def search(
    q: str = Query("", max_length=200),
    document: Document = Depends(get_document),
):
    # Blank term answers with usage guidance, not an error
    return search_service.search(document, q, settings)


@router.get("/timeline", response_model=Timeline)
async def timeline(document: Document = Depends(get_document)):
    return build_timeline(document, settings)
