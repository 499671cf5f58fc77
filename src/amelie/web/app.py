"""FastAPI application serving the blog."""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from amelie import config
from amelie.content import extract_document
from amelie.errors import AmelieError
from amelie.logging import get_logger
from amelie.repositories import ContentRepository
from amelie.services import BlogrollAssembler, SiteConfig, SiteConfigCache

from .views import build_context

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
NOT_FOUND_PATH = "/404"

templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))
router = APIRouter()


def _state(request: Request) -> Any:
    return request.app.state


def _not_found_redirect() -> RedirectResponse:
    return RedirectResponse(NOT_FOUND_PATH, status_code=302)


async def _static_or_not_found(request: Request, path: str) -> Response:
    """Serve <root>/static/<path> verbatim when it exists, else redirect to /404."""

    static_file = await _state(request).repository.find_static_file(path)
    if static_file is None:
        return _not_found_redirect()
    return FileResponse(static_file)


def _render(
    request: Request, site: SiteConfig, template: str, context: dict[str, Any]
) -> Response:
    return templates.TemplateResponse(
        request,
        template,
        context,
        headers={"Cache-Control": site.cache_control()},
    )


async def _render_blogroll(
    request: Request,
    *,
    max_count: int | None = None,
    search: str | None = None,
    read_more: bool = False,
) -> Response:
    state = _state(request)
    site = state.site_config.ensure_fresh()
    try:
        posts = await state.blogroll.assemble(max_count=max_count, search=search)
    except AmelieError as exc:
        state.logger.error("Blogroll unavailable (search=%r): %s", search, exc)
        return templates.TemplateResponse(
            request,
            "error.html",
            build_context(site),
            status_code=503,
        )
    return _render(
        request,
        site,
        "index.html",
        build_context(site, posts=posts, read_more=read_more),
    )


@router.get("/", response_class=HTMLResponse)
async def homepage(request: Request) -> Response:
    count = _state(request).homepage_post_count
    return await _render_blogroll(request, max_count=count, read_more=True)


@router.get("/blogroll", response_class=HTMLResponse)
@router.get("/blogroll/", include_in_schema=False)
async def full_blogroll(request: Request) -> Response:
    return await _render_blogroll(request)


@router.get(NOT_FOUND_PATH, response_class=HTMLResponse)
async def not_found(request: Request) -> Response:
    site = _state(request).site_config.ensure_fresh()
    return templates.TemplateResponse(
        request, "not_found.html", build_context(site), status_code=404
    )


@router.get("/blog/{year}/{month}/{day}/{post}/", response_class=HTMLResponse)
@router.get("/blog/{year}/{month}/{day}/{post}", include_in_schema=False)
async def blog_post(
    request: Request, year: str, month: str, day: str, post: str
) -> Response:
    state = _state(request)
    site = state.site_config.ensure_fresh()
    identifier = f"{year}/{month}/{day}/{post}"
    try:
        document = await state.blogroll.render_post(identifier)
    except AmelieError as exc:
        state.logger.info("Post %s unavailable: %s", identifier, exc)
        return _not_found_redirect()
    return _render(
        request,
        site,
        "index.html",
        build_context(site, document=document, posts=[document]),
    )


@router.get("/blog/{year}/{month}/", response_class=HTMLResponse)
@router.get("/blog/{year}/{month}", include_in_schema=False)
async def monthly_archive(request: Request, year: str, month: str) -> Response:
    return await _render_blogroll(request, search=f"{year}/{month}/")


@router.get("/{page}", response_class=HTMLResponse)
@router.get("/{page}/", include_in_schema=False)
async def static_page(request: Request, page: str) -> Response:
    state = _state(request)
    site = state.site_config.ensure_fresh()
    try:
        raw = await state.repository.load_page(page)
        document = extract_document(raw)
    except AmelieError as exc:
        state.logger.info("Page %s unavailable: %s", page, exc)
        return await _static_or_not_found(request, page)
    return _render(
        request,
        site,
        "page.html",
        build_context(site, document=document, page=document.content),
    )


@router.get("/{path:path}", include_in_schema=False)
async def catch_all(request: Request, path: str) -> Response:
    return await _static_or_not_found(request, path)


def create_app(
    settings: Mapping[str, Any],
    *,
    repository: ContentRepository | None = None,
    site_config: SiteConfigCache | None = None,
) -> FastAPI:
    verbose = bool(settings.get("verbose_logging", False))
    logger = get_logger("amelie.web", verbose)
    repository = repository or ContentRepository.from_settings(settings)
    site_config = site_config or SiteConfigCache(
        repository, defaults=SiteConfig.from_settings(settings), verbose=verbose
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await site_config.refresh()
        yield

    app = FastAPI(lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.logger = logger
    app.state.repository = repository
    app.state.site_config = site_config
    app.state.blogroll = BlogrollAssembler(repository, verbose=verbose)
    app.state.homepage_post_count = config.get_int_setting(
        settings, "homepage_post_count"
    )

    static_dir = repository.config.static_dir
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
    else:
        logger.debug("No static directory at %s", static_dir)
    app.include_router(router)
    return app
