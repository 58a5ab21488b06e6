from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from .adapters.transport import Transport, UrllibTransport
from .decoders import decode_photo_list
from .domain.models import Photo
from .remote import Failure, Remote
from .settings import AppSettings, load_settings
from .views import AuthorsListView, PhotoDetailView, PhotoViewRegistry, ViewState, build_detail_path

LOGGER = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
WEB_DIR = BASE_DIR / "web"
TEMPLATES_DIR = WEB_DIR / "templates"

SERVICE_NAME = "photobrowser"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


def _updated_at() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


def _get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def _get_authors_view(request: Request) -> AuthorsListView:
    return request.app.state.authors_view


def _get_photo_views(request: Request) -> PhotoViewRegistry:
    return request.app.state.photo_views


def configure_logging(settings: AppSettings) -> logging.Logger:
    package_logger = logging.getLogger(SERVICE_NAME)
    package_logger.setLevel(settings.env.photobrowser_log_level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        package_logger.propagate = False
    return package_logger


def build_transport(settings: AppSettings) -> UrllibTransport:
    return UrllibTransport(
        timeout_seconds=settings.yaml.source.timeout_seconds,
        user_agent=settings.yaml.source.user_agent,
    )


def build_authors_view(settings: AppSettings, transport: Transport) -> AuthorsListView:
    remote = Remote(settings.yaml.source.list_url, decode_photo_list, transport=transport)
    return AuthorsListView(remote)


def _lookup_photo(request: Request, photo_id: str) -> Photo:
    photo = _get_authors_view(request).find_photo(photo_id)
    if photo is None:
        raise HTTPException(status_code=404, detail="Photo not found")
    return photo


def _page_context(settings: AppSettings, *, page_title: str, state: ViewState) -> dict[str, Any]:
    return {
        "app_title": settings.yaml.ui.title,
        "page_title": page_title,
        "state": state.value,
        "auto_refresh": state == ViewState.LOADING,
        "poll_seconds": settings.yaml.ui.poll_seconds,
        "environment": settings.env.photobrowser_env,
        "generated_at": _updated_at(),
    }


def _failure_message(view: AuthorsListView | PhotoDetailView) -> str | None:
    result = view.remote.result
    if not isinstance(result, Failure):
        return None
    return str(result.error)


@router.get("/", response_class=HTMLResponse)
async def authors_page(request: Request) -> HTMLResponse:
    settings = _get_settings(request)
    view = _get_authors_view(request)
    view.on_appear()

    show_failures = settings.yaml.ui.show_failures
    state = view.state(show_failures=show_failures)
    rows = view.rows() if state == ViewState.LOADED else []
    return templates.TemplateResponse(
        request,
        "authors.html",
        {
            **_page_context(settings, page_title=view.title, state=state),
            "rows": rows,
            "failure_message": _failure_message(view) if state == ViewState.FAILED else None,
            "retry_path": "/retry",
        },
    )


@router.get("/photos/{photo_id:path}/image")
async def photo_image(request: Request, photo_id: str) -> Response:
    photo = _lookup_photo(request, photo_id)
    view = _get_photo_views(request).get(photo.download_url)
    image = view.image if view is not None else None
    if image is None:
        raise HTTPException(status_code=404, detail="Image not loaded")
    return Response(content=image.content, media_type=image.media_type)


def _ensure_retry_allowed(
    settings: AppSettings,
    view: AuthorsListView | PhotoDetailView | None,
) -> AuthorsListView | PhotoDetailView:
    if not settings.yaml.ui.show_failures:
        raise HTTPException(status_code=404, detail="Retry is disabled")
    if view is None or view.state(show_failures=True) != ViewState.FAILED:
        raise HTTPException(status_code=409, detail="Nothing to retry")
    return view


@router.post("/retry")
async def retry_authors(request: Request) -> RedirectResponse:
    settings = _get_settings(request)
    view = _ensure_retry_allowed(settings, _get_authors_view(request))
    view.retry()
    LOGGER.info("Retrying author list fetch")
    return RedirectResponse("/", status_code=303)


@router.post("/photos/{photo_id:path}/retry")
async def retry_photo(request: Request, photo_id: str) -> RedirectResponse:
    settings = _get_settings(request)
    photo = _lookup_photo(request, photo_id)
    view = _ensure_retry_allowed(settings, _get_photo_views(request).get(photo.download_url))
    view.retry()
    LOGGER.info("Retrying image fetch for photo %s", photo.id)
    return RedirectResponse(build_detail_path(photo.id), status_code=303)


@router.get("/photos/{photo_id:path}", response_class=HTMLResponse)
async def photo_page(request: Request, photo_id: str) -> HTMLResponse:
    settings = _get_settings(request)
    photo = _lookup_photo(request, photo_id)
    view = _get_photo_views(request).get_or_create(photo.download_url)
    view.on_appear()

    state = view.state(show_failures=settings.yaml.ui.show_failures)
    viewport = settings.yaml.ui.viewport
    display = view.display_size(viewport.width, viewport.height) if state == ViewState.LOADED else None
    detail_path = build_detail_path(photo.id)
    return templates.TemplateResponse(
        request,
        "photo.html",
        {
            **_page_context(settings, page_title=view.title, state=state),
            "author": photo.author,
            "image_url": f"{detail_path}/image",
            "display": display,
            "viewport": viewport,
            "failure_message": _failure_message(view) if state == ViewState.FAILED else None,
            "retry_path": f"{detail_path}/retry",
        },
    )


@router.get("/health", response_class=JSONResponse)
async def health(request: Request) -> JSONResponse:
    settings = _get_settings(request)
    authors_view = _get_authors_view(request)
    remote = authors_view.remote

    return JSONResponse(
        {
            "status": "ok",
            "service": SERVICE_NAME,
            "environment": settings.env.photobrowser_env,
            "authors": {
                "url": remote.url,
                "phase": remote.phase.value,
                "result": remote.result.kind,
                "count": len(remote.value or []),
                "resolved_at_utc": _format_timestamp(authors_view.resolved_at),
            },
            "photo_views": len(_get_photo_views(request)),
            "started_at_utc": _format_timestamp(request.app.state.started_at_utc),
            "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        }
    )


def create_app(
    settings: AppSettings | None = None,
    transport: Transport | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(application: FastAPI):
        app_settings = settings if settings is not None else load_settings()
        configure_logging(app_settings)
        app_transport = transport if transport is not None else build_transport(app_settings)

        application.state.settings = app_settings
        application.state.transport = app_transport
        application.state.authors_view = build_authors_view(app_settings, app_transport)
        application.state.photo_views = PhotoViewRegistry(transport=app_transport)
        application.state.started_at_utc = datetime.now(timezone.utc)
        LOGGER.info("Photo browser started with list endpoint %s", app_settings.yaml.source.list_url)
        yield

    application = FastAPI(title="Photo Browser", version="0.1.0", lifespan=lifespan)
    application.include_router(router)
    return application


app = create_app()
