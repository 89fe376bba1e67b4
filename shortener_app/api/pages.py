from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from shortener_app.dependencies import get_create_form, get_page_renderer, get_storage
from shortener_app.schemas.redirect import CreateRedirectForm
from shortener_app.services.page_renderer import PageRenderer
from shortener_app.storage.exceptions import RedirectAlreadyExistsError, StorageError
from shortener_app.storage.strategies import RedirectStorageStrategy

router = APIRouter(tags=["pages"])

CREATED_MESSAGE = "Redirect created successfully"
ALREADY_EXISTS_MESSAGE = "ID already exists"
CREATE_FAILED_MESSAGE = "An error occurred while creating the redirect"


@router.get("/", response_class=HTMLResponse)
async def index(renderer: PageRenderer = Depends(get_page_renderer)):
    """
    Home page with the creation form.

    The message region is always empty here, even when a failed
    redirect sent the browser back with ?message=... in the URL.
    """
    return HTMLResponse(renderer.render())


@router.post("/create", response_class=HTMLResponse)
async def create_redirect(
    form: CreateRedirectForm = Depends(get_create_form),
    storage: RedirectStorageStrategy = Depends(get_storage),
    renderer: PageRenderer = Depends(get_page_renderer),
):
    """Store a new redirect and show the outcome on the home page"""
    try:
        await storage.store(form.short_name, form.url, form.owner)
        message, is_success = CREATED_MESSAGE, True
    except RedirectAlreadyExistsError:
        message, is_success = ALREADY_EXISTS_MESSAGE, False
    except StorageError:
        message, is_success = CREATE_FAILED_MESSAGE, False

    return HTMLResponse(renderer.render(message, is_success=is_success))
