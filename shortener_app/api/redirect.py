from urllib.parse import urlencode

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from shortener_app.dependencies import get_storage
from shortener_app.logging_config import get_logger
from shortener_app.storage.exceptions import RedirectNotFoundError, StorageError
from shortener_app.storage.strategies import RedirectStorageStrategy

router = APIRouter(tags=["redirect"])
logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "Redirect not found"
LOOKUP_FAILED_MESSAGE = "An error occurred while looking up the redirect"


def _back_home(message: str) -> RedirectResponse:
    """Temporary redirect to the home page carrying an error message"""
    query = urlencode({"message": message, "success": "false"})
    return RedirectResponse(url=f"/?{query}", status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get("/go/{short_name}")
async def follow_redirect(
    short_name: str,
    storage: RedirectStorageStrategy = Depends(get_storage),
):
    """
    Redirect to the stored URL.

    Hits are answered with a permanent redirect, so browsers may cache
    them. Misses and storage failures go back to the home page with a
    temporary redirect.
    """
    try:
        target_url = await storage.lookup(short_name)
    except RedirectNotFoundError:
        return _back_home(NOT_FOUND_MESSAGE)
    except StorageError:
        return _back_home(LOOKUP_FAILED_MESSAGE)

    logger.debug("Looked up %s", short_name)
    return RedirectResponse(url=target_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)
