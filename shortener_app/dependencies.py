"""
FastAPI dependencies for dependency injection.

The storage instance is owned by the application (app.state.storage)
rather than a module-level singleton, so tests and alternative
backends can hand their own instance to create_app().
"""

from functools import lru_cache

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from shortener_app.schemas.redirect import CreateRedirectForm
from shortener_app.services.page_renderer import PageRenderer
from shortener_app.storage.strategies import RedirectStorageStrategy


def get_storage(request: Request) -> RedirectStorageStrategy:
    """Storage instance the running application was created with"""
    return request.app.state.storage


@lru_cache()
def get_page_renderer() -> PageRenderer:
    """
    Get page renderer (singleton).

    @lru_cache ensures the template is read from disk only once.
    """
    return PageRenderer()


async def get_create_form(request: Request) -> CreateRedirectForm:
    """
    Parse the creation form.

    FastAPI's Form() parameters treat an empty string as a missing
    value, so the body is validated against the schema directly.
    """
    form = await request.form()
    try:
        return CreateRedirectForm.model_validate(dict(form))
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_input=False)) from e
