from pydantic import BaseModel, Field


class CreateRedirectForm(BaseModel):
    """
    Form body of POST /create.

    Fields only have to be present: empty strings are allowed and the
    URL is stored exactly as submitted.
    """
    short_name: str = Field(..., description="Identifier chosen by the creator")
    url: str = Field(..., description="Target URL, not validated")
    owner: str = Field(..., description="Free-text owner, never checked")
