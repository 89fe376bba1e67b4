from pathlib import Path
from typing import Optional

TEMPLATE_PATH = Path(__file__).resolve().parent.parent / "templates" / "index.html"
MESSAGE_PLACEHOLDER = "<!-- MESSAGE_PLACEHOLDER -->"


class PageRenderer:
    """
    Renders the single index page.

    No templating language: the template has one placeholder which is
    replaced by a message block, or by nothing.
    """

    def __init__(self, template: Optional[str] = None):
        """
        Args:
            template: Template text (read from TEMPLATE_PATH when omitted)
        """
        if template is None:
            template = TEMPLATE_PATH.read_text(encoding="utf-8")
        self.template = template

    def render(self, message: Optional[str] = None, is_success: bool = False) -> str:
        """Render the page with an optional message block"""
        if not message:
            return self.template.replace(MESSAGE_PLACEHOLDER, "")

        css_class = "success" if is_success else "error"
        block = f"<div class='message {css_class}' style='display:block;'>{message}</div>"
        return self.template.replace(MESSAGE_PLACEHOLDER, block)
