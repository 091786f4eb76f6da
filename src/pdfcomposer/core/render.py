"""Markdown to HTML, print page template, and the headless Chromium PDF renderer"""

import html
import logging
from typing import Protocol

from markdown_it import MarkdownIt
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from pdfcomposer.core.models import RenderRequest
from pdfcomposer.core.page import FontsStandard, css_font
from pdfcomposer.exceptions import RenderError


logger = logging.getLogger(__name__)


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def markdown_to_html(markdown: str, parser_config: str = "gfm-like") -> str:
    return _make_parser(parser_config).render(markdown)


def print_css(font: FontsStandard, width: float, height: float) -> str:
    """Print-media stylesheet setting the body font and the @page size in inches."""
    css = css_font(font)
    return (
        "<style>\n@media print {\n "
        f"body {{ font-family: {css.family}; font-weight: {css.weight}; font-style: {css.style} }}\n\n"
        f"@page {{\nsize: {width}in {height}in;\n}}"
        "\n}\n</style>"
    )


def build_html_page(body_html: str, title: str, font: FontsStandard, width: float, height: float) -> str:
    """Wrap rendered Markdown in a full HTML document; `title` becomes the <title> element."""
    return (
        f"<html><head><title>{html.escape(title)}</title>{print_css(font, width, height)}</head>"
        f"<body>{body_html}</body></html>"
    )


class Renderer(Protocol):
    async def render(self, request: RenderRequest) -> bytes:
        """Return raw PDF bytes for request.html, or raise RenderError."""
        ...


class ChromiumRenderer:
    """Render HTML to PDF with Playwright's headless Chromium; one browser session per request."""

    def __init__(self, headless: bool = True):
        self.headless = headless

    def pdf_options(self, request: RenderRequest) -> dict:
        """Keyword arguments for Page.pdf, sizes in inches."""
        m = request.margins
        return {
            "width": f"{request.width}in",
            "height": f"{request.height}in",
            "margin": {
                "top": f"{m.top}in",
                "right": f"{m.right}in",
                "bottom": f"{m.bottom}in",
                "left": f"{m.left}in",
            },
            "prefer_css_page_size": True,
        }

    async def render(self, request: RenderRequest) -> bytes:
        try:
            async with async_playwright() as pw:
                browser = await pw.chromium.launch(headless=self.headless)
                try:
                    page = await browser.new_page()
                    await page.set_content(request.html, wait_until="load")
                    pdf = await page.pdf(**self.pdf_options(request))
                finally:
                    await browser.close()
        except PlaywrightError as e:
            raise RenderError(f"Chromium failed to render PDF: {e}") from e
        logger.debug("Rendered %d bytes of PDF", len(pdf))
        return pdf
