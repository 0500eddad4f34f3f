"""Render assembled HTML to PDF with a headless Chromium-family browser."""

import logging
import re
import shutil
import subprocess
import tempfile
from pathlib import Path

from epub2pdf.models.options import ConversionOptions

log = logging.getLogger(__name__)

_HEAD_CLOSE = re.compile(r"</head\s*>", re.IGNORECASE)


class RenderError(Exception):
    """Error from the rendering browser."""

    def __init__(self, error_type: str, message: str, code: int | None = None):
        self.error_type = error_type
        self.message = message
        self.code = code
        super().__init__(f"{error_type}: {message}")


def build_print_css(options: ConversionOptions) -> str:
    """CSS carrying page geometry, background printing and scale."""
    width, height = options.page_dimensions()
    rules = [
        f"@page {{ size: {width}in {height}in; margin: {options.margin}in; }}",
    ]
    if options.print_background:
        rules.append(
            "* { -webkit-print-color-adjust: exact !important;"
            " print-color-adjust: exact !important; }"
        )
    if options.scale != 1.0:
        rules.append(f"html {{ zoom: {options.scale}; }}")
    return "\n".join(rules)


def inject_print_css(html: str, css: str) -> str:
    """Insert a <style> block just before </head> (or at the top)."""
    block = f"<style>\n{css}\n</style>\n"
    match = _HEAD_CLOSE.search(html)
    if match is None:
        return block + html
    return html[: match.start()] + block + html[match.start() :]


class ChromeRenderer:
    """Navigate a headless browser to a local file and print it to PDF."""

    BROWSER_CANDIDATES = (
        "chromium",
        "chromium-browser",
        "google-chrome",
        "google-chrome-stable",
        "chrome",
        "microsoft-edge",
    )

    def __init__(self, browser: str | None = None):
        self.browser = browser

    def find_browser(self) -> str:
        """Return the browser executable or raise BROWSER_NOT_FOUND."""
        if self.browser:
            found = shutil.which(self.browser)
            if found:
                return found
            raise RenderError("BROWSER_NOT_FOUND", f"Browser not found: {self.browser}")

        for name in self.BROWSER_CANDIDATES:
            found = shutil.which(name)
            if found:
                return found

        raise RenderError(
            "BROWSER_NOT_FOUND",
            "No Chrome/Chromium executable on PATH (use --browser)",
        )

    def build_command(self, browser: str, html_path: Path, pdf_path: Path) -> list[str]:
        return [
            browser,
            "--headless=new",
            "--disable-gpu",
            "--no-first-run",
            "--no-pdf-header-footer",
            f"--print-to-pdf={pdf_path}",
            html_path.as_uri(),
        ]

    def render(self, html: str, output_path: Path, options: ConversionOptions) -> Path:
        """Render ``html`` to ``output_path`` and return that path."""
        browser = self.find_browser()
        output_path = Path(output_path).resolve()
        document = inject_print_css(html, build_print_css(options))
        output_path.unlink(missing_ok=True)

        with tempfile.TemporaryDirectory(prefix="epub2pdf-") as tmp:
            html_path = Path(tmp) / "book.html"
            html_path.write_text(document, encoding="utf-8")
            cmd = self.build_command(browser, html_path, output_path)
            log.debug("Running %s", " ".join(cmd))

            try:
                result = subprocess.run(
                    cmd,
                    capture_output=True,
                    text=True,
                    timeout=options.timeout_seconds,
                )
            except subprocess.TimeoutExpired:
                raise RenderError(
                    "TIMEOUT", f"Rendering timed out after {options.timeout_seconds:g}s"
                )

        if result.returncode != 0:
            error_msg = result.stderr or result.stdout or "Unknown error"
            raise RenderError("CLI_ERROR", error_msg.strip(), code=result.returncode)

        if not output_path.exists():
            raise RenderError("NO_OUTPUT", f"Browser produced no PDF at {output_path}")

        return output_path
