"""Shared fixtures for copypage tests."""

import logging

import pytest
from copypage.errors import ClipboardUnavailableError

DOCS_PAGE = """<!DOCTYPE html>
<html>
<head><title>Getting Started | Docs</title></head>
<body>
<nav class="navbar"><a href="/">Home</a></nav>
<main>
<nav class="theme-doc-breadcrumbs"><ul><li><a href="/docs">Breadcrumb Root</a></li></ul></nav>
<div class="theme-doc-markdown markdown">
<header><h1>Getting Started</h1></header>
<p>Install the <code>cli</code> first.</p>
<h2 id="install">Install<a class="hash-link" href="#install" aria-label="Direct link to Install">​</a></h2>
<div class="language-bash codeBlockContainer"><div class="codeBlockContent"><pre class="prism-code language-bash codeBlock"><code class="codeBlockLines"><span class="token-line"><span class="token plain">npm install</span><br></span></code></pre><div class="buttonGroup"><button type="button" class="clean-btn" aria-label="Copy code to clipboard">Copy</button></div></div></div>
<ul><li>Fast</li><li>Small</li></ul>
<p>See <a href="#install">above</a> and <a href="https://example.com/more">more</a>.</p>
</div>
<nav class="pagination-nav"><a href="/next">Next page</a></nav>
</main>
</body>
</html>"""

DOCS_PAGE_MARKDOWN = (
    "# Getting Started\n"
    "\n"
    "Install the `cli` first.\n"
    "\n"
    "## Install\n"
    "\n"
    "```bash\n"
    "npm install\n"
    "```\n"
    "\n"
    "- Fast\n"
    "- Small\n"
    "\n"
    "See above and [more](https://example.com/more)."
)

UNTITLED_PAGE = """<html>
<head><title>API Reference</title></head>
<body><div class="theme-doc-markdown markdown"><p>Body text.</p></div></body>
</html>"""


class RecordingBackend:
    """Clipboard backend that records writes or fails on demand."""

    def __init__(self, name: str = "recording", fail: bool = False):
        self.name = name
        self.fail = fail
        self.texts: list[str] = []

    def write(self, text: str) -> None:
        if self.fail:
            raise ClipboardUnavailableError(f"{self.name} unavailable")
        self.texts.append(text)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def docs_page():
    return DOCS_PAGE


@pytest.fixture
def docs_page_markdown():
    return DOCS_PAGE_MARKDOWN


@pytest.fixture
def untitled_page():
    return UNTITLED_PAGE


@pytest.fixture
def recording_backend():
    return RecordingBackend()


@pytest.fixture
def failing_backend():
    return RecordingBackend(name="broken", fail=True)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def restore_copypage_logger():
    """Undo setup_logging() calls made by a test."""
    logger = logging.getLogger("copypage")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
