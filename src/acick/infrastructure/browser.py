"""Best-effort browser launch."""

import webbrowser

from loguru import logger

from .console import Console


def open_in_browser(url: str, console: Console) -> bool:
    """Open ``url`` in the default browser; failures are reported, never raised."""
    console.write(f"Opening {url} ... ")
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        logger.warning(f"Could not open browser: {e}")
        opened = False

    if opened:
        console.writeln("opened")
    else:
        logger.warning(f"No browser could be launched for {url}")
        console.writeln("failed")
        console.warn(f"Could not open a browser. Open the url manually: {url}")
    return opened
