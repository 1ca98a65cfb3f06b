"""Logging setup and terminal-safe text for non-UTF-8 consoles.

Analyzer modules log through ``logging.getLogger(__name__)``; the CLI routes
those records to a Rich handler. On terminals without UTF-8 support, the
Unicode glyphs used in CLI output are replaced with ASCII equivalents.
"""
import locale
import logging
import sys

from rich.logging import RichHandler

PACKAGE_LOGGER = "tailwind_hierarchy"

# Glyphs used by the CLI -> ASCII fallback
ICON_MAP = {
    '✓': '[OK]',
    '✗': '[FAIL]',
    '⚠': '[WARN]',
    '↻': '[cycle]',
    '→': '->',
    '…': '...',
    '•': '*',
    '│': '|',
    '─': '-',
    '├': '+',
    '└': '+',
}


def detect_terminal_encoding() -> str:
    """Detect the terminal's encoding.

    Returns:
        str: Encoding name in lower case, 'ascii' if undetectable
    """
    if getattr(sys.stdout, 'encoding', None):
        return sys.stdout.encoding.lower()

    try:
        return locale.getpreferredencoding().lower()
    except (AttributeError, ValueError):
        return 'ascii'


def is_utf8_capable() -> bool:
    return detect_terminal_encoding().replace('_', '-') in ('utf-8', 'utf8')


def sanitize_for_terminal(text: str) -> str:
    """Replace known Unicode glyphs with ASCII when the terminal can't show them."""
    if is_utf8_capable():
        return text

    for unicode_char, ascii_replacement in ICON_MAP.items():
        text = text.replace(unicode_char, ascii_replacement)
    return text


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a single RichHandler to the package logger.

    Safe to call repeatedly: the handler is installed once and only the
    level is updated afterwards.

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(show_time=False, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
