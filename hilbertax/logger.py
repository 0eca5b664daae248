import logging
import colorlog

logger = logging.getLogger("hilbertax")

def _build_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    # This formatter prints:
    #   - A colored log level
    #   - The time
    #   - The full path with line number (pathname:lineno), clickable in most editors
    #   - The function name
    #   - The actual log message
    formatter = colorlog.ColoredFormatter(
        fmt="%(log_color)s%(asctime)s [%(levelname)s] %(pathname)s:%(lineno)d in %(funcName)s() | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        reset=True,
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "bold_red",
        },
        style="%"
    )
    handler.setFormatter(formatter)
    return handler

# The logger outlives module reloads, attach the handler only once
if not logger.handlers:
    logger.addHandler(_build_handler())
    logger.setLevel(logging.INFO)
logger.propagate = False

def set_verbosity(level):
    """Set the package log level, e.g. `set_verbosity(logging.DEBUG)` or `set_verbosity("DEBUG")`."""
    logger.setLevel(level)
