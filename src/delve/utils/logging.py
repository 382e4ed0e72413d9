import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "delve"

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s: %(message)s"


def configure_logging(debug: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """Send ``delve.*`` log records to stderr for the command line.

    Only the package logger is touched, so an embedding application keeps its
    own root configuration. Quiet by default (warnings and errors); ``debug``
    shows the generators' phase and count messages. Calling it again replaces
    the handler installed by the previous call.
    """
    pkg = logging.getLogger(PACKAGE_LOGGER)
    for h in list(pkg.handlers):
        if getattr(h, "_delve_cli", False):
            pkg.removeHandler(h)

    handler = logging.StreamHandler(stream=stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%H:%M:%S"))
    handler._delve_cli = True  # type: ignore[attr-defined]
    pkg.addHandler(handler)
    pkg.setLevel(logging.DEBUG if debug else logging.WARNING)
    return pkg
