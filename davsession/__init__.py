#!/usr/bin/env python
import logging

__version__ = "1.0.0"

from .session import DAVSession
from .session import Depth
from .collection import make_collection
from .response import DAVResponse

# Silence notification of no default logging handler
log = logging.getLogger("davsession")


class NullHandler(logging.Handler):
    def emit(self, record) -> None:
        pass


log.addHandler(NullHandler())

__all__ = ["__version__", "DAVSession", "DAVResponse", "Depth", "make_collection"]
