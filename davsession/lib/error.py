#!/usr/bin/env python
import logging
import os
from collections import defaultdict
from typing import Dict
from typing import Optional
from typing import Type

from davsession import __version__

## Environmental variables prepended with "DAVSESSION_" are used both for
## debug purposes and for connection parameters (see davsession.config)
debug_dump_communication = os.environ.get("DAVSESSION_COMMDUMP", False)
## one of DEBUG_PDB, DEBUG, DEVELOPMENT, PRODUCTION
debugmode = os.environ.get("DAVSESSION_DEBUGMODE")
if not debugmode:
    if "dev" in __version__ or __version__ == "(unknown)":
        debugmode = "DEVELOPMENT"
    else:
        debugmode = "PRODUCTION"

log = logging.getLogger("davsession")
if debugmode.startswith("DEBUG"):
    log.setLevel(logging.DEBUG)
else:
    log.setLevel(logging.WARNING)


def weirdness(*reasons):
    from davsession.lib.debug import xmlstring

    reason = " : ".join([xmlstring(x) for x in reasons])
    log.warning(f"Deviation from expectations found: {reason}")
    if debugmode == "DEBUG_PDB":
        log.error(f"Dropping into debugger due to {reason}")
        import pdb

        pdb.set_trace()


class DAVError(Exception):
    url: Optional[str] = None
    reason: str = "no reason"
    method: Optional[str] = None
    status: Optional[int] = None

    def __init__(
        self,
        url: Optional[str] = None,
        reason: Optional[str] = None,
        method: Optional[str] = None,
        status: Optional[int] = None,
    ) -> None:
        if url:
            self.url = url
        if reason:
            self.reason = reason
        if method:
            self.method = method
        if status:
            self.status = status
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.method and self.status:
            return "%s: %s %s returned %s, reason %s" % (
                self.__class__.__name__,
                self.method,
                self.url,
                self.status,
                self.reason,
            )
        return "%s at '%s', reason %s" % (
            self.__class__.__name__,
            self.url,
            self.reason,
        )


class AuthorizationError(DAVError):
    """
    The server answered 401 or 403 and we have nothing more to try.
    The url property will contain the url in question, the reason
    property will contain the excuse the server sent.
    """

    pass


class NotFoundError(DAVError):
    pass


class ResponseError(DAVError):
    pass


class OptionsError(DAVError):
    pass


class PropfindError(DAVError):
    pass


class ProppatchError(DAVError):
    pass


class GetError(DAVError):
    pass


class PutError(DAVError):
    pass


class DeleteError(DAVError):
    pass


class MoveError(DAVError):
    pass


class MkcolError(DAVError):
    pass


class ReportError(DAVError):
    pass


class LockError(DAVError):
    pass


class UnlockError(DAVError):
    pass


class CollectionCreationError(DAVError):
    """
    Raised when a collection could not be made, not even after all
    missing parent collections were created.
    """

    pass


exception_by_method: Dict[str, Type[DAVError]] = defaultdict(lambda: DAVError)
for method in (
    "options",
    "propfind",
    "proppatch",
    "get",
    "put",
    "delete",
    "move",
    "mkcol",
    "report",
    "lock",
    "unlock",
):
    exception_by_method[method] = locals()[method[0].upper() + method[1:] + "Error"]
