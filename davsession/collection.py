"""
Creation of collections, including any missing parent collections.
"""
import logging
from typing import Union

from davsession.lib import error
from davsession.lib.url import URL
from davsession.session import DAVSession

log = logging.getLogger("davsession")


def make_collection(session: DAVSession, url: Union[str, URL, None] = None) -> None:
    """
    Creates the collection at ``url`` (default: the session target).

    A 409 Conflict on MKCOL is taken to mean that the parent is
    missing, so the parent is created first (recursively) and MKCOL is
    tried once more.  This is a heuristic: a server answering 409 for
    other reasons will have us walk up to the root and give up there.

    Raises:
        CollectionCreationError if the collection could not be made.
    """
    target = session.resolve(url)
    if session.mkcol(target):
        return
    parent = target.parent()
    if target.is_root():
        raise error.CollectionCreationError(
            url=str(target), reason="failed creating %s" % target
        )
    log.info("creating missing parent collection %s", parent)
    make_collection(session, parent)
    if not session.mkcol(target):
        raise error.CollectionCreationError(
            url=str(target), reason="failed creating %s" % target
        )
