"""
Complete operations built from one or more sessions: copying a
resource with its properties, deleting, moving, creating collections
and so on.  Each command opens its own DAVSession(s) and closes them
when done, whether the command succeeded or not.

The one-shot functions at the end of this module (get_props,
put_content, ...) are kept for backward compatibility only.
"""
import logging
import warnings
from typing import Any
from typing import Optional
from typing import Tuple
from typing import Union

from lxml.etree import _Element

from davsession import __version__
from davsession.collection import make_collection
from davsession.session import DAVSession
from davsession.session import Depth

log = logging.getLogger("davsession")

USER_AGENT = "davsession/" + __version__

Content = Tuple[Optional[str], bytes]


def open_session(
    url: str,
    username: Optional[str] = None,
    password: Optional[str] = None,
    **kwargs: Any,
) -> DAVSession:
    kwargs.setdefault("user_agent", USER_AGENT)
    return DAVSession(url, username=username, password=password, **kwargs)


def copy(
    source_url: str,
    target_url: str,
    source_username: Optional[str] = None,
    source_password: Optional[str] = None,
    target_username: Optional[str] = None,
    target_password: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Copies content and properties from one resource to another,
    possibly on another server.

    The source is locked (if possible) for the whole copy, without
    allowing the server to create it.  The target is locked (if
    possible) while its content and properties are written.
    """
    with open_session(
        source_url, source_username, source_password, depth=Depth.ZERO, **kwargs
    ) as source:
        with source.lock_if_possible(require_existing=True):
            props = source.propfind()
            content_type, body = source.get()
            with open_session(
                target_url, target_username, target_password, **kwargs
            ) as target:
                with target.lock_if_possible(require_existing=False):
                    target.put(body, content_type)
                    target.proppatch(props)
    log.info("copied %s to %s", source_url, target_url)


def delete(
    url: str, username: Optional[str] = None, password: Optional[str] = None, **kwargs
) -> None:
    with open_session(url, username, password, **kwargs) as session:
        with session.lock_if_possible_for_delete(require_existing=False):
            session.delete()


def move(
    url: str,
    destination: str,
    username: Optional[str] = None,
    password: Optional[str] = None,
    **kwargs: Any,
) -> None:
    with open_session(url, username, password, **kwargs) as session:
        session.move(destination)


def getprops(
    url: str,
    username: Optional[str] = None,
    password: Optional[str] = None,
    depth: Union[Depth, str, int, None] = None,
    **kwargs: Any,
) -> _Element:
    with open_session(url, username, password, depth=depth, **kwargs) as session:
        return session.propfind()


def put(
    url: str,
    body: Union[bytes, str],
    username: Optional[str] = None,
    password: Optional[str] = None,
    content_type: Optional[str] = None,
    **kwargs: Any,
) -> None:
    with open_session(url, username, password, **kwargs) as session:
        session.put(body, content_type)


def makecollection(
    url: str, username: Optional[str] = None, password: Optional[str] = None, **kwargs
) -> None:
    """Creates the collection at url, and any missing parents"""
    with open_session(url, username, password, **kwargs) as session:
        make_collection(session)


def report(
    url: str, username: Optional[str] = None, password: Optional[str] = None, **kwargs
) -> _Element:
    """Runs a calendar-query REPORT for all calendar objects"""
    with open_session(url, username, password, depth=Depth.ONE, **kwargs) as session:
        return session.report()


## Deprecated one-shot wrappers.


def _deprecated(old: str, new: str) -> None:
    warnings.warn(
        f"{old} is deprecated, use DAVSession.{new} instead",
        DeprecationWarning,
        stacklevel=3,
    )


def get_props(
    url: str,
    username: Optional[str],
    password: Optional[str],
    depth: Union[Depth, str, int, None] = None,
) -> _Element:
    _deprecated("get_props", "propfind")
    with open_session(url, username, password, depth=depth) as session:
        return session.propfind()


def get_props_and_content(
    url: str, username: Optional[str], password: Optional[str]
) -> Tuple[_Element, Content]:
    _deprecated("get_props_and_content", "propfind and DAVSession.get")
    with open_session(url, username, password, depth=Depth.ZERO) as session:
        with session.lock_if_possible(require_existing=True):
            return session.propfind(), session.get()


def put_content(
    url: str, username: Optional[str], password: Optional[str], content: Content
) -> None:
    _deprecated("put_content", "put")
    content_type, body = content
    with open_session(url, username, password) as session:
        with session.lock_if_possible(require_existing=False):
            session.put(body, content_type)


def put_content_and_props(
    url: str,
    username: Optional[str],
    password: Optional[str],
    props_and_content: Tuple[_Element, Content],
) -> None:
    _deprecated("put_content_and_props", "put and DAVSession.proppatch")
    props, (content_type, body) = props_and_content
    with open_session(url, username, password) as session:
        with session.lock_if_possible(require_existing=False):
            session.put(body, content_type)
            session.proppatch(props)


def delete_content(url: str, username: Optional[str], password: Optional[str]) -> None:
    _deprecated("delete_content", "delete")
    with open_session(url, username, password) as session:
        with session.lock_if_possible_for_delete(require_existing=False):
            session.delete()


def move_content(
    url: str, destination: str, username: Optional[str], password: Optional[str]
) -> None:
    _deprecated("move_content", "move")
    with open_session(url, username, password) as session:
        session.move(destination)


def caldav_report(url: str, username: Optional[str], password: Optional[str]) -> _Element:
    _deprecated("caldav_report", "report")
    with open_session(url, username, password, depth=Depth.ONE) as session:
        return session.report()


def mk_collection(url: str, username: Optional[str], password: Optional[str]) -> bool:
    """
    A single MKCOL.  Returns False if an intermediate collection is
    missing (ie, /a/b/c/d cannot be made until /a/b/c exists).
    """
    _deprecated("mk_collection", "mkcol")
    with open_session(url, username, password) as session:
        return session.mkcol()
