"""
Optional server side locking.

A lock is only attempted when the server advertises both LOCK and
UNLOCK in its ``Allow`` header.  Failing to get a lock is never fatal:
the session just carries on without one.  Releasing happens on every
exit path of the locked block, except after a successful DELETE, which
destroys the lock on the server together with the resource.
"""
import enum
import logging
from contextlib import contextmanager
from typing import Iterator
from typing import Optional
from typing import TYPE_CHECKING

import requests

from davsession.elements import dav
from davsession.lib import error

if TYPE_CHECKING:
    from davsession.session import DAVSession

log = logging.getLogger("davsession")

LOCK_TIMEOUT = "Second-300"
DEFAULT_OWNER = "davsession user"


class LockState(enum.Enum):
    UNLOCKED = "unlocked"
    LOCKING = "locking"
    LOCKED = "locked"
    UNLOCKING = "unlocking"
    ## the LOCK request was refused; behaves like UNLOCKED
    LOCK_FAILED = "lock-failed"


def lockinfo(owner: str = DEFAULT_OWNER) -> dav.LockInfo:
    return dav.LockInfo() + [
        dav.LockScope() + dav.Exclusive(),
        dav.LockType() + dav.Write(),
        dav.Owner(owner),
    ]


class LockManager:
    """
    Acquires and releases the single lock a session may hold.  The
    token itself lives in ``session.lock_token`` since PUT and
    PROPPATCH need it for their ``If`` header.
    """

    def __init__(self, session: "DAVSession", owner: str = DEFAULT_OWNER) -> None:
        self.session = session
        self.owner = owner
        self.state = LockState.UNLOCKED

    def __repr__(self) -> str:
        return "LockManager(%s, %s)" % (self.session.url, self.state.value)

    @property
    def locked(self) -> bool:
        return self.state == LockState.LOCKED

    def acquire(self, require_existing: bool = False) -> Optional[str]:
        """
        Sends LOCK for the session target.  With ``require_existing``
        an ``If-Match: *`` header keeps the server from creating an
        empty resource to hold the lock.

        Returns the lock token, or None if the server refused.
        """
        self.state = LockState.LOCKING
        headers = {
            "Content-Type": 'application/xml; charset="utf-8"',
            "Depth": "0",
            "Timeout": LOCK_TIMEOUT,
        }
        if require_existing:
            headers["If-Match"] = "*"
        try:
            response = self.session.request(
                "LOCK", body=lockinfo(self.owner).tostring(), headers=headers
            )
        except error.DAVError as e:
            ## e.g. AuthorizationError on a final 401
            return self._refused(e)
        except requests.exceptions.RequestException:
            self.state = LockState.UNLOCKED
            raise
        token = response.headers.get("Lock-Token") if response.ok else None
        if not token:
            return self._refused(
                error.LockError(
                    url=str(self.session.url),
                    reason=response.reason or "no Lock-Token in reply",
                    method="LOCK",
                    status=response.status,
                )
            )
        self.session.lock_token = token
        self.state = LockState.LOCKED
        log.debug("locked %s with token %s", self.session.url, token)
        return token

    def _refused(self, reason: error.DAVError) -> None:
        log.warning("%s, continuing without a lock", reason)
        self.session.lock_token = None
        self.state = LockState.LOCK_FAILED
        return None

    def release(self) -> None:
        """
        Sends UNLOCK if a token is held.  Whatever the outcome, the
        token is cleared afterwards.
        """
        token = self.session.lock_token
        if token is None:
            self.state = LockState.UNLOCKED
            return
        self.state = LockState.UNLOCKING
        try:
            response = self.session.request("UNLOCK", headers={"Lock-Token": token})
            if not response.ok:
                log.warning(
                    "unlocking failed: %s",
                    error.UnlockError(
                        url=str(self.session.url),
                        reason=response.reason,
                        method="UNLOCK",
                        status=response.status,
                    ),
                )
        except (requests.exceptions.RequestException, error.DAVError):
            log.warning("unlocking %s failed", self.session.url, exc_info=True)
        finally:
            self.session.lock_token = None
            self.state = LockState.UNLOCKED

    def forget(self) -> None:
        """Drops the token without talking to the server"""
        self.session.lock_token = None
        self.state = LockState.UNLOCKED

    @contextmanager
    def lock_if_possible(self, require_existing: bool = False) -> Iterator[None]:
        self.session.probe_once()
        if not self.session.supports_locking():
            yield
            return
        self.acquire(require_existing)
        try:
            yield
        finally:
            self.release()

    @contextmanager
    def lock_if_possible_for_delete(
        self, require_existing: bool = False
    ) -> Iterator[None]:
        self.session.probe_once()
        if not self.session.supports_locking():
            yield
            return
        self.acquire(require_existing)
        try:
            yield
        except BaseException:
            self.release()
            raise
        ## a successful DELETE has destroyed the lock on the server
        self.forget()
