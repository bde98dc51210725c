"""
Lock scopes: a lock is taken only when the server advertises LOCK
and UNLOCK, failure to lock is not fatal, and the lock is released on
every way out of the block except after a successful DELETE.
"""
import pytest
import requests
from fixture_helpers import FakeServer
from fixture_helpers import LOCKING_OPTIONS
from fixture_helpers import NONLOCKING_OPTIONS
from fixture_helpers import patched
from lxml import etree

from davsession import DAVSession
from davsession.lib import error
from davsession.lock import LOCK_TIMEOUT
from davsession.lock import lockinfo
from davsession.lock import LockState

URL = "http://dav.example.com/files/a.txt"
TOKEN = "<opaquelocktoken:e71d4fae-5dec-22d6-fea5-00a0c91e6be4>"


def locking_server():
    return (
        FakeServer()
        .add("OPTIONS", headers=LOCKING_OPTIONS)
        .add("LOCK", 200, {"Lock-Token": TOKEN})
        .add("UNLOCK", 204)
    )


class TestLockScope:
    def test_lock_and_release(self):
        server = locking_server()
        with patched(server):
            session = DAVSession(URL)
            with session.lock_if_possible():
                assert session.lock_token == TOKEN
                assert session.locks.locked
                session.put(b"x")
            assert session.lock_token is None
            assert session.locks.state == LockState.UNLOCKED
        assert server.methods() == ["OPTIONS", "LOCK", "PUT", "UNLOCK"]
        assert server.calls_for("PUT")[0].headers["If"] == "(%s)" % TOKEN
        assert server.calls_for("UNLOCK")[0].headers["Lock-Token"] == TOKEN

    def test_lock_request(self):
        server = locking_server()
        with patched(server):
            with DAVSession(URL, depth="infinity", lock_owner="tester").lock_if_possible():
                pass
        call = server.calls_for("LOCK")[0]
        assert call.headers["Depth"] == "0"
        assert call.headers["Timeout"] == LOCK_TIMEOUT
        assert call.headers["Content-Type"].startswith("application/xml")
        assert "If-Match" not in call.headers
        body = etree.XML(call.body)
        assert body.tag == "{DAV:}lockinfo"
        assert body.find("{DAV:}owner").text == "tester"
        assert body.find("{DAV:}lockscope/{DAV:}exclusive") is not None
        assert body.find("{DAV:}locktype/{DAV:}write") is not None

    def test_require_existing(self):
        server = locking_server()
        with patched(server):
            with DAVSession(URL).lock_if_possible(require_existing=True):
                pass
        assert server.calls_for("LOCK")[0].headers["If-Match"] == "*"

    def test_released_on_error(self):
        server = locking_server().add("PUT", 500)
        with patched(server):
            session = DAVSession(URL)
            with pytest.raises(error.PutError):
                with session.lock_if_possible():
                    session.put(b"x")
            assert session.lock_token is None
        assert server.methods() == ["OPTIONS", "LOCK", "PUT", "UNLOCK"]

    def test_released_on_transport_error(self):
        server = locking_server().raise_on(
            "PUT", requests.exceptions.ConnectionError("reset")
        )
        with patched(server):
            session = DAVSession(URL)
            with pytest.raises(requests.exceptions.ConnectionError):
                with session.lock_if_possible():
                    session.put(b"x")
            assert session.lock_token is None
        assert server.methods()[-1] == "UNLOCK"

    def test_lock_refused_is_not_fatal(self, caplog):
        server = FakeServer().add("OPTIONS", headers=LOCKING_OPTIONS).add("LOCK", 423)
        with patched(server):
            session = DAVSession(URL)
            with session.lock_if_possible():
                assert session.lock_token is None
                assert session.locks.state == LockState.LOCK_FAILED
                session.put(b"x")
        assert server.methods() == ["OPTIONS", "LOCK", "PUT"]
        assert "If" not in server.calls_for("PUT")[0].headers
        assert "LockError: LOCK" in caplog.text

    @pytest.mark.parametrize("credentials", [{}, {"username": "me", "password": "pw"}])
    def test_lock_unauthorized_is_not_fatal(self, credentials, caplog):
        server = FakeServer().add("OPTIONS", headers=LOCKING_OPTIONS).add("LOCK", 401)
        with patched(server):
            session = DAVSession(URL, **credentials)
            with session.lock_if_possible(require_existing=True):
                assert session.lock_token is None
                assert session.locks.state == LockState.LOCK_FAILED
                session.put(b"x")
            assert session.lock_token is None
        assert server.methods()[-1] == "PUT"
        assert "UNLOCK" not in server.methods()
        assert "continuing without a lock" in caplog.text

    def test_lock_transport_error_propagates(self):
        server = (
            FakeServer()
            .add("OPTIONS", headers=LOCKING_OPTIONS)
            .raise_on("LOCK", requests.exceptions.ConnectionError("reset"))
        )
        with patched(server):
            session = DAVSession(URL)
            with pytest.raises(requests.exceptions.ConnectionError):
                with session.lock_if_possible():
                    session.put(b"x")
            assert session.lock_token is None
            assert session.locks.state == LockState.UNLOCKED
        assert server.methods() == ["OPTIONS", "LOCK"]

    def test_lock_without_token_is_not_a_lock(self):
        server = FakeServer().add("OPTIONS", headers=LOCKING_OPTIONS).add("LOCK", 200)
        with patched(server):
            session = DAVSession(URL)
            with session.lock_if_possible():
                assert session.lock_token is None
        assert "UNLOCK" not in server.methods()

    def test_no_locking_support(self):
        server = FakeServer().add("OPTIONS", headers=NONLOCKING_OPTIONS)
        with patched(server):
            session = DAVSession(URL)
            with session.lock_if_possible(require_existing=True):
                session.get()
        assert server.methods() == ["OPTIONS", "GET"]

    def test_unlock_failure_is_logged_not_raised(self, caplog):
        server = locking_server()
        server.routes[("UNLOCK", None)] = [(500, {}, b"")]
        with patched(server):
            session = DAVSession(URL)
            with session.lock_if_possible():
                pass
            assert session.lock_token is None
        assert "unlocking failed: UnlockError" in caplog.text

    def test_unlock_transport_failure_clears_token(self):
        server = locking_server()
        server.routes[("UNLOCK", None)] = [requests.exceptions.Timeout("slow")]
        with patched(server):
            session = DAVSession(URL)
            with session.lock_if_possible():
                pass
            assert session.lock_token is None


class TestLockForDelete:
    def test_successful_delete_sends_no_unlock(self):
        server = locking_server().add("DELETE", 204)
        with patched(server):
            session = DAVSession(URL)
            with session.lock_if_possible_for_delete():
                session.delete()
            assert session.lock_token is None
        assert server.methods() == ["OPTIONS", "LOCK", "DELETE"]

    def test_failed_delete_is_unlocked(self):
        server = locking_server().add("DELETE", 403)
        with patched(server):
            session = DAVSession(URL)
            with pytest.raises(error.AuthorizationError):
                with session.lock_if_possible_for_delete():
                    session.delete()
            assert session.lock_token is None
        assert server.methods() == ["OPTIONS", "LOCK", "DELETE", "UNLOCK"]

    @pytest.mark.parametrize("credentials", [{}, {"username": "me", "password": "pw"}])
    def test_lock_unauthorized_still_deletes(self, credentials):
        server = (
            FakeServer()
            .add("OPTIONS", headers=LOCKING_OPTIONS)
            .add("LOCK", 401)
            .add("DELETE", 204)
        )
        with patched(server):
            session = DAVSession(URL, **credentials)
            with session.lock_if_possible_for_delete():
                session.delete()
            assert session.lock_token is None
        assert server.methods()[-1] == "DELETE"
        assert "UNLOCK" not in server.methods()

    def test_no_locking_support(self):
        server = FakeServer().add("OPTIONS", headers=NONLOCKING_OPTIONS)
        with patched(server):
            session = DAVSession(URL)
            with session.lock_if_possible_for_delete():
                session.delete()
        assert server.methods() == ["OPTIONS", "DELETE"]


def test_lockinfo():
    body = etree.XML(lockinfo("someone").tostring())
    assert [x.tag for x in body] == [
        "{DAV:}lockscope",
        "{DAV:}locktype",
        "{DAV:}owner",
    ]
