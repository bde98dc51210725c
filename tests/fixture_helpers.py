"""
A recording stand-in for ``requests.Session.request``.  None of the
tests talk to a real server.

Usage::

    server = FakeServer()
    server.add("OPTIONS", headers={"Allow": "GET, LOCK, UNLOCK"})
    server.add("LOCK", headers={"Lock-Token": "<opaquelocktoken:1>"})
    with mock.patch("davsession.session.requests.Session.request", side_effect=server):
        ...
    assert server.methods() == ["OPTIONS", "LOCK", ...]
"""
from collections import namedtuple
from unittest import mock

Call = namedtuple("Call", ["method", "url", "headers", "body", "auth", "kwargs"])

REASONS = {
    200: "OK",
    201: "Created",
    204: "No Content",
    207: "Multi-Status",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    412: "Precondition Failed",
    423: "Locked",
    500: "Internal Server Error",
}


def MockedResponse(status=200, headers=None, content=b""):
    resp = mock.MagicMock()
    resp.status_code = status
    resp.reason = REASONS.get(status, "")
    resp.headers = headers or {}
    if isinstance(content, str):
        content = content.encode("utf-8")
    resp.content = content
    return resp


class FakeServer:
    """
    Answers by method, or by (method, url) when a url was given to
    add().  Several replies added for the same key are handed out in
    order, the last one is repeated.  Unknown requests get 200 with an
    empty body.
    """

    def __init__(self):
        self.calls = []
        self.routes = {}

    def add(self, method, status=200, headers=None, content=b"", url=None):
        self.routes.setdefault((method, url), []).append(
            (status, headers or {}, content)
        )
        return self

    def raise_on(self, method, exception, url=None):
        self.routes.setdefault((method, url), []).append(exception)
        return self

    def __call__(self, method, url, data=None, headers=None, auth=None, **kwargs):
        self.calls.append(Call(method, url, dict(headers or {}), data, auth, kwargs))
        queue = self.routes.get((method, url)) or self.routes.get((method, None))
        if not queue:
            return MockedResponse()
        reply = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(reply, BaseException):
            raise reply
        status, headers, content = reply
        return MockedResponse(status, headers, content)

    def methods(self):
        return [c.method for c in self.calls]

    def calls_for(self, method):
        return [c for c in self.calls if c.method == method]


def patched(server):
    return mock.patch("davsession.session.requests.Session.request", side_effect=server)


LOCKING_OPTIONS = {
    "Allow": "OPTIONS, GET, HEAD, PUT, DELETE, PROPFIND, PROPPATCH, MKCOL, MOVE, COPY, LOCK, UNLOCK",
    "DAV": "1, 2, calendar-access",
}
NONLOCKING_OPTIONS = {
    "Allow": "OPTIONS, GET, HEAD, PUT, DELETE, PROPFIND, PROPPATCH, MKCOL, MOVE",
    "DAV": "1",
}

PROPFIND_REPLY = b"""<?xml version="1.0" encoding="utf-8"?>
<D:multistatus xmlns:D="DAV:" xmlns:Z="http://example.com/ns/">
  <D:response>
    <D:href>/files/a.txt</D:href>
    <D:propstat>
      <D:prop>
        <D:creationdate>2014-01-01T00:00:00Z</D:creationdate>
        <D:displayname>a.txt</D:displayname>
        <Z:author>Jane</Z:author>
        <D:getcontentlength>5</D:getcontentlength>
        <D:getcontenttype>text/plain</D:getcontenttype>
        <D:getetag>"abc"</D:getetag>
        <Z:color>blue</Z:color>
        <D:getlastmodified>Wed, 01 Jan 2014 00:00:00 GMT</D:getlastmodified>
        <D:lockdiscovery/>
        <D:resourcetype/>
        <D:supportedlock/>
        <Z:tags><Z:tag>one</Z:tag><Z:tag>two</Z:tag></Z:tags>
      </D:prop>
      <D:status>HTTP/1.1 200 OK</D:status>
    </D:propstat>
  </D:response>
</D:multistatus>"""
