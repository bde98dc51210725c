"""
The ``DAVResponse`` class wraps the data returned from the server.
Most callers only look at ``status``, ``headers`` and ``content``;
XML bodies (multistatus replies to PROPFIND and REPORT) are parsed
into ``tree`` the first time it is accessed.
"""
import logging
from typing import Dict
from typing import List
from typing import Optional
from typing import Tuple
from urllib.parse import unquote

import icalendar
from lxml import etree
from lxml.etree import _Element
from requests.models import Response
from requests.structures import CaseInsensitiveDict

from davsession.elements import cdav
from davsession.elements import dav
from davsession.lib import error
from davsession.lib.python_utilities import to_normal_str
from davsession.lib.url import URL

log = logging.getLogger("davsession")

XML_CONTENT_TYPES = ("text/xml", "application/xml")


class DAVResponse:
    """
    This class is a response from a DAV request.  It is instantiated
    by the DAVSession class.  The raw body is kept untouched in
    ``content``, so that GET can hand over the exact bytes the server
    delivered.
    """

    reason: str = ""
    headers: CaseInsensitiveDict = None
    status: int = 0
    content: bytes = b""
    huge_tree: bool = False

    def __init__(self, response: Response, huge_tree: bool = False) -> None:
        self.headers = CaseInsensitiveDict(response.headers)
        self.status = response.status_code
        self.content = response.content or b""
        self.huge_tree = huge_tree
        ## incidents with a response without a reason have been observed
        self.reason = getattr(response, "reason", None) or ""
        self._tree: Optional[_Element] = None
        self._parsed = False
        log.debug("response headers: " + str(self.headers))
        log.debug("response status: %s %s" % (self.status, self.reason))

    def __repr__(self) -> str:
        return "DAVResponse(%s %s)" % (self.status, self.reason)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("Content-Type")

    @property
    def raw(self) -> str:
        return to_normal_str(self.content)

    @property
    def tree(self) -> Optional[_Element]:
        """
        The body parsed as XML, or None for an empty body.  We cannot
        trust the content type given by all servers, so the body is
        parsed whatever the content type says.  If it fails and the
        content type promised XML, the parse error is raised.
        """
        if self._parsed:
            return self._tree
        self._parsed = True
        content_type = self.content_type or ""
        expect_xml = any(content_type.startswith(x) for x in XML_CONTENT_TYPES)
        if not self.content:
            log.debug("No content delivered")
            return None
        try:
            self._tree = etree.XML(
                self.content,
                parser=etree.XMLParser(remove_blank_text=True, huge_tree=self.huge_tree),
            )
        except etree.XMLSyntaxError:
            if expect_xml:
                raise
            log.debug(
                "Expected some valid XML from the server, but got this: \n"
                + self.raw,
                exc_info=True,
            )
        else:
            if log.isEnabledFor(logging.DEBUG):
                log.debug(etree.tostring(self._tree, pretty_print=True))
        return self._tree

    def validate_status(self, status: str) -> None:
        """
        status is a string like "HTTP/1.1 404 Not Found".  200, 201,
        207 and 404 are considered good statuses within a multistatus.
        """
        if (
            " 200 " not in status
            and " 201 " not in status
            and " 207 " not in status
            and " 404 " not in status
        ):
            raise error.ResponseError(reason=status)

    def _strip_to_multistatus(self) -> List[_Element]:
        """
        Returns the list of <response> elements.  Some servers wrap the
        multistatus in an extra element, and some deliver a single
        bare <response>.
        """
        tree = self.tree
        if tree is None:
            return []
        if tree.tag == dav.MultiStatus.tag:
            return list(tree)
        multistatus = tree.find(dav.MultiStatus.tag)
        if multistatus is not None:
            return list(multistatus)
        return [tree]

    def _parse_response(self, response: _Element) -> Tuple[str, List[_Element]]:
        href: Optional[str] = None
        propstats: List[_Element] = []
        for elem in response:
            if elem.tag == dav.Status.tag:
                self.validate_status(elem.text or "")
            elif elem.tag == dav.Href.tag:
                href = unquote(elem.text or "")
            elif elem.tag == dav.PropStat.tag:
                propstats.append(elem)
            else:
                error.weirdness("unexpected element found in response", elem)
        if href is None:
            raise error.ResponseError(reason="response element without href")
        if ":" in href:
            href = unquote(URL(href).path)
        return href, propstats

    def find_objects_and_props(self) -> Dict[str, Dict[str, _Element]]:
        """Check the response from the server, find hrefs and props from
        it and check the statuses delivered.

        Returns a dict {href: {proptag: prop_element}}.  Props reported
        with a 404 status inside their propstat are left out.
        """
        objects: Dict[str, Dict[str, _Element]] = {}
        for r in self._strip_to_multistatus():
            if r.tag != dav.Response.tag:
                error.weirdness("unexpected element in multistatus", r)
                continue
            href, propstats = self._parse_response(r)
            props = objects.setdefault(href, {})

            ## The properties may be delivered either in one
            ## propstat with multiple props or in multiple
            ## propstat
            for propstat in propstats:
                status = propstat.find(dav.Status.tag)
                if status is not None and status.text:
                    self.validate_status(status.text)
                    if " 404 " in status.text:
                        continue
                for prop in propstat.iterfind(dav.Prop.tag):
                    for theprop in prop:
                        props[theprop.tag] = theprop
        return objects

    def calendar_objects(self) -> Dict[str, Tuple[Optional[str], icalendar.Calendar]]:
        """
        For a calendar-query REPORT reply, returns
        {href: (etag, icalendar.Calendar)}.  Responses without
        calendar data are skipped.
        """
        ret = {}
        for href, props in self.find_objects_and_props().items():
            data = props.get(cdav.CalendarData.tag)
            if data is None or not data.text:
                continue
            etag = props.get(dav.GetEtag.tag)
            ret[href] = (
                etag.text if etag is not None else None,
                icalendar.Calendar.from_ical(data.text),
            )
        return ret
