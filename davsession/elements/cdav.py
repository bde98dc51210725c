#!/usr/bin/env python
from typing import ClassVar
from typing import Dict

from .base import BaseElement
from .base import NamedBaseElement
from davsession.lib.namespace import ns
from davsession.lib.namespace import nsmap


class CalDAVElement(BaseElement):
    nsmap: ClassVar[Dict[str, str]] = nsmap


# Operations
class CalendarQuery(CalDAVElement):
    tag: ClassVar[str] = ns("C", "calendar-query")


# Filters
class Filter(CalDAVElement):
    tag: ClassVar[str] = ns("C", "filter")


class CompFilter(NamedBaseElement):
    tag: ClassVar[str] = ns("C", "comp-filter")
    nsmap: ClassVar[Dict[str, str]] = nsmap


# Properties
class CalendarData(CalDAVElement):
    tag: ClassVar[str] = ns("C", "calendar-data")
