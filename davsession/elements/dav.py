#!/usr/bin/env python
from typing import ClassVar

from .base import BaseElement
from .base import ValuedBaseElement
from davsession.lib.namespace import ns


# Operations
class Propfind(BaseElement):
    tag: ClassVar[str] = ns("D", "propfind")


class PropertyUpdate(BaseElement):
    tag: ClassVar[str] = ns("D", "propertyupdate")


class LockInfo(BaseElement):
    tag: ClassVar[str] = ns("D", "lockinfo")


# Propfind / proppatch building blocks
class Allprop(BaseElement):
    tag: ClassVar[str] = ns("D", "allprop")


class Prop(BaseElement):
    tag: ClassVar[str] = ns("D", "prop")


class Set(BaseElement):
    tag: ClassVar[str] = ns("D", "set")


# Lock building blocks
class LockScope(BaseElement):
    tag: ClassVar[str] = ns("D", "lockscope")


class Exclusive(BaseElement):
    tag: ClassVar[str] = ns("D", "exclusive")


class LockType(BaseElement):
    tag: ClassVar[str] = ns("D", "locktype")


class Write(BaseElement):
    tag: ClassVar[str] = ns("D", "write")


class Owner(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "owner")


# Multistatus responses
class MultiStatus(BaseElement):
    tag: ClassVar[str] = ns("D", "multistatus")


class Response(BaseElement):
    tag: ClassVar[str] = ns("D", "response")


class Href(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "href")


class PropStat(BaseElement):
    tag: ClassVar[str] = ns("D", "propstat")


class Status(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "status")


# Live properties, computed or protected by the server
class CreationDate(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "creationdate")


class DisplayName(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "displayname")


class GetContentLength(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getcontentlength")


class GetContentType(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getcontenttype")


class GetEtag(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getetag")


class GetLastModified(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getlastmodified")


class LockDiscovery(BaseElement):
    tag: ClassVar[str] = ns("D", "lockdiscovery")


class ResourceType(BaseElement):
    tag: ClassVar[str] = ns("D", "resourcetype")


class SupportedLock(BaseElement):
    tag: ClassVar[str] = ns("D", "supportedlock")
