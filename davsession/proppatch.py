"""
Turns the reply of an allprop PROPFIND into a PROPPATCH request body,
so the properties of one resource can be copied onto another.

Only ``set`` instructions are generated.  Properties that exist on the
target but not on the source are left alone, there is no diffing
against the target.
"""
import copy
from typing import FrozenSet
from typing import List

from lxml import etree
from lxml.etree import _Element

from davsession.elements import dav

## Properties maintained by the server itself.  Setting them is either
## forbidden or meaningless, so they are never copied.
LIVE_PROPERTIES: FrozenSet[str] = frozenset(
    (
        dav.CreationDate.tag,
        dav.DisplayName.tag,
        dav.GetContentLength.tag,
        dav.GetContentType.tag,
        dav.GetEtag.tag,
        dav.GetLastModified.tag,
        dav.LockDiscovery.tag,
        dav.ResourceType.tag,
        dav.SupportedLock.tag,
    )
)

_PROP_PATH = "%s/%s/%s/*" % (dav.Response.tag, dav.PropStat.tag, dav.Prop.tag)


def dead_properties(tree: _Element) -> List[_Element]:
    """
    The property elements found at multistatus/response/propstat/prop/*,
    in document order, minus the live properties.
    """
    if tree is None:
        return []
    return [
        prop
        for prop in tree.iterfind(_PROP_PATH)
        if isinstance(prop.tag, str) and prop.tag not in LIVE_PROPERTIES
    ]


def props_to_patch(tree: _Element) -> _Element:
    """
    Builds the propertyupdate document for ``tree``, a PROPFIND
    multistatus.  With nothing left to copy the document is an empty
    ``<D:propertyupdate/>``.
    """
    props = dead_properties(tree)
    if not props:
        return dav.PropertyUpdate().xmlelement()
    root = (dav.PropertyUpdate() + (dav.Set() + dav.Prop())).xmlelement()
    prop_container = root[0][0]
    for prop in props:
        prop_container.append(copy.deepcopy(prop))
    return root


def patch_body(tree: _Element) -> bytes:
    return etree.tostring(
        props_to_patch(tree), encoding="utf-8", xml_declaration=True
    )
