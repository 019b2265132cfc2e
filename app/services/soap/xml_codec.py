import logging
from typing import Any, Dict

from lxml import etree

from app.models.message.tree import ATTRIBUTE_PREFIX, TEXT_KEY, RequestTree

logger = logging.getLogger(__name__)

NAMESPACES = {
    "SOAP-ENV": "http://schemas.xmlsoap.org/soap/envelope/",
    "ns1": "http://www.egem.nl/StUF/StUF0301",
    "ns2": "http://www.egem.nl/StUF/sector/bg/0310",
}


class XmlDecodeError(ValueError):
    pass


def _qualified_name(element: Any) -> str:
    local_name = etree.QName(element).localname
    if element.prefix:
        return f"{element.prefix}:{local_name}"
    return str(local_name)


def _element_to_value(element: Any) -> Any:
    children = [child for child in element if isinstance(child.tag, str)]
    attributes = {
        f"{ATTRIBUTE_PREFIX}{etree.QName(name).localname}": value
        for name, value in element.attrib.items()
    }
    content = (element.text or "").strip()

    if not children and not attributes:
        return content

    value: Dict[str, Any] = dict(attributes)
    for child in children:
        name = _qualified_name(child)
        child_value = _element_to_value(child)
        if name not in value:
            value[name] = child_value
        elif isinstance(value[name], list):
            value[name].append(child_value)
        else:
            value[name] = [value[name], child_value]

    if content:
        value[TEXT_KEY] = content
    return value


def decode(xml: bytes | str) -> RequestTree:
    """
    Decodes a SOAP message into a tree keyed by prefixed tag names. The root element itself is
    not part of the tree, so a SOAP message decodes to ``{"SOAP-ENV:Body": {...}}``.

    Repeated elements become lists, attributes are keyed ``@name`` and the text of an element
    that also has attributes or children is keyed ``#``.
    """
    if isinstance(xml, str):
        xml = xml.encode("utf-8")

    parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)
    try:
        root = etree.fromstring(xml, parser=parser)
    except etree.XMLSyntaxError as e:
        logger.warning(f"Could not parse xml body: {e}")
        raise XmlDecodeError(str(e)) from e

    value = _element_to_value(root)
    return value if isinstance(value, dict) else {}


def _make_element(parent: Any, name: str) -> Any:
    prefix, _, local_name = name.rpartition(":")
    if prefix in NAMESPACES:
        return etree.SubElement(parent, f"{{{NAMESPACES[prefix]}}}{local_name}")
    return etree.SubElement(parent, local_name)


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _fill(element: Any, value: Any) -> None:
    if not isinstance(value, dict):
        element.text = _scalar(value)
        return

    for key, child in value.items():
        if child is None or child == "":
            continue
        if key == TEXT_KEY:
            element.text = _scalar(child)
        elif key.startswith(ATTRIBUTE_PREFIX):
            element.set(key[len(ATTRIBUTE_PREFIX):], _scalar(child))
        elif isinstance(child, list):
            for item in child:
                if item is None or item == "":
                    continue
                _fill(_make_element(element, key), item)
        else:
            _fill(_make_element(element, key), child)


def encode(content: Dict[str, Any], root_name: str = "SOAP-ENV:Envelope") -> bytes:
    """
    Encodes a tree back to xml, leaving out empty values.
    """
    prefix, _, local_name = root_name.rpartition(":")
    tag = f"{{{NAMESPACES[prefix]}}}{local_name}" if prefix in NAMESPACES else local_name
    root = etree.Element(tag, nsmap=NAMESPACES)
    _fill(root, content)

    return bytes(etree.tostring(root, xml_declaration=True, encoding="utf-8"))
