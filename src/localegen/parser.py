import logging
from pathlib import Path

from lxml import etree

from localegen.classes import (
    PLURAL_CATEGORIES,
    Catalog,
    PluralString,
    ResourceEntry,
    StringArray,
)
from localegen.detector import classify, unescape
from localegen.errors import CatalogParseError

logger = logging.getLogger(__name__)


def _text(node: etree._Element) -> str:
    # XPath string-value: descendant text and CDATA, no comments
    return unescape(str(node.xpath("string()")))


def _parse_plurals(name: str, node: etree._Element, path: Path) -> PluralString:
    items: dict[str, str] = {}
    for item in node.iterchildren("item"):
        quantity = item.get("quantity")
        if quantity is None:
            logger.debug(f"{path}: plurals {name} has an item without quantity")
            continue
        if quantity not in PLURAL_CATEGORIES:
            logger.warning(f"{path}: plurals {name} has unknown quantity {quantity!r}")
            continue
        items[quantity] = _text(item)
    return PluralString(name, items)


def _parse_array(name: str, node: etree._Element) -> StringArray:
    return StringArray(name, tuple(_text(item) for item in node.iterchildren("item")))


def parse_catalog(path: Path) -> Catalog:
    """Parse one strings.xml file into a Catalog.

    Raises CatalogParseError when the file cannot be read or is not well-formed XML.
    """
    logger.debug(f"Parsing {path}")
    xml_parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        tree = etree.parse(str(path), xml_parser)
    except (OSError, etree.XMLSyntaxError) as ex:
        logger.error(f"Error parsing {path}: {ex}")
        raise CatalogParseError(path, ex) from ex

    entries: dict[str, ResourceEntry] = {}
    for node in tree.getroot().iterchildren("string", "plurals", "string-array"):
        name = node.get("name")
        if not name:
            logger.debug(f"{path}: skipping <{node.tag}> without a name")
            continue
        if node.tag == "string":
            entry = classify(name, _text(node))
        elif node.tag == "plurals":
            entry = _parse_plurals(name, node, path)
        else:
            entry = _parse_array(name, node)
        # last definition wins, first position is kept
        entries[name] = entry

    logger.debug(f"Parsed {len(entries)} entries from {path}")
    return Catalog(path, tuple(entries.values()))
