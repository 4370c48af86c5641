"""
Parsers for BGG XML API2 responses.

BGG payloads are not uniform: optional elements come and go between items,
and a single ``thing`` response can mix base games with expansions and
accessories. Every extractor here returns None for a missing element or
attribute instead of raising, so one odd item never spoils the rest of the
payload.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import List, Optional, Union

from ..config import BASE_GAME_TYPE
from ..errors import UpstreamUnavailable
from ..models import GameRecord, GameSummary

logger = logging.getLogger(__name__)

XMLInput = Union[str, bytes]

_INTEGER = re.compile(r"-?[0-9]+")
# Values outside the 64-bit range the games table can store are treated as absent
MAX_INT = 2 ** 63 - 1
MIN_INT = -(2 ** 63)


def parse_xml(xml_content: XMLInput) -> ET.Element:
    """
    Parse a raw BGG response into its root element.

    Raises:
        UpstreamUnavailable: if the body is not well-formed XML
    """
    try:
        return ET.fromstring(xml_content)
    except ET.ParseError as e:
        raise UpstreamUnavailable(f"BGG returned malformed XML: {e}") from e


def extract_text(element: Optional[ET.Element]) -> Optional[str]:
    """Stripped text of an element, or None if missing or blank."""
    if element is None or element.text is None:
        return None
    text = element.text.strip()
    return text or None


def extract_value(element: Optional[ET.Element], attribute: str = "value") -> Optional[str]:
    """Stripped attribute of an element, or None if missing or blank."""
    if element is None:
        return None
    value = element.get(attribute)
    if value is None:
        return None
    value = value.strip()
    return value or None


def to_int(raw: Optional[str]) -> Optional[int]:
    """Parse a plain decimal integer, treating anything else as absent."""
    if raw is None or not _INTEGER.fullmatch(raw):
        return None
    value = int(raw)
    if not MIN_INT <= value <= MAX_INT:
        return None
    return value


def extract_int(element: Optional[ET.Element]) -> Optional[int]:
    """
    Integer carried by a BGG field element.

    BGG puts numbers in the ``value`` attribute (``<minplayers value="3"/>``);
    element text is used when the attribute is missing.
    """
    raw = extract_value(element)
    if raw is None:
        raw = extract_text(element)
    return to_int(raw)


def _item_name(item: ET.Element) -> Optional[str]:
    # Search hits carry a single name, usually typed primary
    name = extract_value(item.find('name[@type="primary"]'))
    if name is None:
        name = extract_value(item.find('name'))
    return name


def parse_search_results(xml_content: XMLInput) -> List[GameSummary]:
    """
    Extract (id, name) pairs from a BGG ``search`` response.

    Args:
        xml_content: Raw response body

    Returns:
        Summaries in upstream order; items without an id or a name are dropped
    """
    root = parse_xml(xml_content)
    summaries = []
    for item in root.iter('item'):
        upstream_id = to_int(extract_value(item, 'id'))
        name = _item_name(item)
        if upstream_id is None or name is None:
            logger.debug(f"Dropping search item without id or name: {ET.tostring(item)[:200]!r}")
            continue
        summaries.append(GameSummary(upstream_id=upstream_id, name=name))
    return summaries


def parse_game_record(item: ET.Element) -> Optional[GameRecord]:
    """
    Build a GameRecord from one ``thing`` item element.

    Returns:
        The record, or None when the id or the primary name is missing
    """
    upstream_id = to_int(extract_value(item, 'id'))
    # Alternate names are ignored; only the primary one is authoritative
    name = extract_value(item.find('name[@type="primary"]'))
    if upstream_id is None or name is None:
        return None

    return GameRecord(
        upstream_id=upstream_id,
        name=name,
        year_published=extract_int(item.find('yearpublished')),
        min_players=extract_int(item.find('minplayers')),
        max_players=extract_int(item.find('maxplayers')),
        playing_time_minutes=extract_int(item.find('playingtime')),
        image_url=extract_text(item.find('image')),
        description=extract_text(item.find('description')),
    )


def parse_game_details(xml_content: XMLInput) -> List[GameRecord]:
    """
    Extract base-game records from a BGG ``thing`` response.

    Expansions, accessories and other non base-game items are skipped.

    Args:
        xml_content: Raw response body

    Returns:
        Records in upstream order
    """
    root = parse_xml(xml_content)
    records = []
    for item in root.iter('item'):
        if item.get('type') != BASE_GAME_TYPE:
            continue
        record = parse_game_record(item)
        if record is None:
            logger.warning(f"Skipping BGG item {item.get('id')!r}: missing id or primary name")
            continue
        records.append(record)
    return records
