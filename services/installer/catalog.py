"""Parse Maven ``maven-metadata.xml`` documents into version listings."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET

from services.installer.models import CatalogParseError, Version, VersionChannel


_LOGGER = logging.getLogger(__name__)

__all__ = ["parse_version_metadata"]


def _qname(root: ET.Element, tag: str) -> str:
    match = re.match(r"\{(.+)\}", root.tag or "")
    xmlns = match.group(1) if match else None
    return f"{{{xmlns}}}{tag}" if xmlns else tag


def parse_version_metadata(document: bytes | str, channel: VersionChannel) -> list[Version]:
    """Return one :class:`Version` per ``versioning/versions/version`` entry.

    Only the versions list is consumed; ``groupId``, ``artifactId`` and the
    ``latest``/``release`` pointers are ignored. The channel is supplied by the
    caller because release and snapshot listings live at separate endpoints.
    Entries keep document order; sorting is the caller's concern.

    Raises
    ------
    CatalogParseError
        When ``document`` is not well-formed XML.
    """

    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        raise CatalogParseError(f"failed to parse metadata XML: {exc}") from exc

    versions_el = root.find(f"{_qname(root, 'versioning')}/{_qname(root, 'versions')}")
    if versions_el is None:
        _LOGGER.debug("Metadata document for %s channel has no versions list", channel.value)
        return []

    versions: list[Version] = []
    for element in versions_el.findall(_qname(root, "version")):
        identifier = (element.text or "").strip()
        if not identifier:
            continue
        versions.append(Version(identifier=identifier, channel=channel))
    return versions
