"""OSGi metatype descriptor construction.

The XML helpers mirror the small document API the builder needs (create a
document, add elements and attributes, serialize) on top of ElementTree.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any

from osgijar.jar.configuration import ConfigurationSection, FieldDescription
from osgijar.project.model import PackageInfo

METATYPE_NAMESPACE = "http://www.osgi.org/xmlns/metatype/v1.1.0"
METATYPE_ROOT_TAG = "metatype:MetaData"

# Unbounded vector cardinality for repeatable fields
REPEATABLE_CARDINALITY = "-2147483648"

_METATYPE_TYPES = {
    "boolean": "Boolean",
    "float": "Double",
    "number": "Integer",
    "password": "Password",
    "string": "String",
}


def _xml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_xml_value(item) for item in value)
    return str(value)


def create_metatype(identifier: str, name: str) -> ET.Element:
    """Create a metatype document with one OCD and its designate."""
    root = ET.Element(METATYPE_ROOT_TAG, {"xmlns:metatype": METATYPE_NAMESPACE})
    ET.SubElement(root, "OCD", {"id": identifier, "name": name})
    designate = ET.SubElement(root, "Designate", {"pid": identifier})
    ET.SubElement(designate, "Object", {"ocdref": identifier})
    return root


def add_metatype_localization(metatype: ET.Element, localization: str) -> None:
    """Link the metatype to a resource bundle base path."""
    metatype.set("localization", localization)


def add_metatype_attr(metatype: ET.Element, field_id: str, desc: FieldDescription) -> ET.Element:
    """Append an ``AD`` node describing ``field_id`` to the OCD."""
    ocd = metatype.find("OCD")
    if ocd is None:
        raise ValueError("Metatype document has no OCD element")

    attributes = {
        "id": field_id,
        "name": desc.name or field_id,
        "type": _METATYPE_TYPES.get(desc.type or "string", "String"),
    }
    if desc.description:
        attributes["description"] = desc.description
    if desc.required is not None:
        attributes["required"] = _xml_value(desc.required)
    if desc.default is not None:
        attributes["default"] = _xml_value(desc.default)
    if desc.repeatable:
        attributes["cardinality"] = REPEATABLE_CARDINALITY

    ad = ET.SubElement(ocd, "AD", attributes)

    for value, label in (desc.options or {}).items():
        ET.SubElement(ad, "Option", {"label": _xml_value(label), "value": value})

    return ad


def format_metatype(metatype: ET.Element) -> str:
    """Serialize the document as indented UTF-8 XML text."""
    tree = ET.ElementTree(metatype)
    ET.indent(tree, space="  ", level=0)
    body = ET.tostring(metatype, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'


@dataclass(slots=True, frozen=True)
class MetatypeFiles:
    """Serialized metatype XML plus its companion feature JSON."""

    xml: str
    json: str


def metatype_display_name(
    package: PackageInfo,
    section: ConfigurationSection,
    localization: str | None,
) -> str:
    """Pick the OCD display name.

    Precedence: explicit section name, then the package name when the labels
    are localized, then the package description, then the package name.
    """
    if section.name:
        return section.name
    if localization:
        return package.name
    return package.description or package.name


def build_metatype(
    package: PackageInfo,
    section: ConfigurationSection,
    localization: str | None = None,
) -> MetatypeFiles:
    """Build the metatype descriptor for the system configuration.

    Args:
        package: Package identity (the name is the OCD id and pid)
        section: System configuration descriptor
        localization: Resource bundle base path (``content/Language``), if any

    Returns:
        MetatypeFiles with the XML document and ``features/metatype.json``
    """
    metatype = create_metatype(package.name, metatype_display_name(package, section, localization))

    if localization:
        add_metatype_localization(metatype, localization)

    for field_id, desc in section.fields.items():
        add_metatype_attr(metatype, field_id, desc)

    metatype_json: dict[str, str] = {}
    if section.category:
        metatype_json["category"] = section.category

    return MetatypeFiles(
        xml=format_metatype(metatype),
        json=json.dumps(metatype_json, indent=2, ensure_ascii=False),
    )
