"""
OSM response parser

Parses OSM API 0.6 XML responses (and OSM/Overpass JSON 'elements'
responses) into an OSMDocument
"""

import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Union
from loguru import logger

from .models import Coordinate, OSMDocument, OSMNode, OSMWay, Tag


class OSMResponseParser:
    """Parses OSM API responses"""

    @staticmethod
    def parse_xml(payload: Union[str, bytes]) -> OSMDocument:
        """
        Parse an OSM XML document ('map' call or .osm file)

        Elements other than node and way (relations, bounds, notes) are ignored.

        Args:
            payload: XML text

        Returns:
            OSMDocument with nodes and ways in document order

        Raises:
            ValueError: If the payload is not well-formed OSM XML
        """
        try:
            root = ET.fromstring(payload)
        except ET.ParseError as e:
            raise ValueError(f"Failed to parse OSM XML: {e}") from e

        if root.tag != "osm":
            raise ValueError(f"Expected <osm> root element, got <{root.tag}>")

        nodes: List[OSMNode] = []
        ways: List[OSMWay] = []

        try:
            for elem in root:
                if elem.tag == "node":
                    nodes.append(OSMNode(
                        id=int(elem.attrib["id"]),
                        coordinate=Coordinate(
                            lat=float(elem.attrib["lat"]),
                            lon=float(elem.attrib["lon"])
                        )
                    ))
                elif elem.tag == "way":
                    ways.append(OSMWay(
                        id=int(elem.attrib["id"]),
                        node_refs=tuple(int(nd.attrib["ref"]) for nd in elem.findall("nd")),
                        tags=tuple(
                            Tag(key=t.attrib["k"], value=t.attrib.get("v", ""))
                            for t in elem.findall("tag")
                        )
                    ))
        except (KeyError, ValueError) as e:
            raise ValueError(f"Malformed OSM element: {e}") from e

        logger.debug(f"Parsed OSM XML: {len(nodes)} nodes, {len(ways)} ways")
        return OSMDocument(nodes=tuple(nodes), ways=tuple(ways))

    @staticmethod
    def parse_elements(data: Dict[str, Any]) -> OSMDocument:
        """
        Parse a JSON response into a document

        Handles the 'out body' format where ways list node ids under 'nodes'.

        Args:
            data: JSON response with an 'elements' list

        Returns:
            OSMDocument with nodes and ways in response order

        Raises:
            ValueError: If an element misses a required field
        """
        nodes: List[OSMNode] = []
        ways: List[OSMWay] = []

        try:
            for element in data.get("elements", []):
                if element["type"] == "node":
                    nodes.append(OSMNode(
                        id=int(element["id"]),
                        coordinate=Coordinate(lat=float(element["lat"]), lon=float(element["lon"]))
                    ))
                elif element["type"] == "way":
                    ways.append(OSMWay(
                        id=int(element["id"]),
                        node_refs=tuple(int(node_id) for node_id in element.get("nodes", [])),
                        tags=tuple(Tag(key=k, value=v) for k, v in element.get("tags", {}).items())
                    ))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed OSM element: {e}") from e

        logger.debug(f"Parsed OSM JSON: {len(nodes)} nodes, {len(ways)} ways")
        return OSMDocument(nodes=tuple(nodes), ways=tuple(ways))
