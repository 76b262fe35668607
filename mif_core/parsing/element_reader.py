"""Streaming OSM XML reader.

The input is read line by line and fed to an incremental SAX parser, so a
file of any size is scanned in constant memory and the line-level read
rules (no empty lines, no overlong lines, a closing ``</osm>`` marker)
are enforced alongside the XML structure.
"""
import xml.sax
from pathlib import Path
from typing import Union

from mif_core.config import MAX_LINE_LENGTH
from mif_core.exceptions import DataError, InputReadError

END_ELEMENT = 'osm'


class OSMElementHandler(xml.sax.ContentHandler):
    """SAX handler dispatching OSM elements to typed callbacks.

    Subclasses override the ``on_*`` hooks they need. Numeric attributes
    are converted with ``int_attr``/``float_attr``, which raise DataError
    instead of skipping the element.
    """

    def __init__(self):
        super().__init__()
        self.finished = False

    def startElement(self, name, attrs):
        if name == 'node':
            self.on_node(attrs)
        elif name == 'way':
            self.on_way_start(attrs)
        elif name == 'nd':
            self.on_node_ref(attrs)
        elif name == 'tag':
            self.on_tag(attrs.get('k', ''), attrs.get('v', ''))
        elif name == 'relation':
            self.on_relation_start(attrs)
        elif name == 'member':
            self.on_member(attrs)

    def endElement(self, name):
        if name == 'node':
            self.on_node_end()
        elif name == 'way':
            self.on_way_end()
        elif name == 'relation':
            self.on_relation_end()
        elif name == END_ELEMENT:
            self.finished = True

    # === Hooks ===

    def on_node(self, attrs) -> None:
        pass

    def on_node_end(self) -> None:
        pass

    def on_way_start(self, attrs) -> None:
        pass

    def on_node_ref(self, attrs) -> None:
        pass

    def on_way_end(self) -> None:
        pass

    def on_tag(self, key: str, value: str) -> None:
        pass

    def on_relation_start(self, attrs) -> None:
        pass

    def on_member(self, attrs) -> None:
        pass

    def on_relation_end(self) -> None:
        pass

    # === Typed accessors ===

    @staticmethod
    def int_attr(attrs, name: str, field_name: str) -> int:
        """Read an integer attribute.

        Raises:
            DataError: If the attribute is missing or not an integer
        """
        token = attrs.get(name, '')
        try:
            return int(token)
        except ValueError:
            raise DataError(field_name, token)

    @staticmethod
    def float_attr(attrs, name: str, field_name: str) -> float:
        """Read a floating point attribute.

        Raises:
            DataError: If the attribute is missing or not a number
        """
        token = attrs.get(name, '')
        try:
            return float(token)
        except ValueError:
            raise DataError(field_name, token)


def open_osm_file(file_path: Union[str, Path]):
    """Open an OSM XML file for binary reading.

    Raises:
        InputReadError: If the file cannot be opened
    """
    try:
        return open(file_path, 'rb')
    except OSError as e:
        raise InputReadError(f"Could not open {file_path} for reading: {e.strerror}")


def stream_osm_file(file_path: Union[str, Path], handler: OSMElementHandler,
                    max_line_length: int = MAX_LINE_LENGTH) -> int:
    """Feed an OSM XML file through a handler up to the ``</osm>`` marker.

    Args:
        file_path: Path to OSM XML file
        handler: Handler receiving the element callbacks
        max_line_length: Lines of this many bytes or more are unreadable

    Returns:
        Number of lines read

    Raises:
        InputReadError: If the file cannot be opened, a line is empty or
            too long, the XML is malformed, or the end marker is missing
        DataError: If a numeric field fails to parse
    """
    parser = xml.sax.make_parser()
    parser.setContentHandler(handler)

    line_number = 0
    with open_osm_file(file_path) as f:
        for raw_line in f:
            line = raw_line.rstrip(b'\r\n')
            if len(line) >= max_line_length:
                raise InputReadError(
                    f"Line {line_number + 1} of {file_path} is longer than "
                    f"{max_line_length - 1} bytes", line_number
                )
            if not line:
                raise InputReadError(
                    f"Line {line_number + 1} of {file_path} is empty", line_number
                )
            line_number += 1

            try:
                parser.feed(raw_line)
            except xml.sax.SAXParseException as e:
                raise InputReadError(
                    f"Malformed XML in {file_path} at line {e.getLineNumber()}: "
                    f"{e.getMessage()}", line_number
                )

            if handler.finished:
                return line_number

        # Expat may hold back the last buffered tokens until the final parse
        try:
            parser.close()
        except xml.sax.SAXParseException:
            pass
        if handler.finished:
            return line_number

    raise InputReadError(
        f"{file_path} ended before the closing </osm> marker", line_number
    )
