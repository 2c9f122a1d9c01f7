"""Structured (XML) file wrapper."""

from __future__ import annotations

import xml.etree.ElementTree as ET


def wrap_file(path: str, contents: str) -> str:
    """Serialize a file as `<file><path>…</path><contents>…</contents></file>`.

    The contents start on a new line so the first line of the file is not
    glued to the opening tag. No indentation or line breaks are added
    between elements.
    """
    element = ET.Element("file")
    ET.SubElement(element, "path").text = path
    ET.SubElement(element, "contents").text = "\n" + contents
    return ET.tostring(element, encoding="unicode")
