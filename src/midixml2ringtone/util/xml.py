from __future__ import annotations
from typing import Dict, List, Optional
from xml.etree import ElementTree as ET

def get_ns(root: ET.Element) -> Dict[str, str]:
    return {"m": root.tag.split('}')[0].strip('{')} if '}' in root.tag else {}

def find(elem: ET.Element, tag: str, ns: Dict[str, str]) -> Optional[ET.Element]:
    return elem.find(f"m:{tag}", ns) if ns else elem.find(tag)

def find_all(elem: ET.Element, tag: str, ns: Dict[str, str]) -> List[ET.Element]:
    return elem.findall(f"m:{tag}", ns) if ns else elem.findall(tag)

def text_of(elem: ET.Element, tag: str, ns: Dict[str, str]) -> Optional[str]:
    child = find(elem, tag, ns)
    if child is None or child.text is None:
        return None
    return child.text.strip()
