# utils/xml_loader.py
import xml.etree.ElementTree as ET
from typing import Any, Dict
from pathlib import Path


def parse_setup_xml(file_path) -> Dict[str, Any]:
    """
    Flatten a setup file into {field: value}. Section elements (<profile>,
    <balances>, ...) only group fields; their children become the keys.
    """
    tree = ET.parse(file_path)
    root = tree.getroot()

    setup_dict: Dict[str, Any] = {}

    for child in root:
        if len(child):
            for sub in child:
                setup_dict[sub.tag] = try_cast(sub.text)
        else:
            setup_dict[child.tag] = try_cast(child.text)

    return setup_dict


def try_cast(value: str) -> Any:
    """Try to convert string to int or float if possible, else leave as str."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None

    # Booleans
    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    # Integers (try first)
    try:
        if '.' not in value:
            return int(value)
    except ValueError:
        pass

    # Floats (try second)
    try:
        return float(value)
    except ValueError:
        pass

    return value  # Return as string if all else fails


CONFIG_DIR = Path(__file__).parent.parent / "config"

DEFAULT_SETUP = parse_setup_xml(CONFIG_DIR / "default_setup.xml")
