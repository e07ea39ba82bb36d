"""Attribute extraction for opening tags."""

import re
from typing import Dict, List, Tuple

# name, optionally followed by ="double" or ='single'
ATTRIBUTE_PATTERN = re.compile(
    r"""([a-zA-Z0-9_-]+)(?:\s*=\s*(?:'([^']*)'|"([^"]*)"))?"""
)


def scan_attributes(tag_interior: str) -> Tuple[Dict[str, str], List[str]]:
    """Extract attributes and report names that occurred more than once.

    Args:
        tag_interior: Text of the opening tag after the tag name

    Returns:
        Tuple of the attribute mapping (insertion ordered, last write wins)
        and the names that were overwritten, in the order they repeated
    """
    attributes: Dict[str, str] = {}
    duplicates: List[str] = []
    for match in ATTRIBUTE_PATTERN.finditer(tag_interior):
        name, single_quoted, double_quoted = match.groups()
        if single_quoted is not None:
            value = single_quoted
        elif double_quoted is not None:
            value = double_quoted
        else:
            value = ""
        if name in attributes:
            duplicates.append(name)
        attributes[name] = value
    return attributes, duplicates


def extract_attributes(tag_interior: str) -> Dict[str, str]:
    """Extract a name->value mapping from the attribute part of an opening tag.

    Valueless (boolean) attributes map to the empty string. When a name
    repeats, the later value wins while the key keeps its first position.

    >>> extract_attributes('id="main" class=\\'wide\\' disabled')
    {'id': 'main', 'class': 'wide', 'disabled': ''}
    >>> extract_attributes('id="a" id="b"')
    {'id': 'b'}
    """
    return scan_attributes(tag_interior)[0]
