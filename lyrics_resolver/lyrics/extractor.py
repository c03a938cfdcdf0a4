"""
Balanced extraction of lyrics containers from song page markup

Song pages split the lyrics over one or more <div data-lyrics-container="true">
blocks. Those blocks wrap their own formatting markup, including nested <div>
elements, so the first </div> after an opener is usually not the end of the
container. Each container is therefore bounded with an explicit cursor and a
depth counter instead of a single regular expression.
"""

import re
from typing import Iterator

# Opening tag of a lyrics container; only used to locate where scanning starts
CONTAINER_OPEN = re.compile(r'<div[^>]*data-lyrics-container="true"[^>]*>')

_DIV_OPEN = '<div'
_DIV_CLOSE = '</div'


def _scan_container(html: str, content_start: int) -> int:
    """
    Find the closing tag that balances a container opened before content_start

    Args:
        html: Whole document
        content_start: Index right after the container's opening tag

    Returns:
        Index of the balancing '</div', or -1 if the document ends first
    """
    depth = 1
    cursor = content_start

    while cursor < len(html):
        tag_start = html.find('<', cursor)
        if tag_start == -1:
            break

        if html.startswith(_DIV_OPEN, tag_start):
            depth += 1
            cursor = tag_start + len(_DIV_OPEN)
        elif html.startswith(_DIV_CLOSE, tag_start):
            depth -= 1
            if depth == 0:
                return tag_start
            cursor = tag_start + len(_DIV_CLOSE)
        else:
            cursor = tag_start + 1

    return -1


def find_container_blocks(html: str) -> Iterator[str]:
    """
    Yield the inner markup of every lyrics container in document order

    Containers whose closing tag is never found are skipped.
    """
    if not html:
        return

    for match in CONTAINER_OPEN.finditer(html):
        content_start = match.end()
        content_end = _scan_container(html, content_start)
        if content_end != -1:
            yield html[content_start:content_end]


def extract_containers(html: str) -> str:
    """
    Concatenate the content of all lyrics containers

    Args:
        html: Song page markup

    Returns:
        Joined container contents without separators, or an empty string
        when the page has no complete container
    """
    return ''.join(find_container_blocks(html))
