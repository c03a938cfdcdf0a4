"""
Conversion of extracted lyrics markup into display-ready text

The transform is a fixed sequence of steps:
1. line-break tags become newlines
2. closing </div> and </p> tags become newlines
3. all other tags are removed
4. a small set of HTML entities is decoded
5. page boilerplate before the first section heading is dropped
6. every [Section] heading gets a blank line before and after it
7. surrounding whitespace is trimmed and long newline runs collapsed
"""

import re

BR_TAG = re.compile(r'<br\s*/?>', re.IGNORECASE)
BLOCK_CLOSE_TAG = re.compile(r'</(div|p)>', re.IGNORECASE)
ANY_TAG = re.compile(r'<[^>]+>')

# The only entities decoded; applied in this order
ENTITIES = (
    ('&amp;', '&'),
    ('&lt;', '<'),
    ('&gt;', '>'),
    ('&#x27;', "'"),
    ('&quot;', '"'),
)

# A heading alone on its line, e.g. "\n[Chorus]\n" or "\n[Verse 1: Artist]\n"
SECTION_MARKER = re.compile(r'\n\[([^\]]+)\]\n')
SECTION_HEADING = re.compile(r'(\[[^\]]+\])')

# Fallback boilerplate rules, each running up to the next line that starts
# with an uppercase letter
CONTRIBUTORS_BLOCK = re.compile(
    r'^\d+\s*Contributors[\s\S]*?(?=\n(?-i:[A-Z]))', re.IGNORECASE | re.MULTILINE
)
TRANSLATIONS_BLOCK = re.compile(
    r'^.*?Translations[\s\S]*?(?=\n(?-i:[A-Z]))', re.IGNORECASE | re.MULTILINE
)

EXCESS_NEWLINES = re.compile(r'\n{3,}')


def markup_to_text(fragment: str) -> str:
    """Apply the tag and entity steps (1 to 4) to a markup fragment"""
    text = BR_TAG.sub('\n', fragment)
    text = BLOCK_CLOSE_TAG.sub('\n', text)
    text = ANY_TAG.sub('', text)

    for entity, char in ENTITIES:
        text = text.replace(entity, char)
    return text


def strip_boilerplate(text: str) -> str:
    """
    Drop contributor credits and translation lists placed before the lyrics

    Everything before the first standalone section heading is discarded. Pages
    without any heading fall back to removing a leading "N Contributors" block
    and a "Translations" block.
    """
    marker = SECTION_MARKER.search(text)
    if marker:
        return text[marker.start():].strip()

    text = CONTRIBUTORS_BLOCK.sub('', text)
    return TRANSLATIONS_BLOCK.sub('', text)


def normalize_lyrics_text(fragment: str) -> str:
    """
    Convert raw lyrics markup into clean plain text

    Args:
        fragment: Concatenated lyrics container markup

    Returns:
        Lyrics text with consistent paragraph spacing
    """
    text = strip_boilerplate(markup_to_text(fragment or ''))

    # Blank line around every heading regardless of the source formatting
    text = SECTION_HEADING.sub(r'\n\1\n', text)

    return EXCESS_NEWLINES.sub('\n\n', text.strip())
