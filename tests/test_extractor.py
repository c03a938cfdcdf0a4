"""Test lyrics container extraction"""

from conftest import lyrics_page
from lyrics_resolver.lyrics.extractor import extract_containers, find_container_blocks


class TestExtractContainers:
    """Test balanced extraction of data-lyrics-container blocks"""

    def test_nested_div_is_kept_whole(self):
        html = '<div data-lyrics-container="true">A<div>nested</div>B</div>'
        assert extract_containers(html) == "A<div>nested</div>B"

    def test_deeply_nested(self):
        html = ('<div data-lyrics-container="true">'
                '<div><div>x</div></div>y</div><div>outside</div>')
        assert extract_containers(html) == "<div><div>x</div></div>y"

    def test_containers_are_concatenated_in_order(self):
        html = lyrics_page("[Verse 1]<br/>one", "[Chorus]<br/>two")
        assert extract_containers(html) == "[Verse 1]<br/>one[Chorus]<br/>two"
        assert list(find_container_blocks(html)) == ["[Verse 1]<br/>one", "[Chorus]<br/>two"]

    def test_attributes_around_marker(self):
        html = ('<div class="Lyrics__Container-sc-1" data-lyrics-container="true" '
                'data-exclude-from-selection="false">text</div>')
        assert extract_containers(html) == "text"

    def test_other_tags_do_not_affect_depth(self):
        html = ('<div data-lyrics-container="true"><span class="a">I</span><br/>'
                '<a href="/x"><i>me</i></a></div>')
        assert extract_containers(html) == '<span class="a">I</span><br/><a href="/x"><i>me</i></a>'

    def test_unclosed_container_is_dropped(self):
        assert extract_containers('<div data-lyrics-container="true">lost') == ""
        assert extract_containers('<div data-lyrics-container="true">A<div>B</div>') == ""

    def test_page_without_container(self):
        assert extract_containers('<html><body><div class="x">no lyrics</div></body></html>') == ""
        assert extract_containers("") == ""

    def test_empty_container(self):
        assert extract_containers('<div data-lyrics-container="true"></div>') == ""

    def test_false_marker_is_ignored(self):
        html = '<div data-lyrics-container="false">skip</div><div data-lyrics-container="true">keep</div>'
        assert extract_containers(html) == "keep"
