"""Test lyrics markup normalization"""

from lyrics_resolver.lyrics.text import markup_to_text, normalize_lyrics_text, strip_boilerplate


class TestMarkupToText:
    """Test tag and entity handling"""

    def test_line_break_variants(self):
        assert markup_to_text("one<br>two<br/>three<br />four<BR>five") == "one\ntwo\nthree\nfour\nfive"

    def test_block_closes_become_newlines(self):
        assert markup_to_text("<p>One</p><div>Two</div>") == "One\nTwo\n"

    def test_other_tags_removed(self):
        assert markup_to_text('<span class="x">hi</span> <a href="/y"><i>there</i></a>') == "hi there"

    def test_entities(self):
        text = markup_to_text("Rock &amp; Roll &lt;3 don&#x27;t &quot;stop&quot; &gt;")
        assert text == "Rock & Roll <3 don't \"stop\" >"

    def test_ampersand_decoded_first(self):
        assert markup_to_text("&amp;lt;") == "<"

    def test_unknown_entities_untouched(self):
        assert markup_to_text("caf&eacute;") == "caf&eacute;"


class TestStripBoilerplate:
    """Test removal of credits and translation lists"""

    def test_cut_before_first_heading(self):
        text = "3 ContributorsSomeSongLyrics\n[Verse 1]\nLine one"
        assert strip_boilerplate(text) == "[Verse 1]\nLine one"

    def test_heading_at_very_start_is_not_a_marker(self):
        # Fallback rules apply, which leave text without credits untouched
        assert strip_boilerplate("[Intro]\nHey") == "[Intro]\nHey"

    def test_contributors_fallback(self):
        text = "12 ContributorsHello Lyrics\nFirst line\nSecond line"
        assert strip_boilerplate(text).strip() == "First line\nSecond line"

    def test_contributors_fallback_needs_uppercase_line(self):
        assert strip_boilerplate("5 Contributorsfoo\nbar\nBaz").strip() == "Baz"

    def test_translations_fallback(self):
        assert strip_boilerplate("2 Translationsespañol\nHello there").strip() == "Hello there"

    def test_without_boilerplate(self):
        assert strip_boilerplate("Just words\nMore words") == "Just words\nMore words"


class TestNormalizeLyricsText:
    """Test the full markup to text transform"""

    def test_credits_removed_and_heading_spaced(self):
        raw = "3 ContributorsSomeSongLyrics<br/>[Verse 1]<br/>Line one"
        assert normalize_lyrics_text(raw) == "[Verse 1]\n\nLine one"

    def test_every_heading_gets_blank_lines(self):
        raw = "Intro text<br>[Chorus]<br>La la<br>[Verse 1: Artist]<br>Words"
        assert normalize_lyrics_text(raw) == "[Chorus]\n\nLa la\n\n[Verse 1: Artist]\n\nWords"

    def test_excess_newlines_collapse(self):
        assert normalize_lyrics_text("a<br><br><br><br>b") == "a\n\nb"

    def test_surrounding_whitespace_trimmed(self):
        assert normalize_lyrics_text("<br><br>  words  <br><br>") == "words"

    def test_real_page_fragment(self):
        raw = ('24 ContributorsTranslationsEspañolShape of You Lyrics<br/>'
               '[Verse 1]<br/>The <i>club</i> isn&#x27;t the best place to find a lover<br/>'
               'So the bar is where I go<br/><br/>[Pre-Chorus]<br/>'
               '<a href="/annotation"><span>Come over and start up a conversation</span></a>')
        assert normalize_lyrics_text(raw) == (
            "[Verse 1]\n\n"
            "The club isn't the best place to find a lover\n"
            "So the bar is where I go\n\n"
            "[Pre-Chorus]\n\n"
            "Come over and start up a conversation"
        )

    def test_empty_input(self):
        assert normalize_lyrics_text("") == ""
        assert normalize_lyrics_text("<div></div>") == ""
