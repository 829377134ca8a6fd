"""
Tests for the Korean tagger: splitting raw text into words.
"""

from datekompiler.korean.tagger import tag
from datekompiler.korean.words import Word, WordType


def texts(words):
    return [word.text for word in words]


class TestTagging:
    """Splitting text into runs and known phrases."""

    def test_known_word_cuts_a_running_word(self):
        """A lexicon phrase ends the run before it, even mid-word."""
        assert ",".join(texts(tag("박진서는 천하제일"))) == "박진서는,천하제,일"

    def test_numbers_are_marked(self):
        words = tag("이번주 7시")
        assert ",".join(str(word) for word in words) == "이번주,<N>7,시"
        assert words[1].type is WordType.NUM

    def test_spaces_are_dropped(self):
        assert texts(tag("  내일   모레 ")) == ["내일", "모레"]

    def test_empty_text(self):
        assert tag("") == []

    def test_phrase_directly_after_digits(self):
        assert texts(tag("3일후")) == ["3", "일", "후"]

    def test_longer_phrase_listed_first_wins(self):
        assert texts(tag("3시간")) == ["3", "시간"]
        assert texts(tag("다다음주")) == ["다다음주"]

    def test_first_listed_phrase_wins_over_longer_one(self):
        """Known phrases are tried in declared order, not longest first."""
        assert texts(tag("다음주", known_words=("다음", "다음주"))) == ["다음", "주"]
        assert texts(tag("다음주", known_words=("다음주", "다음"))) == ["다음주"]

    def test_punctuation_is_a_word_of_its_own(self):
        assert texts(tag("3:30")) == ["3", ":", "30"]


class TestOffsets:
    """Words keep their position in the original text."""

    def test_offsets_slice_back_to_the_word(self):
        text = "회의는 다음주 월요일 오후 3시"
        for word in tag(text):
            assert text[word.start:word.end] == word.text

    def test_offsets_of_mixed_runs(self):
        words = tag("이번주 7시")
        assert [(w.start, w.end) for w in words] == [(0, 3), (4, 5), (5, 6)]


class TestWord:

    def test_end_defaults_to_start_plus_length(self):
        assert Word("내일", start=4).end == 6

    def test_span_covers_words_in_any_order(self):
        text = "회의는 내일 3시"
        words = tag(text)
        assert Word.span(text, [words[2], words[1]]) == "내일 3"
        assert Word.span(text, []) == ""

    def test_is_one_of(self):
        assert Word("후").is_one_of(("후", "뒤"))
        assert not Word("전").is_one_of(("후", "뒤"))
