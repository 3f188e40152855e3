"""Tests for model output parsing."""

import pytest

from ollama_rerank.errors import ParseError
from ollama_rerank.rerank import extract_json_array, parse_ranking, parse_verdict
from ollama_rerank.types import RerankResult


class TestParseVerdict:
    """Tests for yes/no grading replies."""

    @pytest.mark.parametrize(
        ("answer", "score"),
        [
            ("Yes, relevant.", 1),
            ("  YES  ", 1),
            ("No.", 0),
            ("Not relevant", 0),
            ("", 0),
            (None, 0),
        ],
    )
    def test_verdicts(self, answer, score) -> None:
        """Test replies containing "yes" score 1, anything else 0."""
        assert parse_verdict(answer) == score


class TestExtractJsonArray:
    """Tests for array extraction."""

    def test_array_inside_prose(self) -> None:
        """Test the array is found between surrounding text."""
        text = 'Here you go:\n[{"index": 1, "score": 0.5}]\nHope it helps.'
        assert extract_json_array(text) == [{"index": 1, "score": 0.5}]

    def test_no_array(self) -> None:
        """Test replies without brackets raise ParseError."""
        with pytest.raises(ParseError, match="does not contain a JSON array") as exc_info:
            extract_json_array("I am unable to rank these documents.")
        assert exc_info.value.raw_text == "I am unable to rank these documents."

    def test_invalid_json(self) -> None:
        """Test truncated output raises ParseError."""
        with pytest.raises(ParseError, match="invalid JSON array"):
            extract_json_array('[{"index": 1, "score": 0.9}, {"index": 2, "sco]')

    def test_brackets_in_prose_are_not_repaired(self) -> None:
        """Test coincidental brackets make the reply fail rather than guess."""
        with pytest.raises(ParseError):
            extract_json_array('See [1] first. [{"index": 1, "score": 0.9}]')


class TestParseRanking:
    """Tests for ranking parsing."""

    def test_reference_reply(self) -> None:
        """Test 1-based labels become 0-based indices in model order."""
        text = 'Some text [{"index":2,"score":0.9},{"index":1,"score":0.4}] trailing'
        results = parse_ranking(text, 2)
        assert results == [
            RerankResult(index=1, relevance_score=0.9),
            RerankResult(index=0, relevance_score=0.4),
        ]

    def test_integer_scores(self) -> None:
        """Test integral scores are accepted as floats."""
        results = parse_ranking('[{"index": 1, "score": 1}]', 1)
        assert results[0].relevance_score == 1.0

    @pytest.mark.parametrize(
        "text",
        [
            '[{"index": 3, "score": 0.9}]',
            '[{"index": 0, "score": 0.9}]',
            '[{"index": 1}]',
            '[{"index": 1, "score": "high"}]',
            '[{"index": 1, "score": NaN}]',
            "[1, 2]",
            '[{"index": 1, "score": 0.9}, {"index": 1, "score": 0.8}]',
        ],
    )
    def test_invalid_entries(self, text) -> None:
        """Test out-of-range, missing, non-finite and duplicate entries fail."""
        with pytest.raises(ParseError):
            parse_ranking(text, 2)

    def test_empty_array(self) -> None:
        """Test an empty ranking yields no results."""
        assert parse_ranking("[]", 3) == []
