"""Tests for text normalization and tokenization."""

import pytest

from ask_my_notes.text import normalize_text, tokenize


class TestNormalizeText:
    def test_lowercases_latin_only(self):
        assert normalize_text("Hello WORLD 東京") == "hello world 東京"

    def test_collapses_whitespace_including_ideographic_space(self):
        assert normalize_text("a \t\n b　　c") == "a b c"

    def test_strips_ascii_punctuation(self):
        assert normalize_text("hello, world! (test) #1 a-b_c") == "hello world test 1 abc"

    def test_strips_japanese_punctuation(self):
        assert normalize_text("「転職」、すべきか？【メモ】（下書き）・完了。") == "転職すべきかメモ下書き完了"

    def test_trims(self):
        assert normalize_text("   padded   ") == "padded"

    def test_no_double_space_after_punctuation_removal(self):
        assert normalize_text("a ! b") == "a b"

    @pytest.mark.parametrize("text", ["", "!!!", "。、", "   ", "　"])
    def test_degenerate_inputs_become_empty(self, text):
        assert normalize_text(text) == ""

    @pytest.mark.parametrize(
        "text",
        [
            "Hello, World!",
            "a ! b",
            "転職を考えている。今は留まるべきか。",
            "  Mixed　全角 space , and [brackets] ",
            "",
            "ÀÉÎ  straße",
        ],
    )
    def test_idempotent(self, text):
        once = normalize_text(text)
        assert normalize_text(once) == once


class TestTokenize:
    def test_latin_words(self):
        assert tokenize("Hello, world! 2024") == ["hello", "world", "2024"]

    def test_short_chunk_kept_whole(self):
        assert "犬猫" in tokenize("犬猫")
        assert tokenize("猫") == ["猫"]

    def test_three_char_chunk_not_split(self):
        assert tokenize("東京都") == ["東京都"]

    def test_long_chunk_ngram_coverage(self):
        tokens = tokenize("東京都庁")
        for gram in ["東京", "京都", "都庁", "東京都", "京都庁"]:
            assert gram in tokens
        assert "東京都庁" not in tokens
        assert len(tokens) == 5

    def test_whitespace_splits_chunks(self):
        assert tokenize("転職 今") == ["転職", "今"]

    def test_punctuation_removal_joins_chunks(self):
        assert tokenize("転職。今") == ["転職今"]

    def test_mixed_script(self):
        tokens = tokenize("Python で計画を立てる")
        assert tokens[0] == "python"
        assert "で計" in tokens
        assert "で" not in tokens
        assert "計画" in tokens
        assert "画を立" in tokens

    def test_deduplicates_preserving_first_seen_order(self):
        assert tokenize("world hello world") == ["world", "hello"]
        tokens = tokenize("ああああ")
        assert tokens == ["ああ", "あああ"]

    def test_example_question(self):
        tokens = tokenize("転職すべきか")
        assert "転職" in tokens
        assert "転職す" in tokens
        assert "べきか" in tokens

    @pytest.mark.parametrize("text", ["", "!!!", "。。", "   ", "hello", "東京都庁", "αβγ", "a 。b"])
    def test_never_contains_empty_string(self, text):
        assert "" not in tokenize(text)

    def test_unrecognized_script_yields_nothing(self):
        assert tokenize("αβγ привет") == []

    def test_tokens_are_normalized(self):
        for token in tokenize("Ask My NOTES 計画！"):
            assert token == normalize_text(token)

    def test_tokenizing_normalized_text_is_stable(self):
        text = "Hello, 「転職」 World!"
        assert tokenize(normalize_text(text)) == tokenize(text)
