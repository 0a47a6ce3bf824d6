"""Unit tests for RetrievalEngine."""
import math
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from models.chunk import Chunk, ScoredChunk
from services.retrieval_engine import RetrievalEngine


def make_chunks(*contents):
    return [Chunk(content=content, chunk_index=i) for i, content in enumerate(contents)]


class TestRetrievalEngine:
    """Test suite for RetrievalEngine.find_relevant."""

    @pytest.fixture
    def engine(self):
        return RetrievalEngine()

    @pytest.fixture
    def pet_chunks(self):
        return make_chunks(
            "cats are great",
            "cats and dogs are great pets",
            "unrelated text here",
        )

    def test_initialization(self, engine):
        assert engine.max_chunks == 3

    def test_rejects_non_positive_max_chunks(self):
        with pytest.raises(ValueError, match="max_chunks"):
            RetrievalEngine(max_chunks=0)

    def test_empty_chunks_returns_empty(self, engine):
        assert engine.find_relevant([], "anything") == []

    def test_empty_query_returns_empty(self, engine, pet_chunks):
        assert engine.find_relevant(pet_chunks, "") == []
        assert engine.find_relevant(pet_chunks, None) == []

    def test_stop_word_query_returns_empty(self, engine, pet_chunks):
        assert engine.find_relevant(pet_chunks, "the a an") == []
        assert engine.find_relevant(pet_chunks, "what is it") == []

    def test_short_words_are_ignored(self, engine):
        """Two-letter words never count as terms, even when present."""
        assert engine.find_relevant(make_chunks("go to it"), "go") == []

    def test_ranks_multi_term_match_first(self, engine, pet_chunks):
        result = engine.find_relevant(pet_chunks, "cats dogs")
        assert result == [pet_chunks[1], pet_chunks[0]]

    def test_non_matching_chunks_are_excluded(self, engine, pet_chunks):
        result = engine.find_relevant(pet_chunks, "cats dogs")
        assert pet_chunks[2] not in result

    def test_max_chunks_bound(self, engine):
        chunks = make_chunks(*["energy flows through ecosystems"] * 6)
        assert len(engine.find_relevant(chunks, "energy")) == 3
        assert len(engine.find_relevant(chunks, "energy", max_chunks=2)) == 2
        assert len(RetrievalEngine(max_chunks=5).find_relevant(chunks, "energy")) == 5

    def test_earlier_chunk_wins_between_identical_contents(self, engine):
        chunks = make_chunks("mitosis divides cells", "mitosis divides cells")
        result = engine.find_relevant(chunks, "mitosis")
        assert [c.chunk_index for c in result] == [0, 1]

    def test_substring_only_match_is_relevant(self, engine):
        chunks = make_chunks("photosynthesis converts light", "nothing to see")
        assert engine.find_relevant(chunks, "photo") == [chunks[0]]

    def test_case_insensitive(self, engine):
        chunks = make_chunks("The MITOCHONDRIA is the powerhouse")
        assert engine.find_relevant(chunks, "Mitochondria") == [chunks[0]]

    def test_regex_characters_in_query_are_literal(self, engine):
        chunks = make_chunks("learn c++ programming today", "learn python (3.12) today")
        assert engine.find_relevant(chunks, "c++") == [chunks[0]]
        assert engine.find_relevant(chunks, "(3.12)") == [chunks[1]]

    def test_question_mark_does_not_hide_last_term(self, engine):
        chunks = make_chunks("Photosynthesis converts light into sugar", "Cells divide by mitosis")
        assert engine.find_relevant(chunks, "What is photosynthesis?") == [chunks[0]]
        assert engine.find_relevant(chunks, "How do cells divide?")[0] is chunks[1]

    def test_returns_original_chunk_objects(self, engine):
        chunk = Chunk(content="enzymes catalyse reactions", chunk_index=7, page_number=0, chunk_id="abc123")
        result = engine.find_relevant([chunk], "enzymes")
        assert result[0] is chunk
        assert not isinstance(result[0], ScoredChunk)

    def test_empty_chunk_content_does_not_fail(self, engine):
        chunks = [Chunk(content="", chunk_index=0), Chunk(content="glucose", chunk_index=1)]
        assert engine.find_relevant(chunks, "glucose") == [chunks[1]]

    def test_deterministic(self, engine):
        chunks = make_chunks(
            "protein synthesis happens in ribosomes",
            "ribosomes read messenger rna",
            "protein folding and ribosomes",
            "lipids form membranes",
        )
        first = engine.find_relevant(chunks, "protein ribosomes synthesis")
        for _ in range(5):
            assert engine.find_relevant(chunks, "protein ribosomes synthesis") == first

    def test_long_chunks_do_not_win_on_volume(self, engine):
        """Length normalization favours a dense short chunk over a long diluted one."""
        filler = " ".join(["filler"] * 200)
        chunks = make_chunks(f"osmosis {filler} osmosis", "osmosis moves water")
        result = engine.find_relevant(chunks, "osmosis")
        assert result[0] is chunks[1]


class TestScoring:
    """Exact weights of the relevance heuristic."""

    @pytest.fixture
    def engine(self):
        return RetrievalEngine()

    def test_tokenize_query(self):
        assert RetrievalEngine.tokenize_query("How do Cells divide") == ["cells", "divide"]
        assert RetrievalEngine.tokenize_query("What is the Krebs cycle?") == ["krebs", "cycle"]
        assert RetrievalEngine.tokenize_query("") == []
        assert RetrievalEngine.tokenize_query("Explain (osmosis), please!") == ["explain", "osmosis", "please"]
        assert RetrievalEngine.tokenize_query("c++ and c#?") == ["c++"]

    def test_stop_words_are_immutable(self):
        assert isinstance(RetrievalEngine.STOP_WORDS, frozenset)
        assert {"the", "what", "been"} <= RetrievalEngine.STOP_WORDS

    def test_exact_and_partial_weights(self, engine):
        [scored] = engine.score_chunks(make_chunks("cells cellsomething"), "cells")
        # one whole-word hit (x3) plus one extra substring hit (x1.5)
        assert scored.raw_score == pytest.approx(4.5)
        assert scored.matched_words == 1
        assert scored.score == pytest.approx(4.5 / math.sqrt(2))

    def test_multi_term_bonus(self, engine):
        [scored] = engine.score_chunks(make_chunks("cats dogs"), "cats dogs")
        assert scored.raw_score == pytest.approx(6.0 + 4.0)
        assert scored.matched_words == 2
        assert scored.score == pytest.approx(scored.raw_score / math.sqrt(2))

    def test_position_decay(self, engine):
        scored = engine.score_chunks(make_chunks("osmosis", "osmosis"), "osmosis")
        assert scored[0].score == pytest.approx(3.0)
        assert scored[1].score == pytest.approx(3.0 * 0.95)

    def test_score_chunks_keeps_every_chunk_in_order(self, engine):
        chunks = make_chunks("alpha", "beta", "gamma")
        scored = engine.score_chunks(chunks, "beta")
        assert [s.chunk for s in scored] == chunks
        assert [s.score > 0 for s in scored] == [False, True, False]

    def test_score_chunks_without_terms(self, engine):
        assert engine.score_chunks(make_chunks("alpha"), "the of") == []
