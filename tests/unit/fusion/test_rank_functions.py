"""
Unit tests for rank-based strategies (Borda, RRF) and rank_to_scored_list.

License: MIT
"""

import pytest

from rankmerge_core.exceptions import ValidationError
from rankmerge_core.fusion import (
    BordaCount,
    RankFunction,
    RankSlot,
    ReciprocalRankFusion,
    rank_to_scored_list,
)
from rankmerge_core.models import ScoredList


class TestBordaCount:
    def test_is_rank_function(self) -> None:
        assert isinstance(BordaCount(), RankFunction)

    def test_points(self) -> None:
        borda = BordaCount()

        assert borda([RankSlot(1, 3)]) == 3.0
        assert borda([RankSlot(3, 3)]) == 1.0

    def test_sum_across_lists(self) -> None:
        borda = BordaCount()

        assert borda([RankSlot(1, 3), RankSlot(2, 2)]) == 4.0

    def test_absent_contributes_zero(self) -> None:
        borda = BordaCount()

        assert borda([RankSlot(1, 3), None]) == 3.0
        assert borda([None, None]) == 0.0


class TestReciprocalRankFusionInit:
    def test_default_k(self) -> None:
        assert ReciprocalRankFusion().k == 60

    def test_custom_k(self) -> None:
        assert ReciprocalRankFusion(k=10).k == 10

    def test_invalid_k_zero(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ReciprocalRankFusion(k=0)

        assert "k must be > 0" in str(exc_info.value)
        assert exc_info.value.error_code == "VAL_003"

    def test_invalid_k_negative(self) -> None:
        with pytest.raises(ValidationError):
            ReciprocalRankFusion(k=-10)

    def test_invalid_k_type_float(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ReciprocalRankFusion(k=60.5)

        assert "k must be an integer" in str(exc_info.value)
        assert exc_info.value.error_code == "VAL_002"

    def test_invalid_k_type_string(self) -> None:
        with pytest.raises(ValidationError):
            ReciprocalRankFusion(k="60")


class TestReciprocalRankFusionScores:
    def test_score_calculation(self) -> None:
        rrf = ReciprocalRankFusion(k=60)

        score = rrf([RankSlot(1, 10), RankSlot(2, 10)])

        assert abs(score - (1 / 61 + 1 / 62)) < 1e-12

    def test_absent_contributes_zero(self) -> None:
        rrf = ReciprocalRankFusion(k=60)

        assert rrf([RankSlot(1, 5), None]) == pytest.approx(1 / 61)

    def test_list_length_ignored(self) -> None:
        rrf = ReciprocalRankFusion(k=1)

        assert rrf([RankSlot(1, 2)]) == rrf([RankSlot(1, 200)])


class TestRankToScoredList:
    def test_borda_points_by_default(self) -> None:
        scored_list = ScoredList.from_pairs([("d1", 0.9), ("d2", 0.5), ("d3", 0.1)])

        votes = rank_to_scored_list(scored_list)

        assert votes.doc_ids == ("d1", "d2", "d3")
        assert votes.scores == (3.0, 2.0, 1.0)

    def test_with_rrf(self) -> None:
        scored_list = ScoredList.from_pairs([("d1", 0.9), ("d2", 0.5)], source="dense")

        votes = rank_to_scored_list(scored_list, ReciprocalRankFusion(k=1))

        assert votes.scores == (0.5, pytest.approx(1 / 3))
        assert votes.source == "dense"

    def test_empty(self) -> None:
        assert len(rank_to_scored_list(ScoredList())) == 0
