"""
Per-list score normalization.

Late fusion combines scores produced by heterogeneous engines (BM25 scores,
cosine similarities, learned-to-rank outputs). Before they can be added up,
each source's scores are mapped onto the same [0, 1] range.

Normalization Formula:
    norm_score = (score - min_score) / (max_score - min_score)

The minimum and maximum are taken over one list only, never across lists.

License: MIT
"""

import math

from rankmerge_core.models import ScoredList


def min_max_normalize(scored_list: ScoredList) -> ScoredList:
    """
    Min-max normalize the scores of one list to the [0, 1] range.

    The top entry maps to 1.0 and the bottom entry to 0.0, preserving the
    relative ordering and proportional differences between scores. Ranks,
    order, source and query id are unchanged.

    Args:
        scored_list: List to normalize

    Returns:
        New ScoredList with normalized scores.

    Edge Cases:
        - Empty list: Returns an empty list
        - Single entry: Normalizes to 1.0
        - All scores identical: Every entry normalizes to 1.0
          (avoids division by zero)
        - Score range beyond the float maximum (e.g. 1e308 and -1e308):
          Computed on halved scores, same result

    Example:
        ```python
        run = ScoredList.from_pairs([("d1", 100.0), ("d2", 75.0), ("d3", 50.0)])
        min_max_normalize(run).scores
        # (1.0, 0.5, 0.0)
        ```
    """
    if not scored_list:
        return scored_list

    scores = scored_list.scores
    # Entries are sorted by descending score
    max_score = scores[0]
    min_score = scores[-1]
    score_range = max_score - min_score

    if score_range == 0:
        return scored_list.rescored([1.0] * len(scores))

    if math.isinf(score_range):
        # Finite scores of opposite sign can overflow the range; work on halves
        half_min = min_score / 2
        half_range = max_score / 2 - half_min
        return scored_list.rescored([(score / 2 - half_min) / half_range for score in scores])

    return scored_list.rescored([(score - min_score) / score_range for score in scores])
