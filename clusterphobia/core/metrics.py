"""Extrinsic clustering quality metrics.

This module contains the B-Cubed measure of how well a solution Clustering
agrees with a gold-standard Clustering:
- compute_precision: homogeneity (are only related items grouped together?)
- compute_recall: completeness (are related items gathered into one group?)
- BCubed: precision and recall combined into an F-measure

The B-Cubed measure was proposed by Bagga and Baldwin, "Entity-based
cross-document coreferencing using the vector space model" (ACL 1998). Amigo
et al., "A comparison of Extrinsic Clustering Evaluation Metrics based on
Formal Constraints" (2009) found it the best of many measures against four
constraints: cluster homogeneity, cluster completeness, rag bag, and cluster
size vs quantity. The definition used here is section 2.1 of Moreno and Dias,
"Adapted B-CUBED Metrics to Unbalanced Datasets"; their refined version
(section 2.2) is not used because of its cost.

    1/F = alpha/P + (1 - alpha)/R

    P = 1/N * sum over clusters pi_i of
            1/|pi_i| * sum over x_j, x_l in pi_i of g*(x_j, x_l)

where g*(a, b) is 1 when a and b share a gold category. Recall is the same sum
with the roles of solution and gold standard swapped.
"""

from dataclasses import dataclass
from typing import Dict, Hashable, Iterable

from ..exceptions import MismatchedUniverseError


def tally_squares(categories: Iterable[Hashable]) -> int:
    """Sum the squares of how many times each category occurs.

    Equivalent to comparing every pair of items and counting matches, but done
    in one pass: the k-th repeat of a category (k counted from zero) adds
    2k + 1, since (k + 1)^2 - k^2 = 2k + 1.

    For example, categories [a, a, a, b, b] give 3^2 + 2^2 = 13.

    Args:
        categories: Gold categories of the members of a single cluster.

    Returns:
        Sum over distinct categories of (occurrences)^2.
    """
    sum_of_squares = 0
    tallies: Dict[Hashable, int] = {}
    for category in categories:
        current_tally = tallies.get(category, 0)
        sum_of_squares += 2 * current_tally + 1
        tallies[category] = current_tally + 1
    return sum_of_squares


def compute_precision(solution, gold_standard) -> float:
    """Compute the B-Cubed precision of a solution against a gold standard.

    Args:
        solution: Clustering being assessed.
        gold_standard: Clustering holding the true categories.

    Returns:
        Precision in [0, 1].

    Raises:
        MismatchedUniverseError: If a member of solution has no category in gold_standard.
        ValueError: If solution is empty.
    """
    n = solution.member_count()
    if n == 0:
        raise ValueError("Cannot compute B-Cubed precision of an empty Clustering")

    weighted_sum = 0.0
    for cluster in solution:
        gold_categories = []
        for member in cluster.members:
            category = gold_standard.get_category(member)
            if category is None:
                raise MismatchedUniverseError(member)
            gold_categories.append(category)
        weighted_sum += tally_squares(gold_categories) / len(cluster)

    return weighted_sum / n


def compute_recall(solution, gold_standard) -> float:
    """Compute the B-Cubed recall of a solution against a gold standard.

    Recall is precision with the two Clusterings swapped.
    """
    return compute_precision(gold_standard, solution)


@dataclass(frozen=True)
class BCubed:
    """B-Cubed similarity of two Clusterings.

    Attributes:
        precision: Homogeneity, from zero to one.
        recall: Completeness, from zero to one.
        alpha: Weighting between precision and recall.
            0.5 weights them equally, 1.0 uses only precision,
            0.0 uses only recall.
    """
    precision: float
    recall: float
    alpha: float = 0.5

    def __post_init__(self):
        if not 0.0 <= self.alpha <= 1.0:
            raise ValueError(f"alpha must be between 0 and 1, got {self.alpha}")

    def similarity(self) -> float:
        """F-measure of precision and recall; 1.0 means perfect agreement."""
        if self.precision == self.recall:
            return self.precision
        denominator = self.alpha * self.recall + (1.0 - self.alpha) * self.precision
        if denominator == 0:
            return 0.0
        return self.precision * self.recall / denominator

    @classmethod
    def compare(cls, solution, gold_standard, alpha: float = 0.5) -> "BCubed":
        """Compare two Clusterings that share the same items.

        Args:
            solution: Clustering whose quality is assessed.
            gold_standard: Clustering whose categories are all correct.
            alpha: Weighting between precision and recall.

        Returns:
            BCubed value.
        """
        return cls(
            precision=compute_precision(solution, gold_standard),
            recall=compute_recall(solution, gold_standard),
            alpha=alpha,
        )
