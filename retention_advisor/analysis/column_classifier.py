# ==============================================
# ColumnClassifier
# ==============================================
#
# PURPOSE:
#   Inspect a dataset and decide which columns can be used as
#   numeric similarity features.
#
# CLASS: ColumnClassifier
# -----------------------
#   Stateless — takes records in, produces an ordered column list out.
#
#   Constructor:
#   ------------
#   - __init__(numeric_threshold: float = 0.7)
#
#   Methods:
#   --------
#   - classify(dataset: list[dict]) -> list[str]
#       Applies rules in order:
#
#       RULE 1: FIRST ROW DEFINES THE SCHEMA
#         Candidates are the keys of dataset[0], in order. A column
#         missing from the first record is never selected, even if
#         it is numeric everywhere else.
#
#       RULE 2: IDENTIFIER COLUMNS ARE EXCLUDED
#         If column.lower() in IGNORED_COLUMNS → skip.
#
#       RULE 3: MOSTLY NUMERIC → FEATURE
#         numeric_like_count / total_records >= numeric_threshold
#         (inclusive). Missing keys and None never count.
#
#   - numeric_ratio(dataset, column) -> float
#       Fraction of records holding a numeric-like value for column.
#
# ==============================================

from typing import Any, Dict, List, Sequence

from retention_advisor.normalization import ValueParser


class ColumnClassifier:
    """
    Picks the numeric feature columns used for similarity ranking.

    An empty result is valid: every record then sits at distance 0
    from the target.
    """

    # Identifier-style columns: numeric content but meaningless as a feature
    IGNORED_COLUMNS = {"employeenumber", "employeeid"}

    def __init__(self, numeric_threshold: float = 0.7, value_parser: ValueParser = None):
        """
        Args:
            numeric_threshold: Minimum fraction of numeric-like values (inclusive)
            value_parser: Optional ValueParser. A default one is used otherwise.
        """
        self.numeric_threshold = numeric_threshold
        self.value_parser = value_parser or ValueParser()

    def classify(self, dataset: Sequence[Dict[str, Any]]) -> List[str]:
        """
        Return the numeric feature columns of a dataset.

        Args:
            dataset: Records to inspect (may be empty)

        Returns:
            Column names in first-record key order
        """
        if not dataset:
            return []

        numeric_cols = []
        for column in dataset[0].keys():
            if self.is_ignored(column):
                continue
            if self.numeric_ratio(dataset, column) >= self.numeric_threshold:
                numeric_cols.append(column)

        return numeric_cols

    def numeric_ratio(self, dataset: Sequence[Dict[str, Any]], column: str) -> float:
        if not dataset:
            return 0.0

        numeric_count = 0
        for record in dataset:
            if self.value_parser.is_numeric_like(record.get(column)):
                numeric_count += 1

        return numeric_count / len(dataset)

    def is_ignored(self, column: str) -> bool:
        return column.lower() in self.IGNORED_COLUMNS
