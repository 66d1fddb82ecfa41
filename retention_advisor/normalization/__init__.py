# ==============================================
# TOPIC 1: NORMALIZATION
# ==============================================
#
# This package handles everything related to reading raw
# dataset values BEFORE they enter the analysis topic.
#
# Modules:
# --------
# - value_parser.py   → Numeric-like detection, number/text coercion,
#                       attrition flag, percentage rounding
# - dataset_loader.py → Load a CSV file into a list of records
#
# ==============================================

from .value_parser import ValueParser
from .dataset_loader import DatasetLoader

__all__ = ["ValueParser", "DatasetLoader"]
