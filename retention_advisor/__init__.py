# ==============================================
# Retention Advisor
# ==============================================
#
# Package Structure (3 Topics + Orchestrator):
#
# retention_advisor/
# ├── normalization/    # Topic 1: Parse raw values, load CSV datasets
# ├── analysis/         # Topic 2: Classify columns, statistics & similarity
# ├── advisor/          # Topic 3: Prompt building + Gemini client
# ├── config.py         # Configuration management
# ├── errors.py         # Exception hierarchy
# ├── validation.py     # Request validation (boundary checks)
# ├── analyze_and_advise.py  # Final orchestrator class + request handlers
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
