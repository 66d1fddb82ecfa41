import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional


class ValueParser:
    # Decimal literal with optional sign, fraction and exponent: "35", "-4.", ".5", "1e3"
    DECIMAL_PATTERN = re.compile(r'^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$')
    # Unsigned integer literals in base 16 / 8 / 2
    PREFIXED_PATTERN = re.compile(
        r'^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$'
    )
    PREFIX_BASES = {"x": 16, "o": 8, "b": 2}

    ATTRITION_TRUE_VARIANTS = {"yes", "1", "true"}

    PERCENT_QUANTUM = Decimal("0.01")

    @classmethod
    def parse_number(cls, value: Any) -> Optional[float]:
        if value is None or isinstance(value, bool):
            return None

        if isinstance(value, (int, float)):
            try:
                number = float(value)
            except OverflowError:
                return None
            return number if math.isfinite(number) else None

        if isinstance(value, str):
            value_stripped = value.strip()
            if not value_stripped:
                return None

            if cls.DECIMAL_PATTERN.match(value_stripped):
                number = float(value_stripped)
                return number if math.isfinite(number) else None

            match = cls.PREFIXED_PATTERN.match(value_stripped)
            if match:
                base = cls.PREFIX_BASES[match.group(1)[0].lower()]
                try:
                    return float(int(match.group(1)[1:], base))
                except OverflowError:
                    return None

            return None

        return None

    @classmethod
    def is_numeric_like(cls, value: Any) -> bool:
        return cls.parse_number(value) is not None

    @classmethod
    def to_number(cls, value: Any) -> float:
        number = cls.parse_number(value)
        return 0.0 if number is None else number

    @classmethod
    def to_text(cls, value: Any) -> str:
        """
        Render a scalar the way it appears in a JSON payload.

        None -> "", True -> "true", 40.0 -> "40", "Sales" -> "Sales".
        """
        if value is None:
            return ""

        if isinstance(value, bool):
            return "true" if value else "false"

        if isinstance(value, float) and value.is_integer():
            return str(int(value))

        # Integers beyond float range read as an infinite JSON number
        if isinstance(value, int) and cls.parse_number(value) is None:
            return "Infinity" if value > 0 else "-Infinity"

        return str(value)

    @classmethod
    def is_attrited(cls, value: Any) -> bool:
        return cls.to_text(value).lower() in cls.ATTRITION_TRUE_VARIANTS

    @classmethod
    def round_percentage(cls, numerator: float, denominator: float) -> float:
        """
        Express numerator / denominator as a percentage with two decimals.

        Halves round away from zero on the exact binary value, so 0.125
        becomes 0.13 rather than Python's round-half-even 0.12.
        """
        percentage = (numerator / denominator) * 100
        return float(Decimal(percentage).quantize(cls.PERCENT_QUANTUM, rounding=ROUND_HALF_UP))
