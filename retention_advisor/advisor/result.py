from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class StrategyResult:
    """Generated retention strategies and the model that wrote them."""
    strategy: str
    model: str

    def to_dict(self) -> Dict[str, Any]:
        return {"strategy": self.strategy, "model": self.model}


@dataclass
class GenerationAttempt:
    """One failed call to a candidate model."""
    model: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"model": self.model, "message": self.message}
