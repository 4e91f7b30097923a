"""Review value objects"""

from dataclasses import dataclass
from typing import Any, Optional

from ..exceptions import InvalidInput

MIN_REVIEW_SCORE = 1
MAX_REVIEW_SCORE = 10


@dataclass(frozen=True)
class ReviewScore:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidInput("Review score must be an integer")
        if not MIN_REVIEW_SCORE <= self.value <= MAX_REVIEW_SCORE:
            raise InvalidInput(
                f"Review score must be between {MIN_REVIEW_SCORE} and {MAX_REVIEW_SCORE}"
            )

    @classmethod
    def parse(cls, raw: Any) -> Optional['ReviewScore']:
        """None and 0 both mean "no rating given" (the review form sends 0 when unset)"""
        if raw is None or raw == 0:
            return None
        if isinstance(raw, float) and raw.is_integer():
            raw = int(raw)
        return cls(raw)
