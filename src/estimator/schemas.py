from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class QuoteResponse:
    table_version: str
    currency: str
    rating_input: Dict[str, Any]
    quote: Dict[str, Any]
    display: Dict[str, str]
    notes: list[str] = field(default_factory=list)
    comparison: Optional[Dict[str, Dict[str, int]]] = None

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "table_version": self.table_version,
            "currency": self.currency,
            "input": self.rating_input,
            "quote": self.quote,
            "display": self.display,
            "notes": self.notes,
        }
        if self.comparison is not None:
            out["comparison"] = self.comparison
        return out
