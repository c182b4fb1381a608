from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

DEFAULT_LINK_LABEL = "Then"


@dataclass
class RoadmapLink:
    """Directed connector between two steps."""

    source: str
    target: str
    label: str = DEFAULT_LINK_LABEL

    def to_dict(self) -> Dict[str, str]:
        return {"source": self.source, "target": self.target, "label": self.label}
