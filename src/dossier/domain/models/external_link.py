from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_LINK_TITLE = "Website"


@dataclass(slots=True)
class ExternalLink:
    uri: str
    title: str = DEFAULT_LINK_TITLE
    attributes: dict[str, Any] = field(default_factory=dict)
