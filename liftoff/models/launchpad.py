from dataclasses import dataclass
from typing import Optional


@dataclass
class Launchpad:
    id: str
    locality: Optional[str]
