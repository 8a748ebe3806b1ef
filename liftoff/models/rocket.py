from dataclasses import dataclass
from typing import Optional


@dataclass
class Rocket:
    id: str
    name: Optional[str]
