from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Ok:
    value: Any = None


@dataclass(frozen=True)
class Conflict:
    field: str


@dataclass(frozen=True)
class NotFound:
    pass
