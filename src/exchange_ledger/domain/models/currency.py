"""Currency metadata model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Currency:
    """Display metadata for a foreign currency held in the reserve."""

    code: str
    name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", self.code.strip().upper())
