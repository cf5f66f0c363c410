"""
Player identity and seating.
"""
from dataclasses import dataclass, field, replace
import uuid


@dataclass(frozen=True)
class Player:
    """Represents a player seated at the table."""

    name: str
    seating_position: int
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def display_name(self) -> str:
        """Name to show, falling back to the seat when no name was entered."""
        return self.name.strip() or f"Player {self.seating_position + 1}"

    def with_name(self, name: str) -> "Player":
        """Return a copy with a new name."""
        return replace(self, name=name)

    def at_seat(self, seating_position: int) -> "Player":
        """Return a copy moved to another seat."""
        return replace(self, seating_position=seating_position)

    def to_dict(self) -> dict:
        """Convert player to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "seating_position": self.seating_position,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Player":
        """Create player from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            seating_position=data["seating_position"],
        )
