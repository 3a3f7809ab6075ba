from dataclasses import dataclass

@dataclass(frozen=True, slots=True)
class Ball:
    """Immutable ball value stored on an occupied cell entity.

    id: allocated from the owning Board, never reused within a session.
    color: palette color name.
    """
    id: int
    color: str

    def same_color(self, other: "Ball | None") -> bool:
        return other is not None and other.color == self.color

    def __str__(self) -> str:
        return f"{self.id}: {self.color}"
