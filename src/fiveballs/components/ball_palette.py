from dataclasses import dataclass, field
from typing import Dict, List, Tuple

@dataclass(slots=True)
class BallPaletteRegistry:
    """Empty tag component marking the single entity that stores the ball palette.

    The same entity also carries a BallPalette component with the color definitions.
    """
    pass


@dataclass(slots=True)
class BallPalette:
    """Canonical ball colors stored on a single entity.

    colors maps color name -> RGB tuple; draws use the insertion order of the names.
    """
    colors: Dict[str, Tuple[int, int, int]]
    names: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("Ball palette needs at least one color")
        self.names = list(self.colors.keys())

    def rgb_for(self, color: str) -> Tuple[int, int, int]:
        return self.colors[color]

    def color_names(self) -> List[str]:
        return list(self.names)
