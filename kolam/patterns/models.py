"""
Pattern: a complete, named kolam design.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from kolam.geometry.stroke import Stroke


@dataclass(frozen=True)
class Pattern:
    """Background plus the mandatory, ordered draw plan."""
    id: str
    name: str
    description: str
    grid_size: int
    dot_spacing: float
    background: str
    strokes: Tuple[Stroke, ...]

    @property
    def stroke_count(self) -> int:
        return len(self.strokes)

    def metadata(self) -> Dict:
        """Display metadata without the stroke geometry."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'grid_size': self.grid_size,
            'dot_spacing': self.dot_spacing,
            'background': self.background,
            'stroke_count': self.stroke_count
        }

    def to_dict(self, include_strokes: bool = False) -> Dict:
        data = self.metadata()
        if include_strokes:
            data['strokes'] = [stroke.to_dict() for stroke in self.strokes]
        return data
