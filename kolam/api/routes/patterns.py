"""
Pattern catalogue API endpoints.
"""

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from kolam.core.logging import get_logger
from kolam.geometry import motifs
from kolam.patterns.assembler import get_pattern, list_patterns

logger = get_logger(__name__)

router = APIRouter()


class VinePreviewRequest(BaseModel):
    """Vine preview request."""
    start_x: float = Field(..., description="Start x")
    start_y: float = Field(..., description="Start y")
    end_x: float = Field(..., description="End x")
    end_y: float = Field(..., description="End y")
    complexity: float = Field(5.0, gt=0, description="Wobble frequency")

    model_config = {
        "json_schema_extra": {
            "example": {
                "start_x": 100,
                "start_y": 100,
                "end_x": 150,
                "end_y": 150,
                "complexity": 4
            }
        }
    }


class FlowerPreviewRequest(BaseModel):
    """Flower preview request."""
    center_x: float = Field(225.0, description="Center x")
    center_y: float = Field(225.0, description="Center y")
    scale: float = Field(1.0, gt=0, description="Size multiplier")


@router.get("/patterns")
async def get_patterns():
    """
    Get the pattern catalogue.

    Returns:
        Metadata for every pattern, in selection order
    """
    return {
        "patterns": list_patterns()
    }


@router.get("/patterns/{index}")
async def get_pattern_detail(
    index: int,
    include_strokes: bool = Query(False, description="Include stroke geometry")
):
    """
    Get one pattern by catalogue index.

    Returns:
        Pattern metadata, optionally with its full stroke list
    """
    pattern = get_pattern(index)
    return {
        "index": index,
        **pattern.to_dict(include_strokes=include_strokes)
    }


@router.get("/motifs")
async def get_motifs():
    """Get list of available motif generators."""
    return {
        "motifs": motifs.get_available_motifs()
    }


@router.post("/motifs/vine")
async def preview_vine(request: VinePreviewRequest):
    """Generate vine points for preview."""
    points = motifs.vine(
        request.start_x, request.start_y,
        request.end_x, request.end_y,
        request.complexity
    )
    return {
        "points": [[p.x, p.y] for p in points],
        "count": len(points)
    }


@router.post("/motifs/flower")
async def preview_flower(request: FlowerPreviewRequest):
    """Generate flower strokes for preview."""
    strokes = motifs.flower(request.center_x, request.center_y, request.scale)
    logger.debug("flower_preview_generated", strokes=len(strokes), scale=request.scale)
    return {
        "strokes": [stroke.to_dict() for stroke in strokes]
    }
