from .geometry import classify_frame, classify_shape
from .pipeline import FrameResult, PipelineState, process_frame
from .stabilizer import TemporalStabilizer
from .trail import TrailBuffer
from .types import ClassifiedFrame, DrawRequest, HslColor, Landmark, Shape, StabilizedFrame, TrailEntry

__all__ = [
    "classify_frame",
    "classify_shape",
    "FrameResult",
    "PipelineState",
    "process_frame",
    "TemporalStabilizer",
    "TrailBuffer",
    "ClassifiedFrame",
    "DrawRequest",
    "HslColor",
    "Landmark",
    "Shape",
    "StabilizedFrame",
    "TrailEntry",
]
