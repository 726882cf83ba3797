from .transcoder.pipeline import finalize_after_optimization, prepare_for_optimization
from .types import DEFAULT_OPTIONS, PreparedFragment, TransformOptions

__all__ = [
    "prepare_for_optimization",
    "finalize_after_optimization",
    "PreparedFragment",
    "TransformOptions",
    "DEFAULT_OPTIONS",
]
