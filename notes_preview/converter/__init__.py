"""Convert note markup into preview HTML.

The public surface is :func:`convert_markup` (and :class:`MarkupConverter`
for callers that hold a custom engine configuration). The submodules expose
the individual steps for reuse and testing.
"""

from .engine import DEFAULT_ENGINE, EngineConfig, RenderOverlay, render_markdown
from .features import detect_features
from .models import FeatureFlags, RenderContext, RenderResult, SlideSegment
from .pipeline import MarkupConverter, convert_markup

__all__ = [
    "DEFAULT_ENGINE",
    "EngineConfig",
    "FeatureFlags",
    "MarkupConverter",
    "RenderContext",
    "RenderOverlay",
    "RenderResult",
    "SlideSegment",
    "convert_markup",
    "detect_features",
    "render_markdown",
]
