"""Load and validate render settings for notes_preview conversions.

This subpackage parses a ``preview.yaml`` settings file, applies defaults and
produces the frozen :class:`RenderSettings` value the converter consumes. The
primary entry point is :func:`load_render_settings`; callers that already hold
a parsed mapping (for example, an editor's own preferences store) can use
:func:`settings_from_mapping` instead.

Examples
--------
>>> from notes_preview.config import settings_from_mapping
>>> settings = settings_from_mapping({"toc": {"enabled": True, "levels": "2-4"}})
>>> settings.toc_enabled, settings.toc_levels
(True, (2, 4))
"""

from .loader import load_render_settings, settings_from_mapping
from .models import RenderSettings, SettingsError

__all__ = [
    "RenderSettings",
    "SettingsError",
    "load_render_settings",
    "settings_from_mapping",
]
