"""
Named visual themes for the interactive table.

The dark preset uses the dashboard palette (#0e1117 page, #1a1f2e stripes,
#262d40 controls, #334155 borders).
"""

from typing import Any, Optional

from reactable import Theme

from stock_tables.core.exceptions import ValidationError

THEMES: dict[str, dict[str, Any]] = {
    "light": {
        "color": "#0f172a",
        "background_color": "#ffffff",
        "border_color": "#e2e8f0",
        "striped_color": "#f8fafc",
        "highlight_color": "#e0f7ff",
        "input_style": {"background-color": "#f8fafc"},
        "select_style": {"background-color": "#f8fafc"},
        "page_button_hover_style": {"background-color": "#e2e8f0"},
        "page_button_active_style": {"background-color": "#cbd5e1"},
    },
    "dark": {
        "color": "#f8fafc",
        "background_color": "#0e1117",
        "border_color": "#334155",
        "striped_color": "#1a1f2e",
        "highlight_color": "#262d40",
        "input_style": {"background-color": "#262d40"},
        "select_style": {"background-color": "#262d40"},
        "page_button_hover_style": {"background-color": "#262d40"},
        "page_button_active_style": {"background-color": "#334155"},
    },
}


def theme_names() -> list[str]:
    return sorted(THEMES)


def get_theme(name: Optional[str]) -> Optional[Theme]:
    """Build the reactable Theme for a preset name. None means no theme."""
    if name is None:
        return None

    preset = THEMES.get(name.lower())
    if preset is None:
        raise ValidationError(
            f"unknown theme '{name}', expected one of {', '.join(theme_names())}",
            field="theme",
        )

    try:
        return Theme(**preset)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"theme '{name}' is invalid: {e}", field="theme") from e
