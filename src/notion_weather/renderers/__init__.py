"""Pure rendering functions: structured data -> HTML strings.

All renderers follow the same pattern:
  - Input: dict or dataclass (provider payloads, render models)
  - Output: str (HTML fragment, or a full page for ``build_page_html``)
  - No side effects, no I/O, no Prefect decorators

Used by ``widget.py``, which owns the loading/success/error state machine
and hands the resulting HTML to a view.

Public API:
  - widget: build_render_model, build_widget_html, build_error_html,
    build_loading_html, build_page_html, build_widget_url
  - weather_utils: icon_for, convert_wind_speed, wind_direction,
    format_forecast_date, round_half_up

Templates live in ``templates/``: fragments (``widget``, ``error``,
``loading``) plus ``page.html.j2``, which carries the CSS and wraps a
fragment into a standalone document.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
