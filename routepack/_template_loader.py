"""
Private Jinja2 Template Loader

Templates render JavaScript and dotenv files, not HTML, so autoescaping is
off; values are interpolated with the ``tojson`` filter instead.

IMPORTANT: This is a private module and should only be imported
internally by routepack.
"""

from pathlib import Path
from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_DIR = Path(__file__).parent / "templates"

jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=False,
    auto_reload=False,
    undefined=StrictUndefined,  # Fail loudly on undefined variables
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True
)


def render(template_name: str, **context) -> str:
    return jinja_env.get_template(template_name).render(**context)


__all__ = ['jinja_env', 'TEMPLATES_DIR', 'render']
