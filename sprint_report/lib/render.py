from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Mapping, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

logger = logging.getLogger(__name__)

def points(value: Any) -> str:
    """Format a story-point figure without a trailing '.0'."""
    return f"{float(value):g}"

def make_environment(template_dir: Union[str, Path]) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "htm", "xml"]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["points"] = points
    return env

def render_report(
    context: Mapping[str, Any],
    template_path: Union[str, Path],
    output_path: Union[str, Path],
) -> Path:
    """Render ``template_path`` with ``context`` and write the HTML to ``output_path``.

    Raises:
        jinja2.TemplateNotFound: the template file does not exist.
        jinja2.UndefinedError: the template uses a slot missing from ``context``.
        OSError: the output cannot be written.
    """
    template_path = Path(template_path)
    output_path = Path(output_path)
    template = make_environment(template_path.parent).get_template(template_path.name)
    html = template.render(**context)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    logger.info("Report written to %s (%d bytes)", output_path, len(html.encode("utf-8")))
    return output_path
