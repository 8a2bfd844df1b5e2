"""
renderer.py

Responsibility: Render the annotation message for a release tag from a Jinja2 template.

Available variables: `tag`, `version` (tag without the `v`), `branch`.
Unknown variables are an error rather than an empty string.
"""

from __future__ import annotations

from jinja2 import Environment, StrictUndefined, TemplateError


class RenderError(RuntimeError):
    pass


_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def render_tag_message(template: str, *, tag: str, version: str, branch: str) -> str:
    try:
        out = _env.from_string(template).render(tag=tag, version=version, branch=branch)
    except TemplateError as e:
        raise RenderError(f"Failed rendering tag message: {e}") from e
    if not out.strip():
        raise RenderError("Tag message renders to an empty string")
    return out
