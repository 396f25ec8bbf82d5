"""Render dispatch.

Templates are Jinja2 templates. In single-output mode the template runs once
with ``headers`` and the full ``items`` list; otherwise it runs once per item
with ``headers``, ``item`` and the item's zero-based ``index``.
"""

import logging
import pathlib
from typing import Any, Dict, Iterator

import jinja2

from .errors import TemplateError
from .merge import merge_headers
from .options import RunConfig
from .sections import ParseResult

logger = logging.getLogger(__name__)

Context = Dict[str, Any]

# Errors a template can raise while rendering, besides Jinja2's own
RENDER_ERRORS = (jinja2.TemplateError, TypeError, ValueError, ArithmeticError, LookupError)


def make_environment(loader=None) -> jinja2.Environment:
    return jinja2.Environment(loader=loader, keep_trailing_newline=True)


def load_template(path) -> jinja2.Template:
    """Load the template file at ``path``.

    Includes and extends resolve relative to the template's directory.
    """
    p = pathlib.Path(path)
    logger.debug("Parsing template at '%s'...", p)
    env = make_environment(jinja2.FileSystemLoader(str(p.parent)))
    try:
        return env.get_template(p.name)
    except jinja2.TemplateNotFound as e:
        raise TemplateError(f"template not found: {p}") from e
    except jinja2.TemplateSyntaxError as e:
        raise TemplateError(f"{p}:{e.lineno}: {e.message}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateError(f"cannot read template '{p}': {e}") from e


def iter_contexts(
    result: ParseResult, single_output: bool, merge: bool = False
) -> Iterator[Context]:
    """Yield render contexts in source item order."""
    items = merge_headers(result.headers, result.items) if merge else list(result.items)
    if single_output:
        yield {'headers': result.headers, 'items': items}
        return
    for index, item in enumerate(items):
        yield {'headers': result.headers, 'item': item, 'index': index}


def render_all(template: jinja2.Template, result: ParseResult, config: RunConfig, sink) -> int:
    """Render every context and hand the text to ``sink``.

    Returns the number of renders performed.
    """
    if config.single_output:
        logger.debug("Running all items once...")
    else:
        logger.debug("Running template per item...")
    count = 0
    for context in iter_contexts(result, config.single_output, merge=config.merge_headers):
        try:
            text = template.render(**context)
        except RENDER_ERRORS as e:
            where = f"item {context['index']}" if 'index' in context else "all items"
            raise TemplateError(f"rendering failed for {where}: {e}") from e
        sink.write(context, text)
        count += 1
    logger.debug("Rendered %d output(s)", count)
    return count
