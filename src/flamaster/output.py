"""Output sinks for rendered text."""

import logging
import pathlib
import sys
from typing import List, Optional, TextIO, Union

import jinja2

from .errors import OutputError, TemplateError
from .options import RunConfig
from .render import RENDER_ERRORS, Context, make_environment

logger = logging.getLogger(__name__)


class StdoutSink:
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def write(self, context: Context, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()


class FileSink:
    """Write each render to a file named by a Jinja2 filename template.

    The filename template sees the same context as the main template, e.g.
    ``{{ item.name }}.txt`` or ``page-{{ index }}.html``. Names resolve
    under ``root`` and may not escape it.
    """

    def __init__(self, root: Union[str, pathlib.Path], name_template: str):
        self.root = pathlib.Path(root)
        try:
            self.name_template = make_environment().from_string(name_template)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateError(f"output filename template: {e.message}") from e
        self.written: List[pathlib.Path] = []

    def path_for(self, context: Context) -> pathlib.Path:
        try:
            name = self.name_template.render(**context).strip()
        except RENDER_ERRORS as e:
            raise TemplateError(f"output filename template: {e}") from e
        if name == '':
            raise OutputError("output filename template rendered an empty name")
        root = self.root.resolve()
        path = (root / name).resolve()
        if root not in path.parents:
            raise OutputError(f"output path '{name}' is outside of '{root}'")
        return path

    def write(self, context: Context, text: str) -> None:
        path = self.path_for(context)
        if path in self.written:
            raise OutputError(f"output path '{path}' was already written by an earlier render")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding='utf-8')
        except OSError as e:
            raise OutputError(f"cannot write '{path}': {e}") from e
        logger.debug("Wrote %s", path)
        self.written.append(path)


def make_sink(config: RunConfig, stream: Optional[TextIO] = None):
    """Stdout when no output filename template is configured, files otherwise."""
    if config.output_template == '':
        return StdoutSink(stream)
    return FileSink(config.output_root, config.output_template)
