__version__ = '0.2.0'

from .errors import (
    FlamasterError as FlamasterError,
    MalformedInputError as MalformedInputError,
    InputReadError as InputReadError,
    UnknownOptionError as UnknownOptionError,
    InvalidOptionValueError as InvalidOptionValueError,
    TemplateError as TemplateError,
    OutputError as OutputError,
)
from .sections import (
    Section as Section,
    SectionParser as SectionParser,
    ParseResult as ParseResult,
    parse_records as parse_records,
    parse_csv as parse_csv,
)
from .merge import merge_headers as merge_headers
from .options import (
    RunConfig as RunConfig,
    OPTION_SETTERS as OPTION_SETTERS,
    apply_options as apply_options,
    parse_bool as parse_bool,
)
from .render import (
    load_template as load_template,
    iter_contexts as iter_contexts,
    render_all as render_all,
)
from .output import (
    StdoutSink as StdoutSink,
    FileSink as FileSink,
    make_sink as make_sink,
)
