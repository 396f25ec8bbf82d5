"""Run configuration and the options a CSV file may override.

An ``options`` section can set a small, fixed set of run settings. Each
option name maps to a setter that validates the raw string before the
configuration is touched; names without a setter are rejected.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from .errors import InvalidOptionValueError, UnknownOptionError

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    template: str = ''
    csv: str = ''
    verbose: bool = False
    single_output: bool = False
    output_template: str = ''
    output_root: str = dataclasses.field(default_factory=os.getcwd)
    merge_headers: bool = False


def parse_bool(val: Optional[str]) -> Optional[bool]:
    if val is None:
        return None
    s = str(val).strip().lower()
    if s in ("1", "t", "true", "yes", "y", "on"):
        return True
    if s in ("0", "f", "false", "no", "n", "off"):
        return False
    return None


def _set_single_output(name: str, value: str) -> Dict[str, object]:
    flag = parse_bool(value)
    if flag is None:
        raise InvalidOptionValueError(name, value, "a boolean (true/false)")
    return {'single_output': flag}


def _set_output_template(name: str, value: str) -> Dict[str, object]:
    return {'output_template': value}


def _set_output_root(name: str, value: str) -> Dict[str, object]:
    if value.strip() == '':
        raise InvalidOptionValueError(name, value, "a non-empty path")
    return {'output_root': value}


# Option name -> setter returning the RunConfig fields to replace
OPTION_SETTERS: Dict[str, Callable[[str, str], Dict[str, object]]] = {
    'os': _set_single_output,
    'ot': _set_output_template,
    'or': _set_output_root,
}


def apply_options(config: RunConfig, options: Mapping[str, str]) -> RunConfig:
    """Return a copy of ``config`` with ``options`` applied.

    All options are validated before any is applied, so a failure leaves
    nothing half-configured.
    """
    changes: Dict[str, object] = {}
    for name, value in options.items():
        setter = OPTION_SETTERS.get(name)
        if setter is None:
            raise UnknownOptionError(name)
        changes.update(setter(name, value))
    if changes:
        logger.debug("Merging options: %r", changes)
    new_config = dataclasses.replace(config, **changes)
    for f in dataclasses.fields(new_config):
        logger.debug(
            "Name: `%s`, Value: `%s`, Before options: `%s`",
            f.name,
            getattr(new_config, f.name),
            getattr(config, f.name),
        )
    return new_config
