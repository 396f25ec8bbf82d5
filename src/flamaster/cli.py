#!/usr/bin/env python3
"""flamaster command line

Usage: flamaster [options] template csv

Reads a sectioned CSV file, applies its options section on top of the
command line flags, then renders the template once per item (default) or
once for all items (-os).
"""

import argparse
import logging
import os
import sys

from . import __version__
from .errors import FlamasterError
from .options import RunConfig, apply_options
from .output import make_sink
from .render import load_template, render_all
from .sections import parse_csv

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s %(filename)s:%(lineno)d: %(message)s',
            datefmt='%H:%M:%S',
            stream=sys.stderr,
            force=True,
        )
        logger.debug("Verbose logging enabled.")
    else:
        logging.basicConfig(
            level=logging.WARNING, format='%(message)s', stream=sys.stderr, force=True
        )


def config_from_args(args) -> RunConfig:
    return RunConfig(
        template=args.template,
        csv=args.csv,
        verbose=args.verbose,
        single_output=args.single_output,
        output_template=args.output_template,
        output_root=args.output_root,
        merge_headers=args.merge_headers,
    )


def run(config: RunConfig, stream=None) -> int:
    """Load, parse, apply options, render. Returns the number of renders."""
    template = load_template(config.template)
    result = parse_csv(config.csv)
    if result.options:
        config = apply_options(config, result.options)
    sink = make_sink(config, stream)
    return render_all(template, result, config, sink)


def build_parser():
    p = argparse.ArgumentParser(
        prog='flamaster',
        description='Render a template for the items of a sectioned CSV file.',
    )
    p.add_argument('template', help='Jinja2 template file')
    p.add_argument('csv', help='sectioned CSV input file')
    p.add_argument('-v', '--verbose', action='store_true', help='be very verbose')
    p.add_argument(
        '-os',
        '--single-output',
        action='store_true',
        help='process all items within a single template run',
    )
    p.add_argument(
        '-ot',
        '--output-template',
        default='',
        help='template string for generating output file names; '
        'if empty, output is printed to stdout',
    )
    p.add_argument(
        '-or',
        '--output-root',
        default=os.getcwd(),
        help='directory to save output files in (default: current directory)',
    )
    p.add_argument(
        '-m',
        '--merge-headers',
        action='store_true',
        help='merge global headers into every item (item values win)',
    )
    p.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    try:
        run(config_from_args(args))
    except FlamasterError as e:
        if not args.verbose:
            print("Please run with -v to see where this happened.", file=sys.stderr)
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == '__main__':
    main()
