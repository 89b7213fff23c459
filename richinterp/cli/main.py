"""Main CLI entry point for richinterp."""

import argparse
import sys
from typing import Optional

from .commands import render_template, inspect_template


def _add_template_source(parser: argparse.ArgumentParser) -> None:
    """Add the mutually exclusive --template / --template-file options."""
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--template',
        type=str,
        metavar='TEXT',
        help='Template string to interpolate'
    )
    source.add_argument(
        '--template-file',
        type=str,
        metavar='PATH',
        help='Path to a UTF-8 file holding the template'
    )


def _add_logging_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the richinterp CLI."""
    parser = argparse.ArgumentParser(
        prog='richinterp',
        description='Rich-content interpolation for localized templates'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Render command
    render_parser = subparsers.add_parser('render', help='Interpolate a template against a profile')
    render_parser.add_argument(
        'profile',
        type=str,
        help='Path to profile YAML file'
    )
    _add_template_source(render_parser)
    render_parser.add_argument(
        '--format',
        choices=['text', 'json'],
        default='text',
        help='Output format'
    )
    render_parser.add_argument(
        '--strict',
        action='store_true',
        help='Exit with status 3 if any diagnostic is reported'
    )
    _add_logging_options(render_parser)

    # Inspect command
    inspect_parser = subparsers.add_parser('inspect', help='List the markup found in a template')
    _add_template_source(inspect_parser)
    inspect_parser.add_argument(
        '--profile',
        type=str,
        help='Profile YAML file used to resolve binding status'
    )
    _add_logging_options(inspect_parser)

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'render':
        return render_template(parsed_args)
    elif parsed_args.command == 'inspect':
        return inspect_template(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
