"""Helpers shared by CLI commands."""

import logging
from argparse import Namespace
from pathlib import Path


LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'error': logging.ERROR,
}


def configure_logging(args: Namespace) -> None:
    """Set up root logging from --log-level / --quiet."""
    log_level = LOG_LEVELS[getattr(args, 'log_level', 'warn')]
    if getattr(args, 'quiet', False):
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(name)s - %(levelname)s - %(message)s'
    )


def read_template(args: Namespace) -> str:
    """
    Return the template given by --template or --template-file.

    A single trailing newline in a template file is treated as the file's
    line terminator, not as template text.

    Raises:
        FileNotFoundError: If the template file does not exist
    """
    if args.template is not None:
        return args.template

    template_path = Path(args.template_file)
    if not template_path.exists():
        raise FileNotFoundError(f"Template file not found: {template_path}")

    text = template_path.read_text(encoding='utf-8')
    if text.endswith('\n'):
        text = text[:-1]
    return text
