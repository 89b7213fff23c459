"""Render command: preview a template interpolated against a profile."""

import json
import logging
from argparse import Namespace
from pathlib import Path

from richinterp.exceptions import ProfileValidationError
from richinterp.interpolation import CollectingReporter, LoggingReporter
from richinterp.loader import ProfileLoader
from richinterp.nodes import segments_to_data, segments_to_text
from .common import configure_logging, read_template


logger = logging.getLogger(__name__)


def render_template(args: Namespace) -> int:
    """
    Interpolate a template against a profile and print the result.

    Exit codes:
        0 on success, 1 for missing or unreadable input, 2 for profile
        validation errors, 3 when --strict and diagnostics were reported
    """
    configure_logging(args)

    profile_path = Path(args.profile).resolve()
    if not profile_path.exists():
        logger.error(f"Profile file not found: {profile_path}")
        return 1

    try:
        template = read_template(args)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read template: {e}")
        return 1

    logger.debug(f"Loading profile: {profile_path}")
    try:
        profile = ProfileLoader().load(profile_path)
    except ProfileValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code

    reporter = CollectingReporter(forward=LoggingReporter())
    segments = profile.interpolate(template, reporter)

    if args.format == 'json':
        print(json.dumps(segments_to_data(segments), ensure_ascii=False, indent=2))
    else:
        print(segments_to_text(segments))

    if args.strict and reporter.messages:
        logger.error(f"{len(reporter.messages)} diagnostic(s) reported in strict mode")
        return 3

    return 0
