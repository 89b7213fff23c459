"""Inspect command: list the markup a template contains."""

import logging
from argparse import Namespace
from pathlib import Path

from richinterp.exceptions import ProfileValidationError
from richinterp.interpolation import Interpolator
from richinterp.loader import ProfileLoader
from .common import configure_logging, read_template


logger = logging.getLogger(__name__)


def inspect_template(args: Namespace) -> int:
    """
    Print one line per markup match: offsets, form, name and status.

    Without a profile the status only flags void names; with one it also
    shows the binding kind, or 'unbound'.
    """
    configure_logging(args)

    try:
        template = read_template(args)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read template: {e}")
        return 1

    profile = None
    if args.profile:
        profile_path = Path(args.profile).resolve()
        if not profile_path.exists():
            logger.error(f"Profile file not found: {profile_path}")
            return 1
        try:
            profile = ProfileLoader().load(profile_path)
        except ProfileValidationError as e:
            for error in e.errors:
                logger.error(f"Validation error: {error.message}")
            return e.exit_code

    interpolator = profile.interpolator() if profile else Interpolator()
    matches = interpolator.scan(template)
    if not matches:
        logger.info("No markup found")
        return 0

    for match in matches:
        status = []
        if profile is not None:
            binding = profile.bindings.get(match.name)
            status.append(binding.kind.value if binding else 'unbound')
        if match.name in interpolator.config.void_names:
            status.append('void')

        print(f"{match.start}-{match.end}\t{match.form.value}\t{match.name}\t{','.join(status)}".rstrip('\t'))

    return 0
