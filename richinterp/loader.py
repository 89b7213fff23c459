"""Interpolation profile loader with strict validation."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union
import yaml

from richinterp.bindings import Binding, BindingRegistry
from richinterp.exceptions import ValidationError, ProfileValidationError
from richinterp.interpolation import (
    DiagnosticReporter,
    Interpolator,
    InterpolatorConfig,
    HTML_VOID_ELEMENTS,
)
from richinterp.nodes import Element


class PreservingLoader(yaml.SafeLoader):
    """YAML loader that keeps words like 'on', 'off', 'yes' and 'no' as strings.

    Binding names are tag names, and a tag called <on> or <no> must not turn
    into a boolean key.
    """
    pass


# Drop the implicit bool resolver for every leading character except the
# true/false ones.
PreservingLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp) for tag, regexp in resolvers
        if tag != 'tag:yaml.org,2002:bool' or first in 'tTfF'
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass
class Profile:
    """
    Loaded interpolation profile.

    Attributes:
        bindings: Named bindings declared by the profile
        config: Interpolator settings (void names)
        source: Path the profile was loaded from, if any
    """
    bindings: BindingRegistry
    config: InterpolatorConfig = field(default_factory=InterpolatorConfig)
    source: Optional[Path] = None

    def interpolator(self, reporter: Optional[DiagnosticReporter] = None) -> Interpolator:
        """Build an Interpolator configured by this profile."""
        return Interpolator(self.config, reporter)

    def interpolate(self, template: str, reporter: Optional[DiagnosticReporter] = None) -> List[Any]:
        """Interpolate ``template`` against this profile's bindings."""
        return self.interpolator(reporter).interpolate(template, self.bindings)


def _make_wrapper(tag: str, props: Dict[str, Any]) -> Callable[[str], Element]:
    """Wrapper that puts tag content inside a fresh ``tag`` element."""
    def wrap(text: str) -> Element:
        return Element(tag=tag, props=dict(props), children=[text] if text else [])
    return wrap


class ProfileLoader:
    """Loads and validates interpolation profiles from YAML."""

    SUPPORTED_VERSIONS = {"1"}
    KNOWN_FIELDS = {'version', 'name', 'void_names', 'extra_void_names', 'bindings'}
    NAME_PATTERN = re.compile(r'\w+', re.ASCII)

    def __init__(self):
        """Initialize loader."""
        self.errors: List[ValidationError] = []

    def load(self, profile_path: Union[str, Path]) -> Profile:
        """Load and validate a profile YAML file."""
        self.errors = []
        profile_path = Path(profile_path)

        try:
            with open(profile_path, 'r', encoding='utf-8') as f:
                data = yaml.load(f, Loader=PreservingLoader)
        except (OSError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load profile: {e}")
            self._raise_validation_errors()

        profile = self.load_data(data)
        profile.source = profile_path
        return profile

    def load_data(self, data: Any) -> Profile:
        """Validate an already-parsed profile document and build the Profile."""
        self.errors = []

        if data is None or not isinstance(data, dict):
            self._add_error("Profile must be a YAML object/dictionary")
            self._raise_validation_errors()

        version = data.get('version')
        if version is None:
            self._add_error("'version' field is required", 'version')
        elif not isinstance(version, str):
            self._add_error(f"'version' field must be a string, got {type(version).__name__}", 'version')
        elif version not in self.SUPPORTED_VERSIONS:
            self._add_error(
                f"Unsupported version '{version}'. Supported: {sorted(self.SUPPORTED_VERSIONS)}",
                'version'
            )

        for key in data.keys():
            if key not in self.KNOWN_FIELDS:
                self._add_error(f"Unknown field '{key}'", str(key))

        void_names = set(HTML_VOID_ELEMENTS)
        if 'void_names' in data:
            void_names = set(self._validate_names(data['void_names'], 'void_names'))
        if 'extra_void_names' in data:
            void_names |= set(self._validate_names(data['extra_void_names'], 'extra_void_names'))

        registry = BindingRegistry()
        bindings = data.get('bindings', {})
        if bindings is None:
            bindings = {}
        if not isinstance(bindings, dict):
            self._add_error("'bindings' must be a dictionary", 'bindings')
        else:
            for name, spec in bindings.items():
                binding = self._build_binding(name, spec)
                if binding is not None:
                    registry.register(name, binding)

        if self.errors:
            self._raise_validation_errors()

        return Profile(
            bindings=registry,
            config=InterpolatorConfig.with_void_names(void_names)
        )

    def _validate_names(self, names: Any, path: str) -> List[str]:
        """Validate a list of tag names; returns the valid ones."""
        if not isinstance(names, list):
            self._add_error(f"'{path}' must be a list of tag names", path)
            return []

        valid = []
        for i, name in enumerate(names):
            if not isinstance(name, str):
                self._add_error(f"'{path}[{i}]' must be a string, got {type(name).__name__}", f"{path}[{i}]")
            elif not self.NAME_PATTERN.fullmatch(name):
                self._add_error(f"'{path}[{i}]' is not a valid tag name: {name!r}", f"{path}[{i}]")
            else:
                valid.append(name)
        return valid

    def _build_binding(self, name: Any, spec: Any) -> Optional[Binding]:
        """Validate one binding entry and build it; None if invalid."""
        path = f"bindings.{name}"

        if not isinstance(name, str):
            self._add_error(
                f"Binding name {name!r} must be a string (quote it in YAML)", path
            )
            return None
        if not self.NAME_PATTERN.fullmatch(name):
            self._add_error(f"Invalid binding name '{name}'", path)
            return None
        if not isinstance(spec, dict):
            self._add_error(f"Binding '{name}' must be a dictionary", path)
            return None

        has_wrap = 'wrap' in spec
        has_element = 'element' in spec
        if has_wrap and has_element:
            self._add_error(f"Binding '{name}': 'wrap' and 'element' are mutually exclusive", path)
            return None
        if not (has_wrap or has_element):
            self._add_error(f"Binding '{name}' requires 'wrap' or 'element'", path)
            return None

        if has_wrap:
            unknown = set(spec) - {'wrap', 'props'}
            if unknown:
                self._add_error(f"Binding '{name}': unknown fields {sorted(str(key) for key in unknown)}", path)
            tag = spec['wrap']
            if not isinstance(tag, str) or not tag:
                self._add_error(f"Binding '{name}': 'wrap' must be a non-empty tag name", f"{path}.wrap")
                return None
            props = self._validate_props(spec.get('props', {}), f"{path}.props")
            if props is None:
                return None
            return Binding.wrapper(_make_wrapper(tag, props))

        unknown = set(spec) - {'element'}
        if unknown:
            self._add_error(f"Binding '{name}': unknown fields {sorted(str(key) for key in unknown)}", path)
        element = self._build_element(spec['element'], f"{path}.element")
        if element is None:
            return None
        return Binding.value(element)

    def _build_element(self, spec: Any, path: str) -> Optional[Element]:
        """Recursively build an Element from its YAML spec."""
        if not isinstance(spec, dict):
            self._add_error("Element must be a dictionary", path)
            return None

        unknown = set(spec) - {'tag', 'props', 'children'}
        if unknown:
            self._add_error(f"Element has unknown fields {sorted(str(key) for key in unknown)}", path)

        tag = spec.get('tag')
        if not isinstance(tag, str) or not tag:
            self._add_error("Element requires a non-empty 'tag'", f"{path}.tag")
            return None

        props = self._validate_props(spec.get('props', {}), f"{path}.props")
        if props is None:
            return None

        children = spec.get('children', [])
        if not isinstance(children, list):
            self._add_error("'children' must be a list", f"{path}.children")
            return None

        built: List[Union[str, Element]] = []
        for i, child in enumerate(children):
            if isinstance(child, str):
                built.append(child)
            else:
                nested = self._build_element(child, f"{path}.children[{i}]")
                if nested is None:
                    return None
                built.append(nested)

        return Element(tag=tag, props=props, children=built)

    def _validate_props(self, props: Any, path: str) -> Optional[Dict[str, Any]]:
        """Props must be a mapping with string keys."""
        if props is None:
            return {}
        if not isinstance(props, dict):
            self._add_error("'props' must be a dictionary", path)
            return None
        bad_keys = [key for key in props if not isinstance(key, str)]
        if bad_keys:
            self._add_error(f"'props' keys must be strings, got {bad_keys!r}", path)
            return None
        return dict(props)

    def _add_error(self, message: str, path: str = "", exit_code: int = 2):
        """Add validation error."""
        self.errors.append(ValidationError(message, path, exit_code))

    def _raise_validation_errors(self):
        """Raise ProfileValidationError with accumulated errors."""
        raise ProfileValidationError(self.errors)
