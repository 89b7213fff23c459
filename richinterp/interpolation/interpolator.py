"""
Rich-content interpolation.

Turns a resolved translation string into an ordered list of segments:
literal text runs interleaved with rich nodes produced from bindings.

Recognized markup:
- <name>content</name>  paired tag, the close name must repeat the open name
- {{name}}              bare placeholder

Anything else, including mismatched or unterminated tags, is literal text.
Tag content is opaque and is never scanned again, so nesting is not supported.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional

from richinterp.bindings.types import Binding, BindingKind
from .diagnostics import DiagnosticReporter, LoggingReporter


HTML_VOID_ELEMENTS: FrozenSet[str] = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img',
    'input', 'link', 'meta', 'param', 'source', 'track', 'wbr',
})

# Returned by resolution when a match contributes no segment
_DROPPED = object()


class MarkupForm(str, Enum):
    """Syntactic form of a markup match."""
    TAG = "tag"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class MarkupMatch:
    """
    One markup occurrence found in a template.

    Attributes:
        form: TAG or PLACEHOLDER
        name: Tag or placeholder name
        content: Text enclosed by a tag pair (None for placeholders)
        start: Offset of the first character of the markup
        end: Offset just past the last character of the markup
    """
    form: MarkupForm
    name: str
    content: Optional[str]
    start: int
    end: int


@dataclass(frozen=True)
class InterpolatorConfig:
    """
    Interpolator settings.

    Attributes:
        void_names: Tag names that never forward their enclosed text
    """
    void_names: FrozenSet[str] = field(default=HTML_VOID_ELEMENTS)

    @classmethod
    def with_void_names(cls, names: Iterable[str]) -> "InterpolatorConfig":
        return cls(void_names=frozenset(names))


class Interpolator:
    """
    Interpolates bindings into a template string.

    Stateless between calls: the instance only holds its configuration and
    the reporter that receives diagnostics.
    """

    # Tag and placeholder alternatives in one pattern; (?P=tag) ties the
    # closing name to the opening one.
    MARKUP_PATTERN = re.compile(
        r'<(?P<tag>\w+)>(?P<content>.*?)</(?P=tag)>|\{\{(?P<variable>\w+)\}\}',
        re.ASCII
    )

    def __init__(
        self,
        config: Optional[InterpolatorConfig] = None,
        reporter: Optional[DiagnosticReporter] = None
    ):
        """Initialize the interpolator."""
        self.config = config if config is not None else InterpolatorConfig()
        self.reporter = reporter if reporter is not None else LoggingReporter()

    def scan(self, template: str) -> List[MarkupMatch]:
        """
        Find every top-level markup occurrence in ``template``.

        Args:
            template: Resolved translation string

        Returns:
            Matches in ascending offset order
        """
        matches = []
        for match in self.MARKUP_PATTERN.finditer(template):
            tag = match.group('tag')
            if tag is not None:
                matches.append(MarkupMatch(
                    form=MarkupForm.TAG,
                    name=tag,
                    content=match.group('content'),
                    start=match.start(),
                    end=match.end()
                ))
            else:
                matches.append(MarkupMatch(
                    form=MarkupForm.PLACEHOLDER,
                    name=match.group('variable'),
                    content=None,
                    start=match.start(),
                    end=match.end()
                ))
        return matches

    def interpolate(self, template: str, bindings: Mapping[str, Binding]) -> List[Any]:
        """
        Interpolate ``bindings`` into ``template``.

        Args:
            template: Resolved translation string
            bindings: Name to binding mapping; never mutated

        Returns:
            Ordered segments; each is a literal ``str`` or a rich node

        Raises:
            TypeError: If a bindings entry is not a Binding
        """
        self._check_bindings(bindings)

        matches = self.scan(template)
        if not matches:
            return [template]

        segments: List[Any] = []
        cursor = 0

        for match in matches:
            if match.start > cursor:
                segments.append(template[cursor:match.start])

            resolved = self._resolve(match, bindings)
            if resolved is not _DROPPED:
                segments.append(resolved)

            cursor = match.end

        if cursor < len(template):
            segments.append(template[cursor:])

        return segments

    def _resolve(self, match: MarkupMatch, bindings: Mapping[str, Binding]) -> Any:
        """
        Resolve one match to a rich node.

        Returns:
            The node to emit, or _DROPPED if the match yields nothing
        """
        binding = bindings.get(match.name)

        if binding is None:
            self.reporter.report(f"no replacement bound for '{match.name}'")
            return _DROPPED

        if binding.kind == BindingKind.VALUE:
            return binding.node

        if match.form == MarkupForm.PLACEHOLDER:
            # No enclosed text exists to hand to a wrapper
            self.reporter.report(
                f"binding '{match.name}' wraps tag content and cannot fill "
                f"placeholder {{{{{match.name}}}}}"
            )
            return _DROPPED

        if match.name in self.config.void_names:
            return binding.fn("")
        return binding.fn(match.content)

    def _check_bindings(self, bindings: Mapping[str, Binding]) -> None:
        for name, binding in bindings.items():
            if not isinstance(binding, Binding):
                raise TypeError(
                    f"Binding '{name}' must be a Binding, got {type(binding).__name__}"
                )


def interpolate(
    template: str,
    bindings: Mapping[str, Binding],
    *,
    void_names: Optional[Iterable[str]] = None,
    reporter: Optional[DiagnosticReporter] = None
) -> List[Any]:
    """
    Interpolate ``bindings`` into ``template`` with a one-off Interpolator.

    Args:
        template: Resolved translation string
        bindings: Name to binding mapping
        void_names: Override for the void tag names (HTML void elements by default)
        reporter: Diagnostic sink (logs warnings by default)

    Returns:
        Ordered segments; each is a literal ``str`` or a rich node
    """
    config = InterpolatorConfig() if void_names is None else InterpolatorConfig.with_void_names(void_names)
    return Interpolator(config, reporter).interpolate(template, bindings)
