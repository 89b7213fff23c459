"""
Tests for the rich-content interpolator.
Covers ordering, tag/placeholder resolution, void names and recovery from
unbound names.
"""

import logging

import pytest

from richinterp.bindings import Binding, BindingRegistry, wrapper, value
from richinterp.interpolation import (
    CollectingReporter,
    HTML_VOID_ELEMENTS,
    LoggingReporter,
    Interpolator,
    InterpolatorConfig,
    MarkupForm,
    interpolate,
)
from richinterp.nodes import Element


class Node:
    """Opaque rich node used as a binding value."""

    def __init__(self, label):
        self.label = label

    def __repr__(self):
        return f"Node({self.label!r})"


class TestInterpolate:
    """Test segment production."""

    def setup_method(self):
        """Set up test fixtures."""
        self.reporter = CollectingReporter()
        self.interpolator = Interpolator(reporter=self.reporter)

    def test_plain_text_is_returned_whole(self):
        """Text without markup comes back as a single literal segment."""
        text = "Nothing to see here, 1 < 2 and {braces} too"
        assert self.interpolator.interpolate(text, {}) == [text]
        assert self.reporter.messages == []

    def test_empty_template(self):
        """Empty template yields one empty literal."""
        assert self.interpolator.interpolate("", {}) == [""]

    def test_order_is_preserved(self):
        """Literal runs and rich nodes follow template order."""
        node = Node("d")
        bindings = {
            'b': wrapper(lambda text: text.upper()),
            'd': value(node),
        }

        result = self.interpolator.interpolate("A<b>x</b>C{{d}}E", bindings)

        assert result == ["A", "X", "C", node, "E"]

    def test_wrapper_receives_enclosed_text(self):
        """Wrapper is called with the literal text between the tags."""
        calls = []

        def wrap(text):
            calls.append(text)
            return Element('strong', children=[text])

        result = self.interpolator.interpolate(
            "I like <b>you</b> so much", {'b': wrapper(wrap)}
        )

        assert calls == ["you"]
        assert result[0] == "I like "
        assert result[1] == Element('strong', children=["you"])
        assert result[2] == " so much"

    def test_empty_tag_content(self):
        """A tag pair with nothing inside passes an empty string."""
        result = self.interpolator.interpolate("<b></b>", {'b': wrapper(lambda t: f"[{t}]")})
        assert result == ["[]"]

    def test_value_on_tag_discards_content(self):
        """A value bound to a tag name replaces the whole pair."""
        node = Node("link")
        result = self.interpolator.interpolate(
            "see <a>the docs</a>.", {'a': value(node)}
        )

        assert result == ["see ", node, "."]

    def test_adjacent_markup_has_no_empty_literals(self):
        """Back-to-back matches do not produce empty literal segments."""
        one, two = Node(1), Node(2)
        result = self.interpolator.interpolate("{{a}}{{b}}", {'a': value(one), 'b': value(two)})
        assert result == [one, two]

    def test_same_name_used_repeatedly(self):
        """A binding may be used by several matches."""
        result = self.interpolator.interpolate(
            "<b>1</b>-<b>2</b>", {'b': wrapper(lambda t: int(t))}
        )
        assert result == [1, "-", 2]

    def test_mismatched_tags_are_literal(self):
        """Close name must repeat the open name; otherwise it is plain text."""
        bindings = {
            'b': wrapper(lambda t: t.upper()),
            'c': wrapper(lambda t: t.upper()),
        }

        assert self.interpolator.interpolate("<b>X</c>", bindings) == ["<b>X</c>"]
        assert self.reporter.messages == []

    def test_unterminated_tag_is_literal(self):
        """An opening tag with no close is left untouched."""
        result = self.interpolator.interpolate("a <b>bold b", {'b': wrapper(str.upper)})
        assert result == ["a <b>bold b"]

    def test_invalid_names_are_literal(self):
        """Names outside the identifier class never match."""
        text = "<my-tag>x</my-tag> {{two words}} {{}} <>y</>"
        assert self.interpolator.interpolate(text, {}) == [text]

    def test_tag_content_is_not_rescanned(self):
        """Markup inside tag content is handed to the wrapper verbatim."""
        result = self.interpolator.interpolate(
            "<b>{{name}} and <i>x</i></b>",
            {'b': wrapper(lambda t: t), 'name': value(Node("n"))}
        )
        assert result == ["{{name}} and <i>x</i>"]

    def test_content_is_non_greedy(self):
        """The first matching close tag ends the pair."""
        result = self.interpolator.interpolate(
            "<b>one</b> and <b>two</b>", {'b': wrapper(lambda t: f"<{t}>")}
        )
        assert result == ["<one>", " and ", "<two>"]

    def test_nested_same_name_closes_at_first_close(self):
        """Nesting is not supported; the inner close ends the outer open."""
        result = self.interpolator.interpolate(
            "<b>a<b>c</b>d</b>", {'b': wrapper(lambda t: f"[{t}]")}
        )
        assert result == ["[a<b>c]", "d</b>"]

    def test_tag_pair_does_not_span_lines(self):
        """Tag content stops at a newline, leaving the markup literal."""
        text = "<b>first\nsecond</b>"
        assert self.interpolator.interpolate(text, {'b': wrapper(str.upper)}) == [text]

    def test_non_ascii_names_are_literal(self):
        """Only ASCII word characters form names."""
        text = "{{名前}} <é>x</é>"
        assert self.interpolator.interpolate(text, {}) == [text]

    def test_registry_is_accepted_as_bindings(self):
        """A BindingRegistry works anywhere a dict of bindings does."""
        registry = BindingRegistry({'b': wrapper(str.upper)})
        assert self.interpolator.interpolate("<b>hi</b>!", registry) == ["HI", "!"]

    def test_bindings_are_not_mutated(self):
        """The interpolator never changes the mapping it is given."""
        bindings = {'b': wrapper(str.upper), 'v': value(Node("v"))}
        snapshot = dict(bindings)

        self.interpolator.interpolate("<b>x</b>{{v}}{{missing}}", bindings)

        assert bindings == snapshot

    def test_non_binding_entry_raises_type_error(self):
        """Raw callables or nodes must be wrapped in a Binding."""
        with pytest.raises(TypeError) as exc_info:
            self.interpolator.interpolate("<b>x</b>", {'b': str.upper})

        assert "'b'" in str(exc_info.value)

    def test_literal_ranges_reconstruct_template(self):
        """Literal segments plus the consumed markup cover every character."""
        template = "Hi {{user}}, <b>read</b> <x>this</x> and <i>that</c> now"
        marker = Node("marker")
        bindings = {'user': value(marker), 'b': wrapper(lambda t: marker)}

        result = self.interpolator.interpolate(template, bindings)
        matches = self.interpolator.scan(template)

        rebuilt = []
        cursor = 0
        for match in matches:
            rebuilt.append(template[cursor:match.start])
            rebuilt.append(template[match.start:match.end])
            cursor = match.end
        rebuilt.append(template[cursor:])
        assert "".join(rebuilt) == template

        literals = [segment for segment in result if isinstance(segment, str)]
        gaps = [
            template[(matches[i - 1].end if i else 0):match.start]
            for i, match in enumerate(matches)
        ] + [template[matches[-1].end:]]
        assert literals == [gap for gap in gaps if gap]


class TestUnboundNames:
    """Unbound names are reported and dropped, never leaked."""

    def setup_method(self):
        """Set up test fixtures."""
        self.reporter = CollectingReporter()
        self.interpolator = Interpolator(reporter=self.reporter)

    def test_unbound_tag_is_dropped(self):
        """Neither the markup nor its content appears in the output."""
        result = self.interpolator.interpolate("before<x>Y</x>after", {})

        assert result == ["before", "after"]
        assert len(self.reporter.messages) == 1
        assert "'x'" in self.reporter.messages[0]

    def test_unbound_placeholder_is_dropped(self):
        """Bare placeholders without a binding are dropped as well."""
        result = self.interpolator.interpolate("Hello {{name}}!", {})

        assert result == ["Hello ", "!"]
        assert self.reporter.messages == ["no replacement bound for 'name'"]

    def test_each_unbound_match_is_reported(self):
        """One diagnostic per unresolved match."""
        self.interpolator.interpolate("{{a}} <b>x</b> {{a}}", {})
        assert len(self.reporter.messages) == 3

    def test_wrapper_cannot_fill_placeholder(self):
        """Bare placeholders resolve only to values."""
        called = []
        result = self.interpolator.interpolate(
            "x{{b}}y", {'b': wrapper(lambda t: called.append(t))}
        )

        assert result == ["x", "y"]
        assert called == []
        assert self.reporter.messages == [
            "binding 'b' wraps tag content and cannot fill placeholder {{b}}"
        ]

    def test_default_reporter_logs_warning(self, caplog):
        """Without a reporter, diagnostics go to the package logger."""
        with caplog.at_level(logging.WARNING, logger="richinterp.interpolation"):
            result = Interpolator().interpolate("a<x>b</x>c", {})

        assert result == ["a", "c"]
        assert any(
            "no replacement bound for 'x'" in record.getMessage()
            for record in caplog.records
        )
        assert any(
            record.name == "richinterp.interpolation.diagnostics"
            for record in caplog.records
        )

    def test_empty_collector_is_kept(self):
        """An empty CollectingReporter is falsy but still receives diagnostics."""
        reporter = CollectingReporter()
        assert not reporter

        interpolator = Interpolator(reporter=reporter)
        interpolator.interpolate("before<x>Y</x>after", {})

        assert interpolator.reporter is reporter
        assert reporter.messages == ["no replacement bound for 'x'"]

    def test_empty_void_config_is_kept(self):
        """A config passed explicitly is used as given."""
        config = InterpolatorConfig.with_void_names([])
        assert Interpolator(config).config is config

    def test_logging_reporter_uses_given_logger(self, caplog):
        """LoggingReporter can target a caller-chosen logger."""
        target = logging.getLogger("host.i18n")
        with caplog.at_level(logging.WARNING, logger="host.i18n"):
            Interpolator(reporter=LoggingReporter(target)).interpolate("{{x}}", {})

        assert [record.name for record in caplog.records] == ["host.i18n"]


class TestVoidNames:
    """Void names never forward their enclosed text."""

    def setup_method(self):
        """Set up test fixtures."""
        self.reporter = CollectingReporter()
        self.interpolator = Interpolator(reporter=self.reporter)

    def test_html_void_elements_are_default(self):
        """The default void set is the HTML void element list."""
        assert self.interpolator.config.void_names == HTML_VOID_ELEMENTS
        assert {'br', 'img', 'hr', 'wbr'} <= HTML_VOID_ELEMENTS
        assert 'b' not in HTML_VOID_ELEMENTS

    def test_void_value_drops_content(self):
        """A value on a void name is emitted alone."""
        node = Node("br")
        assert self.interpolator.interpolate("<br>ignored</br>", {'br': value(node)}) == [node]

    def test_void_wrapper_gets_empty_text(self):
        """A wrapper on a void name is called without the enclosed text."""
        calls = []

        def wrap(text):
            calls.append(text)
            return Element('br')

        result = self.interpolator.interpolate("line<br>ignored</br>next", {'br': wrapper(wrap)})

        assert calls == [""]
        assert result == ["line", Element('br'), "next"]
        assert all("ignored" not in str(segment) for segment in result)

    def test_custom_void_names(self):
        """Void names are configurable per interpolator."""
        interpolator = Interpolator(InterpolatorConfig.with_void_names(['icon']))
        bindings = {
            'icon': wrapper(lambda t: f"icon:{t}"),
            'br': wrapper(lambda t: f"br:{t}"),
        }

        result = interpolator.interpolate("<icon>star</icon><br>text</br>", bindings)

        assert result == ["icon:", "br:text"]


class TestScan:
    """Test markup discovery."""

    def test_scan_reports_offsets_and_forms(self):
        """Each match carries its form, name, content and offsets."""
        template = "a<b>x</b>{{c}}"
        matches = Interpolator().scan(template)

        assert [m.form for m in matches] == [MarkupForm.TAG, MarkupForm.PLACEHOLDER]
        assert matches[0].name == 'b'
        assert matches[0].content == 'x'
        assert (matches[0].start, matches[0].end) == (1, 9)
        assert matches[1].name == 'c'
        assert matches[1].content is None
        assert template[matches[1].start:matches[1].end] == "{{c}}"

    def test_scan_of_plain_text_is_empty(self):
        """No markup, no matches."""
        assert Interpolator().scan("just text") == []


class TestModuleFunction:
    """Test the module-level interpolate() helper."""

    def test_interpolate_with_reporter(self):
        """Diagnostics reach the given reporter."""
        reporter = CollectingReporter()
        result = interpolate("a{{b}}c", {}, reporter=reporter)

        assert result == ["a", "c"]
        assert len(reporter) == 1

    def test_interpolate_with_void_names(self):
        """void_names overrides the default set."""
        result = interpolate("<br>x</br>", {'br': wrapper(lambda t: t or "empty")}, void_names=[])
        assert result == ["x"]

    def test_binding_constructors_match_helpers(self):
        """wrapper()/value() are shorthands for the Binding classmethods."""
        node = Node("n")
        assert value(node) == Binding.value(node)
        assert wrapper(str.upper) == Binding.wrapper(str.upper)
