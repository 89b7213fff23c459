"""
Default rich node type and reference segment consumers.

The interpolator treats nodes as opaque. ``Element`` is what profile
bindings produce, and the helpers here turn a segment list into something
a terminal or a JSON consumer can show.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


@dataclass
class Element:
    """
    Structured content unit, shaped like a markup element.

    Attributes:
        tag: Element name (e.g., 'strong', 'a')
        props: Element attributes
        children: Text runs and nested elements, in order
    """
    tag: str
    props: Dict[str, Any] = field(default_factory=dict)
    children: List[Union[str, "Element"]] = field(default_factory=list)

    def text_content(self) -> str:
        """Concatenate the text of all descendants."""
        return "".join(
            child if isinstance(child, str) else child.text_content()
            for child in self.children
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        return {
            'tag': self.tag,
            'props': dict(self.props),
            'children': [
                child if isinstance(child, str) else child.to_dict()
                for child in self.children
            ],
        }


def segment_text(segment: Any) -> str:
    """Text of one segment as a reader would see it."""
    if isinstance(segment, str):
        return segment
    if isinstance(segment, Element):
        return segment.text_content()
    return str(segment) if segment is not None else ""


def segments_to_text(segments: List[Any]) -> str:
    """Flatten segments into the plain text a reader would see."""
    return "".join(segment_text(segment) for segment in segments)


def segments_to_data(segments: List[Any]) -> List[Any]:
    """
    Convert segments to JSON-ready data.

    Literal text stays a string, elements become dicts, and any other node
    falls back to its ``repr``.
    """
    data = []
    for segment in segments:
        if isinstance(segment, str):
            data.append(segment)
        elif isinstance(segment, Element):
            data.append(segment.to_dict())
        else:
            data.append({'node': repr(segment)})
    return data
