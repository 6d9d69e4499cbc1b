"""
Type Descriptor: one recognisable file type and how to recognise it.

DESIGN RATIONALE
────────────────
A descriptor pairs static metadata (category, media type, extension) with a
byte predicate.  Descriptors that can also be recognised straight from a
stream carry a second predicate plus the window size it reads.

  • Equality is the (category, media_type, extension) triple: two
    descriptors built from different predicates still compare equal.
  • Stream predicates are NOT written per format: stream_adapter() wraps any
    buffer predicate with a bounded window read.
"""

from dataclasses import dataclass, field
from typing import Optional, Callable, BinaryIO

from .stream import read_window


# ── Categories ──
APPLICATION = "Application"
ARCHIVE = "Archive"
AUDIO = "Audio"
BOOK = "Book"
DOCUMENT = "Document"
FONT = "Font"
IMAGE = "Image"
VIDEO = "Video"
TEXT = "Text"
CUSTOM = "Custom"           # default for user-added descriptors

ALL_CATEGORIES: tuple[str, ...] = (
    APPLICATION, ARCHIVE, AUDIO, BOOK, DOCUMENT,
    FONT, IMAGE, VIDEO, TEXT, CUSTOM,
)

Matcher = Callable[[bytes], bool]
StreamMatcher = Callable[[BinaryIO], bool]


def stream_adapter(matcher: Matcher, size: int) -> StreamMatcher:
    """
    Adapt a buffer predicate for stream use.

    Reads up to `size` bytes from the current position and hands whatever
    arrived to `matcher`; a short stream is judged on the bytes it has,
    exactly like a short buffer.  Read errors propagate.
    """
    def _match(stream: BinaryIO) -> bool:
        return matcher(read_window(stream, size))

    _match.__name__ = f"{getattr(matcher, '__name__', 'matcher')}_stream"
    _match.__doc__ = f"Stream form of {getattr(matcher, '__name__', 'matcher')} ({size} bytes)."
    return _match


@dataclass(frozen=True)
class TypeDescriptor:
    """Describes one recognisable file type."""
    category: str
    media_type: str
    extension: str                      # without the leading dot
    matcher: Matcher = field(compare=False, repr=False)
    stream_matcher: Optional[StreamMatcher] = field(
        default=None, compare=False, repr=False)
    min_read_size: int = field(default=0, compare=False)   # sizing hint only

    def __post_init__(self):
        if self.category not in ALL_CATEGORIES:
            raise ValueError(
                f"unknown category {self.category!r} "
                f"(expected one of {', '.join(ALL_CATEGORIES)})"
            )
        if self.min_read_size < 0:
            raise ValueError("min_read_size must be >= 0")

    @classmethod
    def builtin(
        cls,
        category: str,
        media_type: str,
        extension: str,
        matcher: Matcher,
        read_size: int = 0,
    ) -> "TypeDescriptor":
        """Build a registry entry; a non-zero `read_size` enables stream matching."""
        if read_size:
            return cls(category, media_type, extension, matcher,
                       stream_adapter(matcher, read_size), read_size)
        return cls(category, media_type, extension, matcher)

    @property
    def supports_stream(self) -> bool:
        return self.stream_matcher is not None

    def matches(self, buf: bytes) -> bool:
        return self.matcher(buf)

    def matches_stream(self, stream: BinaryIO) -> bool:
        """Run the stream predicate; False when the type is buffer-only."""
        if self.stream_matcher is None:
            return False
        return self.stream_matcher(stream)

    def __str__(self) -> str:
        return self.media_type
