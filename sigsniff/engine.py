"""
Matcher Engine: classify bytes, streams and files against the type table.

DESIGN RATIONALE
────────────────
1. One ordered search:  custom descriptors (insertion order) → builtins
   (registry order).  The first predicate that accepts the input wins.
2. Copy-on-write customs:  add_matcher() swaps in a new tuple under a lock,
   so readers iterate a stable snapshot and never need the lock.
3. Streams are sniffed descriptor by descriptor.  Each attempt reads its
   own window; a miss rewinds to the position captured on entry.  A hit
   leaves the stream wherever the predicate stopped.
4. Read errors surface to the caller as OSError; "no match" is None.
5. A process-wide default engine (get_default) is built lazily and is
   read-only: custom types go on a private Sniffer instance.
"""

import os
import logging
import threading
from typing import Optional, BinaryIO, Iterator, Union

from .descriptor import (
    TypeDescriptor, Matcher, StreamMatcher,
    APPLICATION, ARCHIVE, AUDIO, BOOK, DOCUMENT,
    FONT, IMAGE, VIDEO, TEXT, CUSTOM,
)
from .registry import BUILTIN_TYPES
from .stream import PREFIX_LIMIT, tell_start, rewind, read_path_prefix

logger = logging.getLogger(__name__)


class ReadOnlySnifferError(RuntimeError):
    """Raised when add_matcher() is called on the shared default engine."""


def _as_bytes(buf) -> bytes:
    if isinstance(buf, bytes):
        return buf
    return bytes(buf)


class Sniffer:
    """
    Ordered collection of type descriptors plus the dispatch logic.

    Usage:
        sniffer = Sniffer()
        sniffer.add_matcher("foo/bar", "foo", lambda b: b[:3] == b"FOO")
        kind = sniffer.classify(data)
        if kind:
            print(kind.media_type, kind.extension)
    """

    PREFIX_LIMIT = PREFIX_LIMIT

    def __init__(self, prefix_limit: Optional[int] = None):
        self.prefix_limit = prefix_limit if prefix_limit is not None else self.PREFIX_LIMIT
        if self.prefix_limit <= 0:
            raise ValueError("prefix_limit must be > 0")
        self._custom: tuple[TypeDescriptor, ...] = ()
        self._lock = threading.Lock()
        self._read_only = False

    def __repr__(self) -> str:
        return (f"<Sniffer custom={len(self._custom)} "
                f"builtin={len(BUILTIN_TYPES)} read_only={self._read_only}>")

    # ──────────────────────────────────────────────────────────
    #  Registry access
    # ──────────────────────────────────────────────────────────

    @property
    def custom_types(self) -> tuple[TypeDescriptor, ...]:
        return self._custom

    def iter_types(self) -> Iterator[TypeDescriptor]:
        """All descriptors in match order (custom first)."""
        yield from self._custom
        yield from BUILTIN_TYPES

    def add_matcher(
        self,
        media_type: str,
        extension: str,
        matcher: Matcher,
        stream_matcher: Optional[StreamMatcher] = None,
        min_read_size: int = 0,
        category: str = CUSTOM,
    ) -> TypeDescriptor:
        """
        Register a custom type ahead of every builtin.

        Strings are not validated and duplicates are allowed; the earliest
        added descriptor wins among customs.
        """
        if self._read_only:
            raise ReadOnlySnifferError(
                "the default engine is read-only; create a Sniffer() instead")

        kind = TypeDescriptor(category, media_type, extension, matcher,
                              stream_matcher, min_read_size)
        with self._lock:
            self._custom = self._custom + (kind,)
        logger.info("Custom matcher added: %s (.%s) [%s]",
                    media_type, extension, category)
        return kind

    def lookup_by_extension(self, extension: str) -> Optional[TypeDescriptor]:
        for kind in self.iter_types():
            if kind.extension == extension:
                return kind
        return None

    def lookup_by_media_type(self, media_type: str) -> Optional[TypeDescriptor]:
        for kind in self.iter_types():
            if kind.media_type == media_type:
                return kind
        return None

    def has_extension(self, extension: str) -> bool:
        return self.lookup_by_extension(extension) is not None

    def has_media_type(self, media_type: str) -> bool:
        return self.lookup_by_media_type(media_type) is not None

    # ══════════════════════════════════════════════════════════
    #  Buffer classification
    # ══════════════════════════════════════════════════════════

    def classify(self, buf) -> Optional[TypeDescriptor]:
        """First descriptor matching `buf`, or None (always None for b"")."""
        buf = _as_bytes(buf)
        if not buf:
            return None
        for kind in self.iter_types():
            if kind.matches(buf):
                logger.debug("Matched %s (%d byte buffer)", kind.media_type, len(buf))
                return kind
        return None

    def classify_path(
        self, path: Union[str, "os.PathLike[str]"],
    ) -> Optional[TypeDescriptor]:
        """Classify the first `prefix_limit` bytes of a file."""
        return self.classify(read_path_prefix(path, self.prefix_limit))

    def is_extension(self, buf, extension: str) -> bool:
        buf = _as_bytes(buf)
        return any(k.matches(buf) for k in self.iter_types()
                   if k.extension == extension)

    def is_mime(self, buf, media_type: str) -> bool:
        buf = _as_bytes(buf)
        return any(k.matches(buf) for k in self.iter_types()
                   if k.media_type == media_type)

    def is_category(self, buf, category: str) -> bool:
        buf = _as_bytes(buf)
        return any(k.matches(buf) for k in self.iter_types()
                   if k.category == category)

    def is_app(self, buf) -> bool:
        return self.is_category(buf, APPLICATION)

    def is_archive(self, buf) -> bool:
        return self.is_category(buf, ARCHIVE)

    def is_audio(self, buf) -> bool:
        return self.is_category(buf, AUDIO)

    def is_book(self, buf) -> bool:
        return self.is_category(buf, BOOK)

    def is_document(self, buf) -> bool:
        return self.is_category(buf, DOCUMENT)

    def is_font(self, buf) -> bool:
        return self.is_category(buf, FONT)

    def is_image(self, buf) -> bool:
        return self.is_category(buf, IMAGE)

    def is_video(self, buf) -> bool:
        return self.is_category(buf, VIDEO)

    def is_text(self, buf) -> bool:
        return self.is_category(buf, TEXT)

    def is_custom(self, buf) -> bool:
        return self.is_category(buf, CUSTOM)

    # ══════════════════════════════════════════════════════════
    #  Stream classification
    # ══════════════════════════════════════════════════════════

    def _first_stream_match(self, stream: BinaryIO, candidates) -> Optional[TypeDescriptor]:
        """
        Try each stream-capable candidate, rewinding after every miss.

        Only read errors escape.  A failed rewind is logged and the search
        continues from wherever the stream is.
        """
        start = tell_start(stream)
        for kind in candidates:
            if not kind.supports_stream:
                continue
            if kind.matches_stream(stream):
                logger.debug("Matched %s from stream", kind.media_type)
                return kind
            rewind(stream, start)
        return None

    def classify_stream(self, stream: BinaryIO) -> Optional[TypeDescriptor]:
        return self._first_stream_match(stream, self.iter_types())

    def is_extension_stream(self, stream: BinaryIO, extension: str) -> bool:
        candidates = (k for k in self.iter_types() if k.extension == extension)
        return self._first_stream_match(stream, candidates) is not None

    def is_mime_stream(self, stream: BinaryIO, media_type: str) -> bool:
        candidates = (k for k in self.iter_types() if k.media_type == media_type)
        return self._first_stream_match(stream, candidates) is not None

    def is_category_stream(self, stream: BinaryIO, category: str) -> bool:
        candidates = (k for k in self.iter_types() if k.category == category)
        return self._first_stream_match(stream, candidates) is not None


# ═════════════════════════════════════════════════════════════
#  Shared default engine
# ═════════════════════════════════════════════════════════════

_default: Optional[Sniffer] = None
_default_lock = threading.Lock()


def get_default() -> Sniffer:
    """Process-wide read-only engine holding only the builtin types."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                sniffer = Sniffer()
                sniffer._read_only = True
                _default = sniffer
    return _default
