# sigsniff: Magic-number file type detection
# Pure-Python classification from the leading bytes of a buffer, stream or file.
#
# Architecture (bottom → top):
#   stream      : Bounded window reads, position capture, tolerant rewinds
#   containers  : Structured-offset helpers (ISO BMFF, ZIP/OOXML, ODF, OLE2, zstd)
#   signatures  : One is_<format>() predicate per supported type
#   descriptor  : TypeDescriptor + category constants
#   registry    : Ordered builtin table (BUILTIN_TYPES)
#   engine      : Sniffer: classify / lookups / custom matchers
#   imaging     : Optional Pillow header inspection for images
#
# The functions below delegate to the shared read-only engine; create a
# Sniffer() to register custom types.

from .descriptor import (
    TypeDescriptor,
    APPLICATION, ARCHIVE, AUDIO, BOOK, DOCUMENT,
    FONT, IMAGE, VIDEO, TEXT, CUSTOM, ALL_CATEGORIES,
)
from .engine import Sniffer, ReadOnlySnifferError, get_default

__version__ = "0.1.0"


def classify(buf):
    return get_default().classify(buf)


def classify_stream(stream):
    return get_default().classify_stream(stream)


def classify_path(path):
    return get_default().classify_path(path)


def is_extension(buf, extension):
    return get_default().is_extension(buf, extension)


def is_mime(buf, media_type):
    return get_default().is_mime(buf, media_type)


def is_category(buf, category):
    return get_default().is_category(buf, category)


def is_app(buf):
    return get_default().is_app(buf)


def is_archive(buf):
    return get_default().is_archive(buf)


def is_audio(buf):
    return get_default().is_audio(buf)


def is_book(buf):
    return get_default().is_book(buf)


def is_document(buf):
    return get_default().is_document(buf)


def is_font(buf):
    return get_default().is_font(buf)


def is_image(buf):
    return get_default().is_image(buf)


def is_video(buf):
    return get_default().is_video(buf)


def is_text(buf):
    return get_default().is_text(buf)


def is_extension_stream(stream, extension):
    return get_default().is_extension_stream(stream, extension)


def is_mime_stream(stream, media_type):
    return get_default().is_mime_stream(stream, media_type)


def is_category_stream(stream, category):
    return get_default().is_category_stream(stream, category)


def has_extension(extension):
    return get_default().has_extension(extension)


def has_media_type(media_type):
    return get_default().has_media_type(media_type)


def lookup_by_extension(extension):
    return get_default().lookup_by_extension(extension)


def lookup_by_media_type(media_type):
    return get_default().lookup_by_media_type(media_type)


__all__ = [
    "TypeDescriptor", "Sniffer", "ReadOnlySnifferError", "get_default",
    "APPLICATION", "ARCHIVE", "AUDIO", "BOOK", "DOCUMENT",
    "FONT", "IMAGE", "VIDEO", "TEXT", "CUSTOM", "ALL_CATEGORIES",
    "classify", "classify_stream", "classify_path",
    "is_extension", "is_mime", "is_category",
    "is_app", "is_archive", "is_audio", "is_book", "is_document",
    "is_font", "is_image", "is_video", "is_text",
    "is_extension_stream", "is_mime_stream", "is_category_stream",
    "has_extension", "has_media_type",
    "lookup_by_extension", "lookup_by_media_type",
]
