"""
Builtin Type Registry: the ordered table of every recognised file type.

ORDER MATTERS
─────────────
Classification returns the FIRST descriptor whose predicate accepts the
input, so more specific formats sit ahead of the generic ones they overlap:
  • EXE before DLL           : same "MZ" header; DLL is reachable only by
                                extension lookup
  • CR2 before TIFF          : CR2 is a TIFF with a "CR" marker
  • MKV before WebM          : both EBML; MKV checks the DocType
  • OOXML / ODF before ZIP   : DOCUMENT precedes ARCHIVE
  • DOC / XLS / PPT before MSI: all OLE2 compound files
  • DEB before AR            : a .deb is an "!<arch>" archive

Exported:
  • BUILTIN_TYPES               : tuple of TypeDescriptor in match order
  • get_all_categories()        : categories present in the table
  • get_types_by_category(cat)  : descriptors of one category
  • get_extensions_for_category : sorted extensions of one category

The read size given to each entry is the largest offset its predicate
inspects; zero means the type is only recognised from buffers.  Formats
that scan forward (Zstandard skippable frames, whitespace before HTML and
XML) read the whole prefix window.
"""

from . import signatures as sig
from .containers import ODF_READ_SIZE
from .stream import PREFIX_LIMIT
from .descriptor import (
    TypeDescriptor,
    APPLICATION, ARCHIVE, AUDIO, BOOK, DOCUMENT,
    FONT, IMAGE, VIDEO, TEXT,
)

_t = TypeDescriptor.builtin


# ══════════════════════════════════════════════════════════════
#  A P P L I C A T I O N
# ══════════════════════════════════════════════════════════════

_APPLICATION_TYPES = (
    _t(APPLICATION, "application/wasm", "wasm", sig.is_wasm, 8),
    _t(APPLICATION, "application/vnd.microsoft.portable-executable", "exe", sig.is_exe, 2),
    _t(APPLICATION, "application/vnd.microsoft.portable-executable", "dll", sig.is_dll, 2),
    _t(APPLICATION, "application/x-executable", "elf", sig.is_elf, 53),
    _t(APPLICATION, "application/x-llvm", "bc", sig.is_llvm, 2),
    _t(APPLICATION, "application/x-mach-binary", "mach", sig.is_mach, 8),
    _t(APPLICATION, "application/java", "class", sig.is_java, 8),
    _t(APPLICATION, "application/vnd.android.dex", "dex", sig.is_dex, 8),
    _t(APPLICATION, "application/vnd.android.dey", "dey", sig.is_dey, 101),
    _t(APPLICATION, "application/x-x509-ca-cert", "der", sig.is_der, 2),
    _t(APPLICATION, "application/x-executable", "obj", sig.is_coff, 20),
)


# ══════════════════════════════════════════════════════════════
#  I M A G E
# ══════════════════════════════════════════════════════════════

_IMAGE_TYPES = (
    _t(IMAGE, "image/jpeg", "jpg", sig.is_jpeg, 3),
    _t(IMAGE, "image/jp2", "jp2", sig.is_jpeg2000, 13),
    _t(IMAGE, "image/png", "png", sig.is_png, 4),
    _t(IMAGE, "image/gif", "gif", sig.is_gif, 3),
    _t(IMAGE, "image/webp", "webp", sig.is_webp, 12),
    _t(IMAGE, "image/x-canon-cr2", "cr2", sig.is_cr2, 11),
    _t(IMAGE, "image/tiff", "tif", sig.is_tiff, 10),
    _t(IMAGE, "image/bmp", "bmp", sig.is_bmp, 2),
    _t(IMAGE, "image/vnd.ms-photo", "jxr", sig.is_jxr, 3),
    _t(IMAGE, "image/vnd.adobe.photoshop", "psd", sig.is_psd, 4),
    _t(IMAGE, "image/vnd.microsoft.icon", "ico", sig.is_ico, 4),
    _t(IMAGE, "image/heif", "heif", sig.is_heif, 256),
    _t(IMAGE, "image/avif", "avif", sig.is_avif, 256),
    _t(IMAGE, "image/jxl", "jxl", sig.is_jxl, 13),
    _t(IMAGE, "image/openraster", "ora", sig.is_ora, 54),
    _t(IMAGE, "image/vnd.djvu", "djvu", sig.is_djvu, 15),
)


# ══════════════════════════════════════════════════════════════
#  V I D E O
# ══════════════════════════════════════════════════════════════

_VIDEO_TYPES = (
    _t(VIDEO, "video/mp4", "mp4", sig.is_mp4, 12),
    _t(VIDEO, "video/x-m4v", "m4v", sig.is_m4v, 11),
    _t(VIDEO, "video/x-matroska", "mkv", sig.is_mkv, 39),
    _t(VIDEO, "video/webm", "webm", sig.is_webm, 4),
    _t(VIDEO, "video/quicktime", "mov", sig.is_mov, 16),
    _t(VIDEO, "video/x-msvideo", "avi", sig.is_avi, 11),
    _t(VIDEO, "video/x-ms-wmv", "wmv", sig.is_wmv, 10),
    _t(VIDEO, "video/mpeg", "mpg", sig.is_mpeg, 4),
    _t(VIDEO, "video/x-flv", "flv", sig.is_flv, 4),
)


# ══════════════════════════════════════════════════════════════
#  A U D I O
# ══════════════════════════════════════════════════════════════

_AUDIO_TYPES = (
    _t(AUDIO, "audio/midi", "mid", sig.is_midi, 4),
    _t(AUDIO, "audio/mpeg", "mp3", sig.is_mp3, 3),
    _t(AUDIO, "audio/m4a", "m4a", sig.is_m4a, 11),
    _t(AUDIO, "audio/opus", "opus", sig.is_ogg_opus, 36),
    _t(AUDIO, "audio/ogg", "ogg", sig.is_ogg, 4),
    _t(AUDIO, "audio/x-flac", "flac", sig.is_flac, 4),
    _t(AUDIO, "audio/x-wav", "wav", sig.is_wav, 12),
    _t(AUDIO, "audio/amr", "amr", sig.is_amr, 12),
    _t(AUDIO, "audio/aac", "aac", sig.is_aac, 2),
    _t(AUDIO, "audio/x-aiff", "aiff", sig.is_aiff, 12),
    _t(AUDIO, "audio/x-dsf", "dsf", sig.is_dsf, 5),
    _t(AUDIO, "audio/x-ape", "ape", sig.is_ape, 5),
)


# ══════════════════════════════════════════════════════════════
#  F O N T
# ══════════════════════════════════════════════════════════════

_FONT_TYPES = (
    _t(FONT, "application/font-woff", "woff", sig.is_woff, 8),
    _t(FONT, "application/font-woff", "woff2", sig.is_woff2, 8),
    _t(FONT, "application/font-sfnt", "ttf", sig.is_ttf, 5),
    _t(FONT, "application/font-sfnt", "otf", sig.is_otf, 5),
)


# ══════════════════════════════════════════════════════════════
#  B O O K
# ══════════════════════════════════════════════════════════════

_BOOK_TYPES = (
    _t(BOOK, "application/epub+zip", "epub", sig.is_epub, 58),
    _t(BOOK, "application/x-mobipocket-ebook", "mobi", sig.is_mobi, 68),
)


# ══════════════════════════════════════════════════════════════
#  D O C U M E N T
# ══════════════════════════════════════════════════════════════
# OLE2 and OOXML need directory walks and a forward ZIP search, so
# they're buffer-only.  ODF needs a fixed window.

_DOCUMENT_TYPES = (
    _t(DOCUMENT, "application/msword", "doc", sig.is_doc),
    _t(DOCUMENT,
       "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
       "docx", sig.is_docx),
    _t(DOCUMENT, "application/vnd.ms-excel", "xls", sig.is_xls),
    _t(DOCUMENT,
       "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
       "xlsx", sig.is_xlsx),
    _t(DOCUMENT, "application/vnd.ms-powerpoint", "ppt", sig.is_ppt),
    _t(DOCUMENT,
       "application/vnd.openxmlformats-officedocument.presentationml.presentation",
       "pptx", sig.is_pptx),
    _t(DOCUMENT, "application/vnd.oasis.opendocument.text",
       "odt", sig.is_odt, ODF_READ_SIZE),
    _t(DOCUMENT, "application/vnd.oasis.opendocument.spreadsheet",
       "ods", sig.is_ods, ODF_READ_SIZE),
    _t(DOCUMENT, "application/vnd.oasis.opendocument.presentation",
       "odp", sig.is_odp, ODF_READ_SIZE),
)


# ══════════════════════════════════════════════════════════════
#  A R C H I V E
# ══════════════════════════════════════════════════════════════

_ARCHIVE_TYPES = (
    _t(ARCHIVE, "application/zip", "zip", sig.is_zip, 8),
    _t(ARCHIVE, "application/x-tar", "tar", sig.is_tar, 262),
    _t(ARCHIVE, "application/vnd.rar", "rar", sig.is_rar, 7),
    _t(ARCHIVE, "application/gzip", "gz", sig.is_gz, 3),
    _t(ARCHIVE, "application/x-bzip2", "bz2", sig.is_bz2, 3),
    _t(ARCHIVE, "application/x-7z-compressed", "7z", sig.is_7z, 6),
    _t(ARCHIVE, "application/x-xz", "xz", sig.is_xz, 6),
    _t(ARCHIVE, "application/pdf", "pdf", sig.is_pdf, 4),
    _t(ARCHIVE, "application/x-shockwave-flash", "swf", sig.is_swf, 3),
    _t(ARCHIVE, "application/rtf", "rtf", sig.is_rtf, 5),
    _t(ARCHIVE, "application/octet-stream", "eot", sig.is_eot, 36),
    _t(ARCHIVE, "application/postscript", "ps", sig.is_ps, 2),
    _t(ARCHIVE, "application/vnd.sqlite3", "sqlite", sig.is_sqlite, 4),
    _t(ARCHIVE, "application/x-nintendo-nes-rom", "nes", sig.is_nes, 4),
    _t(ARCHIVE, "application/x-google-chrome-extension", "crx", sig.is_crx, 4),
    _t(ARCHIVE, "application/vnd.ms-cab-compressed", "cab", sig.is_cab, 4),
    _t(ARCHIVE, "application/vnd.debian.binary-package", "deb", sig.is_deb, 21),
    _t(ARCHIVE, "application/x-unix-archive", "ar", sig.is_ar, 7),
    _t(ARCHIVE, "application/x-compress", "Z", sig.is_z, 2),
    _t(ARCHIVE, "application/x-lzip", "lz", sig.is_lz, 4),
    _t(ARCHIVE, "application/x-rpm", "rpm", sig.is_rpm, 97),
    _t(ARCHIVE, "application/dicom", "dcm", sig.is_dcm, 132),
    # Skippable frames are followed only as far as the prefix window
    _t(ARCHIVE, "application/zstd", "zst", sig.is_zst, PREFIX_LIMIT),
    _t(ARCHIVE, "application/x-lz4", "lz4", sig.is_lz4, 4),
    _t(ARCHIVE, "application/x-ole-storage", "msi", sig.is_msi, 8),
    _t(ARCHIVE, "application/x-cpio", "cpio", sig.is_cpio, 6),
)


# ══════════════════════════════════════════════════════════════
#  T E X T
# ══════════════════════════════════════════════════════════════

_TEXT_TYPES = (
    # Leading whitespace is skipped within the prefix window
    _t(TEXT, "text/html", "html", sig.is_html, PREFIX_LIMIT),
    _t(TEXT, "text/xml", "xml", sig.is_xml, PREFIX_LIMIT),
    _t(TEXT, "text/x-shellscript", "sh", sig.is_shellscript, 4),
)


BUILTIN_TYPES: tuple[TypeDescriptor, ...] = (
    _APPLICATION_TYPES
    + _IMAGE_TYPES
    + _VIDEO_TYPES
    + _AUDIO_TYPES
    + _FONT_TYPES
    + _BOOK_TYPES
    + _DOCUMENT_TYPES
    + _ARCHIVE_TYPES
    + _TEXT_TYPES
)


# ═════════════════════════════════════════════════════════════
#  Convenience helpers
# ═════════════════════════════════════════════════════════════

def get_all_categories() -> list[str]:
    """Return sorted unique categories of the builtin table."""
    return sorted(set(t.category for t in BUILTIN_TYPES))


def get_types_by_category(category: str) -> list[TypeDescriptor]:
    return [t for t in BUILTIN_TYPES if t.category == category]


def get_extensions_for_category(category: str) -> list[str]:
    return sorted(set(t.extension for t in BUILTIN_TYPES if t.category == category))
