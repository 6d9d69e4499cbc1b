"""
Container Sniffing: structured-offset heuristics shared by signature predicates.

Several formats share an outer signature and only differ deeper in the
prefix.  The helpers here read just enough structure to tell them apart:

  • compare_at       : bounded byte comparison at an offset
  • ISO Base Media   : ftyp box: major brand + compatible brand list
  • Zstandard        : frame magic, or a chain of skippable frames
  • ZIP / OOXML      : walk local file headers to the Office part name
  • OpenDocument     : ZIP whose first entry is the "mimetype" file
  • OLE2             : root directory CLSID (Word / Excel / PowerPoint)

Every helper treats out-of-range offsets as "no match" and never raises on
short or malformed input.
"""

import uuid
import struct
from typing import Optional


def compare_at(buf: bytes, sub: bytes, offset: int) -> bool:
    """True if `sub` appears in `buf` exactly at `offset`."""
    end = offset + len(sub)
    if end > len(buf):
        return False
    return buf[offset:end] == sub


# ══════════════════════════════════════════════════════════════
#  ISO Base Media (MP4 family, HEIF, AVIF)
# ══════════════════════════════════════════════════════════════

def is_isobmff(buf: bytes) -> bool:
    """ftyp box at offset 0 that fits entirely inside the buffer."""
    if len(buf) < 16:
        return False
    if buf[4:8] != b"ftyp":
        return False
    ftyp_len = struct.unpack(">I", buf[0:4])[0]
    return len(buf) >= ftyp_len


def get_ftyp(buf: bytes) -> Optional[tuple[bytes, bytes, list[bytes]]]:
    """
    Return (major_brand, minor_version, compatible_brands) of an ftyp box.

    The compatible list holds `size // 4 - 4` brands at most, and only the
    complete 4-byte chunks present in the buffer.
    """
    if len(buf) < 16:
        return None
    ftyp_len = struct.unpack(">I", buf[0:4])[0]
    major = buf[8:12]
    minor = buf[12:16]

    count = max(ftyp_len // 4 - 4, 0)
    tail = buf[16:]
    available = len(tail) // 4
    compatible = [tail[i * 4:i * 4 + 4] for i in range(min(count, available))]
    return major, minor, compatible


# ══════════════════════════════════════════════════════════════
#  Zstandard frames
# ══════════════════════════════════════════════════════════════

ZSTD_MAGIC = b"\x28\xB5\x2F\xFD"
SKIPPABLE_MAGIC_MIN = 0x184D2A50
SKIPPABLE_MAGIC_MAX = 0x184D2A5F


def _is_skippable_magic(buf: bytes, offset: int) -> bool:
    if offset + 4 > len(buf):
        return False
    magic = struct.unpack("<I", buf[offset:offset + 4])[0]
    return SKIPPABLE_MAGIC_MIN <= magic <= SKIPPABLE_MAGIC_MAX


def is_zstd_frame_chain(buf: bytes, offset: int = 0) -> bool:
    """
    Zstandard frame at `offset`, possibly behind skippable frames.

    Each skippable frame is magic (4 bytes) + LE u32 length + payload.
    Following the declared lengths must land on a real frame magic; a
    length that runs past the buffer ends the chain as "no match".
    """
    while offset + 4 <= len(buf):
        if compare_at(buf, ZSTD_MAGIC, offset):
            return True
        if not _is_skippable_magic(buf, offset):
            return False
        if offset + 8 > len(buf):
            return False
        frame_len = struct.unpack("<I", buf[offset + 4:offset + 8])[0]
        next_offset = offset + 8 + frame_len
        if next_offset > len(buf):
            return False
        offset = next_offset
    return False


# ══════════════════════════════════════════════════════════════
#  ZIP based formats
# ══════════════════════════════════════════════════════════════

ZIP_LOCAL_HEADER = b"PK\x03\x04"
ZIP_NAME_OFFSET = 0x1E          # file name of the first local header
ZIP_HEADER_TAIL = 4 + 26        # signature + fixed header fields
OOXML_SEARCH_RANGE = 6000

# OOXML "kind" values
DOCX = "docx"
XLSX = "xlsx"
PPTX = "pptx"
OOXML = "ooxml"                 # Office Open XML with no recognised part


def _zip_search(buf: bytes, start: int, span: int) -> Optional[int]:
    """Index (relative to `start`) of the next local header within `span` bytes."""
    end = min(start + span, len(buf))
    if start >= end:
        return None
    idx = buf.find(ZIP_LOCAL_HEADER, start, end)
    if idx < 0:
        return None
    return idx - start


def _ooxml_part(buf: bytes, offset: int) -> Optional[str]:
    if compare_at(buf, b"word/", offset):
        return DOCX
    if compare_at(buf, b"ppt/", offset):
        return PPTX
    if compare_at(buf, b"xl/", offset):
        return XLSX
    return None


def ooxml_kind(buf: bytes) -> Optional[str]:
    """
    Classify an Office Open XML package by its part names.

    Office writes "[Content_Types].xml" / "_rels/.rels" first and the
    document folder third; LibreOffice pushes it to the fourth entry.
    Some writers add a 520-byte extra field, hence the forward search
    rather than exact header arithmetic.
    """
    if not compare_at(buf, ZIP_LOCAL_HEADER, 0):
        return None

    kind = _ooxml_part(buf, ZIP_NAME_OFFSET)
    if kind:
        return kind

    if not (compare_at(buf, b"[Content_Types].xml", ZIP_NAME_OFFSET)
            or compare_at(buf, b"_rels/.rels", ZIP_NAME_OFFSET)
            or compare_at(buf, b"docProps", ZIP_NAME_OFFSET)):
        return None

    # Skip the first entry's payload using its compressed size
    if len(buf) < 22:
        return None
    start = struct.unpack("<I", buf[18:22])[0] + 49

    # Second local header
    idx = _zip_search(buf, start, OOXML_SEARCH_RANGE)
    if idx is None:
        return None
    start += idx + ZIP_HEADER_TAIL

    # Third local header
    idx = _zip_search(buf, start, OOXML_SEARCH_RANGE)
    if idx is None:
        return None
    start += idx + ZIP_HEADER_TAIL
    kind = _ooxml_part(buf, start)
    if kind:
        return kind

    # LibreOffice ordering: fourth entry
    start += 26
    idx = _zip_search(buf, start, OOXML_SEARCH_RANGE)
    if idx is None:
        return OOXML
    start += idx + ZIP_HEADER_TAIL
    return _ooxml_part(buf, start) or OOXML


# OpenDocument kinds
ODF_TEXT = "text"
ODF_SPREADSHEET = "spreadsheet"
ODF_PRESENTATION = "presentation"

ODF_MIMETYPE_OFFSET = 0x32      # payload of the stored "mimetype" entry
ODF_READ_SIZE = ODF_MIMETYPE_OFFSET + len(b"vnd.oasis.opendocument.presentation")


def odf_kind(buf: bytes) -> Optional[str]:
    """OpenDocument subtype from the uncompressed "mimetype" first entry."""
    if not compare_at(buf, ZIP_LOCAL_HEADER, 0):
        return None
    if not compare_at(buf, b"mimetype", ZIP_NAME_OFFSET):
        return None

    for kind in (ODF_TEXT, ODF_SPREADSHEET, ODF_PRESENTATION):
        if compare_at(buf, b"vnd.oasis.opendocument." + kind.encode("ascii"),
                      ODF_MIMETYPE_OFFSET):
            return kind
    return None


# ══════════════════════════════════════════════════════════════
#  OLE2 Compound File (DOC / XLS / PPT / MSI)
# ══════════════════════════════════════════════════════════════

OLE2_MAGIC = b"\xD0\xCF\x11\xE0\xA1\xB1\x1A\xE1"
OLE2_ROOT_STORAGE = 5
OLE2_CLSID_OFFSET = 0x50        # within a 128-byte directory entry

# OLE2 kinds
OLE_DOC = "doc"
OLE_XLS = "xls"
OLE_PPT = "ppt"

OLE2_CLSIDS: dict[str, str] = {
    "00020906-0000-0000-c000-000000000046": OLE_DOC,
    "00020810-0000-0000-c000-000000000046": OLE_XLS,
    "00020820-0000-0000-c000-000000000046": OLE_XLS,
    "64818d10-4f9b-11cf-86ea-00aa00b929e8": OLE_PPT,
}


def ole2_root_clsid(buf: bytes) -> Optional[str]:
    """
    CLSID of the root storage, as a lowercase GUID string.

    Header fields: sector shift (LE u16 @ 0x1E), first directory sector
    (LE u32 @ 0x30).  Sector N starts at (N + 1) << shift.
    """
    if not compare_at(buf, OLE2_MAGIC, 0) or len(buf) < 512:
        return None

    shift = struct.unpack("<H", buf[0x1E:0x20])[0]
    if shift not in (9, 12):
        return None
    dir_sector = struct.unpack("<I", buf[0x30:0x34])[0]
    if dir_sector >= 0xFFFFFFFA:        # special sector ids
        return None

    entry = (dir_sector + 1) << shift
    if entry + 128 > len(buf):
        return None
    if buf[entry + 0x42] != OLE2_ROOT_STORAGE:
        return None

    raw = buf[entry + OLE2_CLSID_OFFSET:entry + OLE2_CLSID_OFFSET + 16]
    return str(uuid.UUID(bytes_le=raw))


def ole2_kind(buf: bytes) -> Optional[str]:
    clsid = ole2_root_clsid(buf)
    if clsid is None:
        return None
    return OLE2_CLSIDS.get(clsid)
