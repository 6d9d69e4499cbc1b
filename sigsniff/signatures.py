"""
Signature Predicates: one `is_<format>(buf) -> bool` per supported type.

DESIGN RATIONALE
────────────────
Each predicate tests fixed-offset bytes in a prefix of the input:
  • Fixed-header formats: magic bytes at offset 0 (PNG, GIF, 7z, ...)
  • Offset formats      : magic deeper in the header (TAR @ 257, DICOM @ 128)
  • RIFF / FORM          : container id at 0, sub-type at offset 8
  • ISO Base Media       : ftyp brand matching (see containers.py)
  • ZIP / OLE2 based     : structured offset checks (see containers.py)

Rules every predicate follows:
  • Short input is "no match", never an IndexError.
  • No I/O, no state; the same buffer always gives the same answer.
  • Shared-magic formats (TIFF/CR2, Mach-O fat/Java class, MKV/WebM) carry
    their own secondary checks; the registry order does the rest.
"""

import struct

from .containers import (
    compare_at,
    is_isobmff,
    get_ftyp,
    is_zstd_frame_chain,
    ooxml_kind,
    odf_kind,
    ole2_kind,
    DOCX, XLSX, PPTX,
    ODF_TEXT, ODF_SPREADSHEET, ODF_PRESENTATION,
    OLE_DOC, OLE_XLS, OLE_PPT,
    OLE2_MAGIC,
)


# ══════════════════════════════════════════════════════════════
#  A P P L I C A T I O N
# ══════════════════════════════════════════════════════════════

def is_wasm(buf: bytes) -> bool:
    """WebAssembly: "\\0asm" + version 1."""
    return buf[:8] == b"\x00asm\x01\x00\x00\x00"


def is_exe(buf: bytes) -> bool:
    """DOS/PE "MZ" header."""
    return buf[:2] == b"MZ"


# DLLs share the PE header; the registry lists EXE first so this alias
# only matters for is_extension(buf, "dll").
is_dll = is_exe


def is_elf(buf: bytes) -> bool:
    return len(buf) > 52 and buf[:4] == b"\x7FELF"


def is_llvm(buf: bytes) -> bool:
    """LLVM bitcode wrapper-less "BC"."""
    return buf[:2] == b"BC"


# Fat headers and Java class files both start with CAFEBABE.  The next
# four bytes are nfat_arch for Mach-O (small) and minor/major version for
# Java (major >= 45 since JDK 1.0.2).
_CAFEBABE = b"\xCA\xFE\xBA\xBE"
_JAVA_MIN_MAJOR = 45


def is_mach(buf: bytes) -> bool:
    """Mach-O thin (32/64-bit, either endianness) or fat binary."""
    if len(buf) < 4:
        return False
    head = buf[:4]
    if head[1:] == b"\xFA\xED\xFE" and head[0] in (0xCE, 0xCF):
        return True
    if head[:3] == b"\xFE\xED\xFA" and head[3] in (0xCE, 0xCF):
        return True
    if head == _CAFEBABE and len(buf) >= 8:
        nfat_arch = struct.unpack(">I", buf[4:8])[0]
        return 0 < nfat_arch < _JAVA_MIN_MAJOR
    return False


def is_java(buf: bytes) -> bool:
    """Compiled Java class file."""
    if len(buf) < 8 or buf[:4] != _CAFEBABE:
        return False
    major = struct.unpack(">H", buf[6:8])[0]
    return major >= _JAVA_MIN_MAJOR


def is_dex(buf: bytes) -> bool:
    """Dalvik executable: "dex\\n" + 3-digit version + NUL."""
    return len(buf) > 7 and buf[:4] == b"dex\n" and buf[7] == 0x00


def is_dey(buf: bytes) -> bool:
    """Optimised Dalvik executable wrapping a dex at offset 40."""
    return len(buf) > 100 and buf[:4] == b"dey\n" and is_dex(buf[40:100])


def is_der(buf: bytes) -> bool:
    """DER encoded certificate (SEQUENCE with 2-byte length)."""
    return buf[:2] == b"\x30\x82"


# COFF machine types for object files
_COFF_MACHINES = (0x014C, 0x8664, 0xAA64, 0x01C4)


def is_coff(buf: bytes) -> bool:
    """COFF object file: known machine + no optional header."""
    if len(buf) < 20:
        return False
    machine, = struct.unpack("<H", buf[0:2])
    opt_header_size, = struct.unpack("<H", buf[16:18])
    return machine in _COFF_MACHINES and opt_header_size == 0


# ══════════════════════════════════════════════════════════════
#  I M A G E
# ══════════════════════════════════════════════════════════════

def is_jpeg(buf: bytes) -> bool:
    return buf[:3] == b"\xFF\xD8\xFF"


def is_jpeg2000(buf: bytes) -> bool:
    return len(buf) > 12 and buf[:13] == b"\x00\x00\x00\x0CjP  \r\n\x87\n\x00"


def is_png(buf: bytes) -> bool:
    return buf[:4] == b"\x89PNG"


def is_gif(buf: bytes) -> bool:
    return buf[:3] == b"GIF"


def is_webp(buf: bytes) -> bool:
    """RIFF sub-type at offset 8."""
    return compare_at(buf, b"WEBP", 8)


def _is_tiff_header(buf: bytes) -> bool:
    return buf[:4] in (b"II\x2A\x00", b"MM\x00\x2A")


def is_cr2(buf: bytes) -> bool:
    """Canon RAW: TIFF header + "CR" + major version 2 at offset 8."""
    return len(buf) > 10 and _is_tiff_header(buf) and buf[8:11] == b"CR\x02"


def is_tiff(buf: bytes) -> bool:
    """TIFF that is not a CR2 (bytes 8/9 must not read "C"/"R")."""
    return (
        len(buf) > 9
        and _is_tiff_header(buf)
        and buf[8] != 0x43
        and buf[9] != 0x52
        and not is_cr2(buf)
    )


def is_bmp(buf: bytes) -> bool:
    return buf[:2] == b"BM"


def is_jxr(buf: bytes) -> bool:
    """JPEG XR (HD Photo)."""
    return buf[:3] == b"II\xBC"


def is_psd(buf: bytes) -> bool:
    return buf[:4] == b"8BPS"


def is_ico(buf: bytes) -> bool:
    return buf[:4] == b"\x00\x00\x01\x00"


def is_jxl(buf: bytes) -> bool:
    """JPEG XL: bare codestream or ISO BMFF style container."""
    if len(buf) > 2 and buf[:2] == b"\xFF\x0A":
        return True
    return len(buf) > 12 and buf[:12] == b"\x00\x00\x00\x0CJXL \r\n\x87\n"


def is_heif(buf: bytes) -> bool:
    if not is_isobmff(buf):
        return False
    ftyp = get_ftyp(buf)
    if ftyp is None:
        return False
    major, _minor, compatible = ftyp
    if major in (b"heic", b"heix"):
        return True
    if major in (b"mif1", b"msf1"):
        return b"heic" in compatible
    return False


def is_avif(buf: bytes) -> bool:
    if not is_isobmff(buf):
        return False
    ftyp = get_ftyp(buf)
    if ftyp is None:
        return False
    major, _minor, compatible = ftyp
    if major in (b"avif", b"avis"):
        return True
    return b"avif" in compatible or b"avis" in compatible


def is_ora(buf: bytes) -> bool:
    """OpenRaster: ZIP with an "image/openraster" mimetype entry."""
    return (
        buf[:4] == b"PK\x03\x04"
        and compare_at(buf, b"mimetypeimage/openraster", 30)
    )


def is_djvu(buf: bytes) -> bool:
    return len(buf) > 14 and buf[:8] == b"AT&TFORM" and buf[12:15] == b"DJV"


# ══════════════════════════════════════════════════════════════
#  V I D E O
# ══════════════════════════════════════════════════════════════

_MP4_BRANDS = frozenset({
    b"avc1", b"dash", b"iso2", b"iso3", b"iso4", b"iso5", b"iso6",
    b"isom", b"mmp4", b"mp41", b"mp42", b"mp4v", b"mp71",
    b"MSNV", b"NDAS", b"NDSC", b"NSDH", b"NDSM", b"NDSP", b"NDSS",
    b"NDXC", b"NDXH", b"NDXM", b"NDXP", b"NDXS", b"F4V ", b"F4P ",
})


def is_mp4(buf: bytes) -> bool:
    """ISO Base Media with an MP4 major brand."""
    return len(buf) > 11 and buf[4:8] == b"ftyp" and buf[8:12] in _MP4_BRANDS


def is_m4v(buf: bytes) -> bool:
    return len(buf) > 10 and buf[4:11] == b"ftypM4V"


def is_mkv(buf: bytes) -> bool:
    """Matroska: EBML header whose DocType is "matroska"."""
    if (len(buf) > 15 and buf[:4] == b"\x1A\x45\xDF\xA3"
            and buf[5:8] == b"\x42\x82\x88" and buf[8:16] == b"matroska"):
        return True
    return len(buf) > 38 and buf[31:39] == b"matroska"


def is_webm(buf: bytes) -> bool:
    """Any other EBML stream (checked after is_mkv)."""
    return buf[:4] == b"\x1A\x45\xDF\xA3"


def is_mov(buf: bytes) -> bool:
    """QuickTime: 20-byte ftyp, or a bare moov/mdat atom."""
    if len(buf) <= 15:
        return False
    return (
        buf[:8] == b"\x00\x00\x00\x14ftyp"
        or buf[4:8] in (b"moov", b"mdat")
        or buf[12:16] == b"mdat"
    )


def is_avi(buf: bytes) -> bool:
    return len(buf) > 10 and buf[:4] == b"RIFF" and buf[8:11] == b"AVI"


def is_wmv(buf: bytes) -> bool:
    """ASF header object GUID prefix."""
    return len(buf) > 9 and buf[:10] == b"\x30\x26\xB2\x75\x8E\x66\xCF\x11\xA6\xD9"


def is_mpeg(buf: bytes) -> bool:
    """MPEG start code 00 00 01 Bx."""
    return len(buf) > 3 and buf[:3] == b"\x00\x00\x01" and 0xB0 <= buf[3] <= 0xBF


def is_flv(buf: bytes) -> bool:
    return buf[:4] == b"FLV\x01"


# ══════════════════════════════════════════════════════════════
#  A U D I O
# ══════════════════════════════════════════════════════════════

def is_midi(buf: bytes) -> bool:
    return buf[:4] == b"MThd"


def is_mp3(buf: bytes) -> bool:
    """ID3v2 tag, or an MPEG-1 Layer III frame sync without CRC."""
    return buf[:3] == b"ID3" or buf[:2] == b"\xFF\xFB"


def is_m4a(buf: bytes) -> bool:
    return len(buf) > 10 and (buf[4:11] == b"ftypM4A" or buf[:4] == b"M4A ")


def is_ogg(buf: bytes) -> bool:
    return buf[:4] == b"OggS"


def is_ogg_opus(buf: bytes) -> bool:
    """Ogg page whose first packet is an OpusHead."""
    return is_ogg(buf) and len(buf) > 35 and buf[28:36] == b"OpusHead"


def is_flac(buf: bytes) -> bool:
    return buf[:4] == b"fLaC"


def is_wav(buf: bytes) -> bool:
    return len(buf) > 11 and buf[:4] == b"RIFF" and buf[8:12] == b"WAVE"


def is_amr(buf: bytes) -> bool:
    return len(buf) > 11 and buf[:6] == b"#!AMR\n"


def is_aac(buf: bytes) -> bool:
    """ADTS frame sync (MPEG-4 / MPEG-2, no CRC)."""
    return len(buf) > 1 and buf[0] == 0xFF and buf[1] in (0xF1, 0xF9)


def is_aiff(buf: bytes) -> bool:
    return len(buf) > 11 and buf[:4] == b"FORM" and buf[8:12] == b"AIFF"


def is_dsf(buf: bytes) -> bool:
    return len(buf) > 4 and buf[:4] == b"DSD "


def is_ape(buf: bytes) -> bool:
    """Monkey's Audio."""
    return len(buf) > 4 and buf[:4] == b"MAC "


# ══════════════════════════════════════════════════════════════
#  F O N T
# ══════════════════════════════════════════════════════════════

def is_woff(buf: bytes) -> bool:
    return buf[:8] == b"wOFF\x00\x01\x00\x00"


def is_woff2(buf: bytes) -> bool:
    return buf[:8] == b"wOF2\x00\x01\x00\x00"


def is_ttf(buf: bytes) -> bool:
    return buf[:5] == b"\x00\x01\x00\x00\x00"


def is_otf(buf: bytes) -> bool:
    return buf[:5] == b"OTTO\x00"


# ══════════════════════════════════════════════════════════════
#  B O O K
# ══════════════════════════════════════════════════════════════

def is_epub(buf: bytes) -> bool:
    """ZIP whose first stored entry is mimetype = application/epub+zip."""
    return (
        len(buf) > 57
        and buf[:4] == b"PK\x03\x04"
        and compare_at(buf, b"mimetypeapplication/epub+zip", 30)
    )


def is_mobi(buf: bytes) -> bool:
    """Palm database with BOOKMOBI type/creator."""
    return len(buf) > 67 and buf[60:68] == b"BOOKMOBI"


# ══════════════════════════════════════════════════════════════
#  D O C U M E N T
# ══════════════════════════════════════════════════════════════

def is_doc(buf: bytes) -> bool:
    return ole2_kind(buf) == OLE_DOC


def is_xls(buf: bytes) -> bool:
    return ole2_kind(buf) == OLE_XLS


def is_ppt(buf: bytes) -> bool:
    return ole2_kind(buf) == OLE_PPT


def is_docx(buf: bytes) -> bool:
    return ooxml_kind(buf) == DOCX


def is_xlsx(buf: bytes) -> bool:
    return ooxml_kind(buf) == XLSX


def is_pptx(buf: bytes) -> bool:
    return ooxml_kind(buf) == PPTX


def is_odt(buf: bytes) -> bool:
    return odf_kind(buf) == ODF_TEXT


def is_ods(buf: bytes) -> bool:
    return odf_kind(buf) == ODF_SPREADSHEET


def is_odp(buf: bytes) -> bool:
    return odf_kind(buf) == ODF_PRESENTATION


# ══════════════════════════════════════════════════════════════
#  A R C H I V E
# ══════════════════════════════════════════════════════════════

def is_zip(buf: bytes) -> bool:
    """Local header, empty archive, spanned archive or WinZip pre-header."""
    if len(buf) <= 3 or buf[:2] != b"PK":
        return False
    if buf[2:4] in (b"\x03\x04", b"\x05\x06", b"\x07\x08"):
        return True
    return compare_at(buf, b"00PK\x03\x04", 2)


def is_tar(buf: bytes) -> bool:
    """POSIX ustar magic at offset 257."""
    return len(buf) > 261 and buf[257:262] == b"ustar"


def is_rar(buf: bytes) -> bool:
    """RAR 1.5-4.x (..\\x00) or RAR 5 (..\\x01)."""
    return len(buf) > 6 and buf[:6] == b"Rar!\x1A\x07" and buf[6] in (0x00, 0x01)


def is_gz(buf: bytes) -> bool:
    """gzip with the deflate method byte."""
    return buf[:3] == b"\x1F\x8B\x08"


def is_bz2(buf: bytes) -> bool:
    return buf[:3] == b"BZh"


def is_7z(buf: bytes) -> bool:
    return buf[:6] == b"7z\xBC\xAF\x27\x1C"


def is_xz(buf: bytes) -> bool:
    return buf[:6] == b"\xFD7zXZ\x00"


def is_pdf(buf: bytes) -> bool:
    return buf[:4] == b"%PDF"


def is_swf(buf: bytes) -> bool:
    """Uncompressed (FWS) or zlib compressed (CWS) Flash."""
    return buf[:3] in (b"FWS", b"CWS")


def is_rtf(buf: bytes) -> bool:
    return buf[:5] == b"{\\rtf"


def is_eot(buf: bytes) -> bool:
    """Embedded OpenType: "LP" magic at 34 + known version at 8."""
    return (
        len(buf) > 35
        and buf[34:36] == b"LP"
        and buf[8:11] in (b"\x02\x00\x01", b"\x01\x00\x00", b"\x02\x00\x02")
    )


def is_ps(buf: bytes) -> bool:
    return buf[:2] == b"%!"


def is_sqlite(buf: bytes) -> bool:
    return buf[:4] == b"SQLi"


def is_nes(buf: bytes) -> bool:
    return buf[:4] == b"NES\x1A"


def is_crx(buf: bytes) -> bool:
    return buf[:4] == b"Cr24"


def is_cab(buf: bytes) -> bool:
    """Microsoft Cabinet or InstallShield cabinet."""
    return buf[:4] in (b"MSCF", b"ISc(")


def is_deb(buf: bytes) -> bool:
    return buf[:21] == b"!<arch>\ndebian-binary"


def is_ar(buf: bytes) -> bool:
    return buf[:7] == b"!<arch>"


def is_z(buf: bytes) -> bool:
    """Unix compress (LZW) or pack (LZH)."""
    return len(buf) > 1 and buf[0] == 0x1F and buf[1] in (0xA0, 0x9D)


def is_lz(buf: bytes) -> bool:
    return buf[:4] == b"LZIP"


def is_rpm(buf: bytes) -> bool:
    return len(buf) > 96 and buf[:4] == b"\xED\xAB\xEE\xDB"


def is_dcm(buf: bytes) -> bool:
    """DICOM: 128-byte preamble then "DICM"."""
    return len(buf) > 131 and buf[128:132] == b"DICM"


def is_zst(buf: bytes) -> bool:
    """Zstandard frame, directly or behind skippable frames."""
    return is_zstd_frame_chain(buf, 0)


def is_lz4(buf: bytes) -> bool:
    return buf[:4] == b"\x04\x22\x4D\x18"


def is_msi(buf: bytes) -> bool:
    """Any OLE2 compound file (Office documents are matched earlier)."""
    return buf[:8] == OLE2_MAGIC


def is_cpio(buf: bytes) -> bool:
    """Old binary cpio (either endianness) or "newc" ASCII format."""
    if len(buf) > 1 and buf[:2] in (b"\xC7\x71", b"\x71\xC7"):
        return True
    return buf[:6] == b"070701"


# ══════════════════════════════════════════════════════════════
#  T E X T
# ══════════════════════════════════════════════════════════════

# https://mimesniff.spec.whatwg.org/ whitespace bytes
_WHITESPACE = b"\x09\x0A\x0C\x0D\x20"

_HTML_TAGS = (
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME",
    b"<H1", b"<DIV", b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE",
    b"<B", b"<BODY", b"<BR", b"<P", b"<!--",
)


def trim_leading_whitespace(buf: bytes) -> bytes:
    return buf.lstrip(_WHITESPACE)


def is_html(buf: bytes) -> bool:
    """Case-insensitive tag followed by a space or ">" (WHATWG sniffing)."""
    buf = trim_leading_whitespace(buf)
    for tag in _HTML_TAGS:
        if len(buf) <= len(tag):
            continue
        if buf[:len(tag)].upper() == tag and buf[len(tag)] in (0x20, 0x3E):
            return True
    return False


def is_xml(buf: bytes) -> bool:
    buf = trim_leading_whitespace(buf)
    return len(buf) > 5 and buf[:5].lower() == b"<?xml"


def is_shellscript(buf: bytes) -> bool:
    """Shebang line pointing at an absolute interpreter path."""
    return buf[:3] == b"#!/" or buf[:4] == b"#! /"
