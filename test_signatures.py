"""
Test every builtin signature against a hand-built canonical sample.

Each sample is the smallest header that identifies its format, padded with
zeros, and is chosen so that no type earlier in the match order accepts it.
Also tests: container helpers (ISO BMFF, zstd chains, OOXML, ODF, OLE2) and
the cross-format tie-breaks (Java vs Mach-O, CR2 vs TIFF, MKV vs WebM).
"""
import struct
import uuid

from sigsniff import classify, get_default
from sigsniff import signatures as sig
from sigsniff.containers import (
    get_ftyp, is_isobmff, is_zstd_frame_chain, ooxml_kind, odf_kind,
    ole2_root_clsid, DOCX, OOXML,
)
from sigsniff.registry import (
    BUILTIN_TYPES, get_all_categories, get_types_by_category,
    get_extensions_for_category,
)

PAD_TO = 600


def pad(data: bytes, size: int = PAD_TO) -> bytes:
    return data.ljust(size, b"\x00")


def zip_entry(name: bytes, data: bytes) -> bytes:
    """Stored ZIP local file header + name + payload."""
    header = struct.pack("<HHHHHIIIHH", 20, 0, 0, 0, 0, 0,
                         len(data), len(data), len(name), 0)
    return b"PK\x03\x04" + header + name + data


def ooxml(part: bytes) -> bytes:
    return (zip_entry(b"[Content_Types].xml", b"<Types/>")
            + zip_entry(b"_rels/.rels", b"<Relationships/>")
            + zip_entry(part, b"<document/>"))


def ole2(clsid: str = None) -> bytes:
    """512-byte OLE2 header + one directory sector holding the root entry."""
    header = bytearray(512)
    header[0:8] = b"\xD0\xCF\x11\xE0\xA1\xB1\x1A\xE1"
    header[0x1E:0x20] = struct.pack("<H", 9)
    header[0x30:0x34] = struct.pack("<I", 0)
    if clsid is None:
        return bytes(header)
    entry = bytearray(512)
    entry[0:10] = "Root Entry".encode("utf-16-le")[:10]
    entry[0x42] = 5
    entry[0x50:0x60] = uuid.UUID(clsid).bytes_le
    return bytes(header) + bytes(entry)


def ftyp(major: bytes, *compatible: bytes) -> bytes:
    body = major + b"\x00\x00\x00\x00" + b"".join(compatible)
    return struct.pack(">I", 8 + len(body)) + b"ftyp" + body


def _eot() -> bytes:
    buf = bytearray(pad(struct.pack("<I", PAD_TO)))
    buf[8:11] = b"\x02\x00\x01"
    buf[34:36] = b"LP"
    return bytes(buf)


SAMPLES = {
    # ── Application ──
    "wasm": b"\x00asm\x01\x00\x00\x00",
    "exe": b"MZ\x90\x00\x03\x00",
    "elf": b"\x7FELF\x02\x01\x01\x00",
    "bc": b"BC\xC0\xDE",
    "mach": b"\xCF\xFA\xED\xFE\x07\x00\x00\x01",
    "class": b"\xCA\xFE\xBA\xBE\x00\x00\x00\x34",
    "dex": b"dex\n035\x00",
    "dey": pad(b"dey\n036\x00", 40) + b"dex\n035\x00",
    "der": b"\x30\x82\x01\x0A",
    "obj": struct.pack("<HHIIIHH", 0x8664, 1, 0, 0, 0, 0, 0),
    # ── Image ──
    "jpg": b"\xFF\xD8\xFF\xE0\x00\x10JFIF",
    "jp2": b"\x00\x00\x00\x0CjP  \r\n\x87\n\x00\x00\x00\x14ftypjp2 ",
    "png": b"\x89PNG\r\n\x1A\n",
    "gif": b"GIF89a",
    "webp": b"RIFF" + struct.pack("<I", 100) + b"WEBPVP8 ",
    "cr2": b"II\x2A\x00\x10\x00\x00\x00CR\x02\x00",
    "tif": b"II\x2A\x00\x08\x00\x00\x00",
    "bmp": b"BM\x36\x00\x0C\x00",
    "jxr": b"II\xBC\x01",
    "psd": b"8BPS\x00\x01",
    "ico": b"\x00\x00\x01\x00\x01\x00",
    "heif": ftyp(b"heic", b"mif1", b"heic"),
    "avif": ftyp(b"avif", b"mif1", b"avif"),
    "jxl": b"\xFF\x0A\xFA",
    "ora": zip_entry(b"mimetype", b"image/openraster"),
    "djvu": b"AT&TFORM" + struct.pack(">I", 100) + b"DJVUINFO",
    # ── Video ──
    "mp4": ftyp(b"isom", b"isom", b"iso2"),
    "m4v": ftyp(b"M4V ", b"M4V ", b"isom"),
    "mkv": b"\x1A\x45\xDF\xA3\x93\x42\x82\x88matroska",
    "webm": b"\x1A\x45\xDF\xA3\x9F\x42\x86\x81\x01\x42\x82\x84webm",
    "mov": b"\x00\x00\x00\x14ftypqt  ",
    "avi": b"RIFF" + struct.pack("<I", 100) + b"AVI LIST",
    "wmv": b"\x30\x26\xB2\x75\x8E\x66\xCF\x11\xA6\xD9\x00\xAA\x00\x62\xCE\x6C",
    "mpg": b"\x00\x00\x01\xBA\x44",
    "flv": b"FLV\x01\x05",
    # ── Audio ──
    "mid": b"MThd\x00\x00\x00\x06",
    "mp3": b"ID3\x04\x00",
    "m4a": ftyp(b"M4A ", b"M4A ", b"isom"),
    "opus": pad(b"OggS\x00\x02", 28) + b"OpusHead",
    "ogg": pad(b"OggS\x00\x02", 28) + b"\x01vorbis",
    "flac": b"fLaC\x00\x00\x00\x22",
    "wav": b"RIFF" + struct.pack("<I", 100) + b"WAVEfmt ",
    "amr": b"#!AMR\n",
    "aac": b"\xFF\xF1\x50\x80",
    "aiff": b"FORM" + struct.pack(">I", 100) + b"AIFFCOMM",
    "dsf": b"DSD \x1C\x00",
    "ape": b"MAC \x96\x0F",
    # ── Font ──
    "woff": b"wOFF\x00\x01\x00\x00",
    "woff2": b"wOF2\x00\x01\x00\x00",
    "ttf": b"\x00\x01\x00\x00\x00\x0A",
    "otf": b"OTTO\x00\x0A",
    # ── Book ──
    "epub": zip_entry(b"mimetype", b"application/epub+zip"),
    "mobi": pad(b"sample", 60) + b"BOOKMOBI",
    # ── Document ──
    "doc": ole2("00020906-0000-0000-c000-000000000046"),
    "xls": ole2("00020820-0000-0000-c000-000000000046"),
    "ppt": ole2("64818d10-4f9b-11cf-86ea-00aa00b929e8"),
    "docx": ooxml(b"word/document.xml"),
    "xlsx": ooxml(b"xl/workbook.xml"),
    "pptx": ooxml(b"ppt/presentation.xml"),
    "odt": zip_entry(b"mimetype", b"application/vnd.oasis.opendocument.text"),
    "ods": zip_entry(b"mimetype", b"application/vnd.oasis.opendocument.spreadsheet"),
    "odp": zip_entry(b"mimetype", b"application/vnd.oasis.opendocument.presentation"),
    # ── Archive ──
    "zip": zip_entry(b"hello.txt", b"hi"),
    "tar": pad(b"hello.txt", 257) + b"ustar\x0000",
    "rar": b"Rar!\x1A\x07\x01\x00",
    "gz": b"\x1F\x8B\x08\x00",
    "bz2": b"BZh91AY&SY",
    "7z": b"7z\xBC\xAF\x27\x1C\x00\x04",
    "xz": b"\xFD7zXZ\x00\x00",
    "pdf": b"%PDF-1.7\n",
    "swf": b"FWS\x0A",
    "rtf": b"{\\rtf1\\ansi",
    "eot": _eot(),
    "ps": b"%!PS-Adobe-3.0",
    "sqlite": b"SQLite format 3\x00",
    "nes": b"NES\x1A\x02",
    "crx": b"Cr24\x02\x00",
    "cab": b"MSCF\x00\x00",
    "deb": b"!<arch>\ndebian-binary   ",
    "ar": b"!<arch>\nfoo.o/          ",
    "Z": b"\x1F\x9D\x90",
    "lz": b"LZIP\x01",
    "rpm": b"\xED\xAB\xEE\xDB\x03\x00",
    "dcm": pad(b"", 128) + b"DICM",
    "zst": b"\x28\xB5\x2F\xFD\x04\x00",
    "lz4": b"\x04\x22\x4D\x18\x64\x40",
    "msi": ole2(),
    "cpio": b"070701000000",
    # ── Text ──
    "html": b"  <!DOCTYPE html>\n<html>",
    "xml": b"<?xml version=\"1.0\"?><root/>",
    "sh": b"#!/bin/sh\necho hi\n",
}

SAMPLES = {ext: pad(data) for ext, data in SAMPLES.items()}


def main():
    print("=" * 60)
    print("  sigsniff — Signature Test Suite")
    print("=" * 60)
    print()

    test_every_builtin_has_a_sample()
    test_builtin_samples()
    test_registry_helpers()
    test_java_vs_mach_fat()
    test_cr2_vs_tiff()
    test_mkv_vs_webm()
    test_jxl_forms()
    test_short_inputs()
    test_isobmff_helpers()
    test_zstd_skippable_chain()
    test_ooxml_libreoffice_order()
    test_odf_and_ole2_helpers()
    test_html_sniffing()

    print()
    print("=" * 60)
    print("  ALL TESTS PASSED ✅")
    print("=" * 60)


def test_every_builtin_has_a_sample():
    """DLL is the only type without a sample, EXE shadows it."""
    print("── Test: sample coverage ──")
    missing = {t.extension for t in BUILTIN_TYPES} - set(SAMPLES) - {"dll"}
    assert not missing, f"no sample for {sorted(missing)}"
    print("  ✅ sample coverage: PASS")


def test_builtin_samples():
    print("── Test: builtin samples ──")
    for ext, data in SAMPLES.items():
        kind = classify(data)
        assert kind is not None, f"{ext}: no match"
        assert kind.extension == ext, f"{ext}: matched {kind.extension}"
        assert get_default().is_extension(data, ext)
        assert get_default().is_category(data, kind.category)
    print(f"  ✅ {len(SAMPLES)} builtin samples: PASS")


def test_registry_helpers():
    print("── Test: registry helpers ──")
    cats = get_all_categories()
    assert cats == sorted(cats)
    assert "Custom" not in cats
    assert "Image" in cats and "Text" in cats
    images = get_types_by_category("Image")
    assert images[0].extension == "jpg"
    assert all(t.category == "Image" for t in images)
    fonts = get_extensions_for_category("Font")
    assert fonts == ["otf", "ttf", "woff", "woff2"]
    assert get_extensions_for_category("Custom") == []
    print("  ✅ registry helpers: PASS")


def test_java_vs_mach_fat():
    print("── Test: CAFEBABE disambiguation ──")
    fat = b"\xCA\xFE\xBA\xBE\x00\x00\x00\x02" + b"\x00" * 32
    java = b"\xCA\xFE\xBA\xBE\x00\x00\x00\x3D" + b"\x00" * 32
    assert sig.is_mach(fat) and not sig.is_java(fat)
    assert sig.is_java(java) and not sig.is_mach(java)
    assert classify(fat).extension == "mach"
    assert classify(java).extension == "class"
    # Zero architectures is neither
    assert not sig.is_mach(b"\xCA\xFE\xBA\xBE\x00\x00\x00\x00")
    print("  ✅ CAFEBABE disambiguation: PASS")


def test_cr2_vs_tiff():
    print("── Test: CR2 vs TIFF ──")
    assert sig.is_cr2(SAMPLES["cr2"]) and not sig.is_tiff(SAMPLES["cr2"])
    assert sig.is_tiff(SAMPLES["tif"]) and not sig.is_cr2(SAMPLES["tif"])
    big_endian = pad(b"MM\x00\x2A\x00\x00\x00\x08")
    assert classify(big_endian).extension == "tif"
    print("  ✅ CR2 vs TIFF: PASS")


def test_mkv_vs_webm():
    print("── Test: MKV vs WebM ──")
    assert sig.is_webm(SAMPLES["mkv"])      # both EBML; order decides
    assert not sig.is_mkv(SAMPLES["webm"])
    # DocType found at the alternate offset
    alt = b"\x1A\x45\xDF\xA3" + b"\x01" * 27 + b"matroska"
    assert sig.is_mkv(alt)
    print("  ✅ MKV vs WebM: PASS")


def test_jxl_forms():
    print("── Test: JPEG XL forms ──")
    assert sig.is_jxl(b"\xFF\x0A\x00")
    assert not sig.is_jxl(b"\xFF\x0A")         # bare marker, nothing after it
    container = b"\x00\x00\x00\x0CJXL \r\n\x87\n"
    assert not sig.is_jxl(container)           # signature box with no payload
    assert sig.is_jxl(container + b"\x00")
    assert classify(pad(container + b"\x00\x00\x00\x14ftypjxl ")).extension == "jxl"
    print("  ✅ JPEG XL forms: PASS")


def test_short_inputs():
    """Every predicate must say False (not raise) on truncated input."""
    print("── Test: short inputs ──")
    for kind in BUILTIN_TYPES:
        for size in (0, 1, 3, 7, 15):
            kind.matches(SAMPLES.get(kind.extension, SAMPLES["exe"])[:size])
    assert classify(b"\xFF\xD8") is None
    assert classify(b"") is None
    print("  ✅ short inputs: PASS")


def test_isobmff_helpers():
    print("── Test: ISO BMFF ──")
    box = ftyp(b"mif1", b"mif1", b"heic")
    assert is_isobmff(box)
    major, minor, compatible = get_ftyp(box)
    assert major == b"mif1"
    assert minor == b"\x00\x00\x00\x00"
    assert compatible == [b"mif1", b"heic"]
    assert sig.is_heif(box)
    # Declared box larger than the buffer
    assert not is_isobmff(box[:-1])
    # Partial trailing brand is ignored
    _, _, compatible = get_ftyp(struct.pack(">I", 40) + box[4:] + b"av")
    assert compatible == [b"mif1", b"heic"]
    # AVIF via compatible brand only
    assert sig.is_avif(ftyp(b"mif1", b"avif"))
    print("  ✅ ISO BMFF: PASS")


def test_zstd_skippable_chain():
    print("── Test: zstd skippable frames ──")
    frame = b"\x28\xB5\x2F\xFD\x04\x00"
    skippable = struct.pack("<II", 0x184D2A50, 4) + b"meta"
    assert is_zstd_frame_chain(frame)
    assert is_zstd_frame_chain(skippable + frame)
    assert is_zstd_frame_chain(skippable + skippable + frame)
    assert classify(pad(skippable + frame)).extension == "zst"
    # Declared length overruns the buffer
    overrun = struct.pack("<II", 0x184D2A5F, 1000) + b"meta"
    assert not is_zstd_frame_chain(overrun)
    # Chain that ends on something else
    assert not is_zstd_frame_chain(skippable + b"JUNKJUNK")
    print("  ✅ zstd skippable frames: PASS")


def test_ooxml_libreoffice_order():
    print("── Test: OOXML part ordering ──")
    libre = (zip_entry(b"_rels/.rels", b"<Relationships/>")
             + zip_entry(b"docProps/app.xml", b"<Properties/>")
             + zip_entry(b"[Content_Types].xml", b"<Types/>")
             + zip_entry(b"word/document.xml", b"<document/>"))
    assert ooxml_kind(libre) == DOCX
    generic = (zip_entry(b"[Content_Types].xml", b"<Types/>")
               + zip_entry(b"_rels/.rels", b"<Relationships/>")
               + zip_entry(b"custom/data.xml", b"<data/>"))
    assert ooxml_kind(generic) == OOXML
    assert classify(pad(generic)).extension == "zip"
    # Part name in the first entry
    assert ooxml_kind(zip_entry(b"xl/workbook.xml", b"")) == "xlsx"
    print("  ✅ OOXML part ordering: PASS")


def test_odf_and_ole2_helpers():
    print("── Test: ODF / OLE2 ──")
    assert odf_kind(SAMPLES["ods"]) == "spreadsheet"
    assert odf_kind(SAMPLES["zip"]) is None
    assert ole2_root_clsid(SAMPLES["doc"]) == "00020906-0000-0000-c000-000000000046"
    assert ole2_root_clsid(SAMPLES["msi"]) is None
    # Unknown CLSID falls through to the generic OLE storage type
    other = pad(ole2("12345678-1234-1234-1234-123456789abc"), 1100)
    assert classify(other).extension == "msi"
    print("  ✅ ODF / OLE2: PASS")


def test_html_sniffing():
    print("── Test: HTML sniffing ──")
    assert sig.is_html(b"\n\t<HtMl>")
    assert sig.is_html(b"<p class=x>")
    assert sig.is_html(b"<!-- comment -->")
    assert not sig.is_html(b"<pre>")            # "<P" followed by "r"
    assert not sig.is_html(b"<html")            # no terminator
    assert sig.is_xml(b"  <?XML version='1.0'?>")
    assert classify(b"<br>").extension == "html"
    print("  ✅ HTML sniffing: PASS")


if __name__ == "__main__":
    main()
