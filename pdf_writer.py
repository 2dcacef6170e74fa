"""
pdf_writer.py — Single-pass low-level PDF writer.

Objects are written to the sink as soon as they are added; the writer only
remembers each object's byte offset so that finish() can emit the page tree,
catalog, document information, xref table and trailer.

Usage:
    pw = PdfWriter(sink, {"title": "Snowmen"})
    res = pw.new_id()
    pw.add_object(res, b"<</ProcSet[/PDF]>>")
    ...
    pw.finish()
"""
import hashlib
import logging
import re
import zlib
from datetime import datetime

from config import DEFAULT_CONFIG, Config
from pdf_date import format_date

log = logging.getLogger(__name__)

# Four bytes above 127 so that transfer tools treat the file as binary.
_BINARY_MARKER = b"%\xc5\xdd\xc4\xb6\n"

# A deflated stream must save at least this much to be worth the /Filter entry.
_DEFLATE_MIN_GAIN = 32

# Kids array lines are broken once they grow past this many characters.
_KIDS_LINE_WIDTH = 70

_MAX_OBJECT_ID = 65536

_SURROGATE_RE = re.compile("[\ud800-\udfff]")

_ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "(": "\\(",
    ")": "\\)",
    "\\": "\\\\",
}


class PdfContractError(RuntimeError):
    """The writer was driven in a way its protocol does not allow."""


def _ensure(ok: bool, what: str) -> None:
    if not ok:
        raise PdfContractError(f"{what}: INTERNAL ERROR")


class ObjectId(int):
    """Object number; renders as an indirect reference."""

    @property
    def ref(self) -> str:
        _ensure(0 < self < _MAX_OBJECT_ID, f"object id {int(self)} out of range")
        return f"{int(self)} 0 R"


def real_str(v: float) -> str:
    """Format a number with at most three decimals and no trailing zeros."""
    return f"{v:.3f}".rstrip("0").rstrip(".")


def _utf16_hex(text: str) -> str:
    # Lone surrogates (e.g. from surrogateescape) cannot be encoded; use U+FFFD.
    text = _SURROGATE_RE.sub("\ufffd", text)
    return "<FEFF" + text.encode("utf-16-be").hex().upper() + ">"


def pdf_str(text: str) -> str:
    """
    Render text as a PDF string object.

    ASCII text becomes a literal string with escapes. Text with any
    character above 127 is rendered as a UTF-16BE hex string with BOM.
    """
    parts = ["("]
    for ch in text:
        code = ord(ch)
        if code > 127:
            return _utf16_hex(text)
        if ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif code < 32 or code == 127:
            parts.append(f"\\{code:03o}")
        else:
            parts.append(ch)
    parts.append(")")
    return "".join(parts)


def _newline_after(data: bytes) -> bytes:
    return b"" if data.endswith(b"\n") else b"\n"


class PdfWriter:
    def __init__(self, sink, info: dict | None = None, cfg: Config | None = None):
        info = info or {}
        self.cfg = cfg or DEFAULT_CONFIG
        self.pos = 0
        self.finished = False
        self._sink = sink
        self._xref: list[int] = [0]
        self._pages: list[ObjectId] = []

        self.version = info.get("version", self.cfg.pdf_version)
        self.title = info.get("title", "")
        self.author = info.get("author", "")
        self.subject = info.get("subject", "")
        self.producer = info.get("producer", self.cfg.producer)
        self.creator = info.get("creator", self.cfg.creator)
        # None means "now", resolved in finish().
        self.creation_date: str | None = info.get("creation_date")

        self.pages_id = self.new_id()
        self._write(f"%PDF-{self.version}\n".encode(), _BINARY_MARKER)

    # ── Output ───────────────────────────────────────────────────────────────

    def _write(self, *chunks: bytes) -> None:
        _ensure(not self.finished, "write after finish")
        for chunk in chunks:
            try:
                self._sink.write(chunk)
            except OSError as e:
                log.error(f"[PDF] Write failed at offset {self.pos}: {e}")
                raise
            self.pos += len(chunk)

    # ── Objects ──────────────────────────────────────────────────────────────

    @property
    def object_count(self) -> int:
        """Number of allocated objects, excluding the reserved entry 0."""
        return len(self._xref) - 1

    def offset_of(self, obj_id: int) -> int:
        return self._xref[obj_id]

    def new_id(self) -> ObjectId:
        obj_id = ObjectId(len(self._xref))
        self._xref.append(0)
        return obj_id

    def begin_object(self, obj_id: ObjectId) -> None:
        _ensure(
            0 < obj_id < len(self._xref) and self._xref[obj_id] == 0,
            f"object {int(obj_id)} not allocated or already started",
        )
        self._xref[obj_id] = self.pos
        self._write(f"{int(obj_id)} 0 obj\n".encode())

    def add_object(self, obj_id: ObjectId, body: bytes) -> None:
        self.begin_object(obj_id)
        self._write(body, _newline_after(body), b"endobj\n")

    def add_stream(self, obj_id: ObjectId, data: bytes) -> None:
        self.begin_object(obj_id)
        flt = ""
        if self.cfg.deflate:
            deflated = zlib.compress(data)
            if len(deflated) <= len(data) - _DEFLATE_MIN_GAIN:
                data, flt = deflated, "/Filter/FlateDecode"
        self._write(
            f"<</Length {len(data)}{flt}>>\nstream\n".encode(),
            data,
            _newline_after(data),
            b"endstream\nendobj\n",
        )

    def add_page(
        self,
        page_id: ObjectId,
        contents: ObjectId,
        resources: ObjectId,
        extra: bytes = b"",
    ) -> None:
        self.begin_object(page_id)
        self._pages.append(page_id)
        head = (
            f"<</Type/Page/Contents {contents.ref}/Resources {resources.ref}"
            f"/Parent {self.pages_id.ref}\n"
        )
        self._write(head.encode(), extra, b">>\nendobj\n")

    # ── Finalization ─────────────────────────────────────────────────────────

    def kids_array(self) -> str:
        """Return the page references as a bracketed, line-wrapped array."""
        buf = "["
        last_break = 0
        for page_id in self._pages:
            buf += page_id.ref
            if len(buf) > last_break + _KIDS_LINE_WIDTH:
                buf += "\n"
                last_break = len(buf)
            else:
                buf += " "
        if self._pages:
            buf = buf[:-1]
        return buf + "]"

    def _info_entry(self, key: str, value: str) -> bytes:
        if not value:
            return b""
        return f"/{key}{pdf_str(value)}\n".encode()

    def finish(self) -> None:
        # page tree
        self.begin_object(self.pages_id)
        self._write(
            f"<</Type/Pages/Count {len(self._pages)}/Kids\n".encode(),
            self.kids_array().encode(),
            b">>\nendobj\n",
        )

        # catalog
        catalog_id = self.new_id()
        self.add_object(catalog_id, f"<</Type/Catalog/Pages {self.pages_id.ref}>>".encode())

        # document information
        if self.creation_date is None:
            self.creation_date = format_date(datetime.now())
        info_id = self.new_id()
        self.begin_object(info_id)
        self._write(
            b"<<",
            self._info_entry("Title", self.title),
            self._info_entry("Author", self.author),
            self._info_entry("Subject", self.subject),
            self._info_entry("Producer", self.producer),
            self._info_entry("Creator", self.creator),
            self._info_entry("CreationDate", self.creation_date),
            self._info_entry("ModDate", self.creation_date),
            b"/Trapped/False>>\nendobj\n",
        )

        # xref table
        xref_pos, size = self.pos, len(self._xref)
        self._write(f"xref\n0 {size}\n".encode(), b"0000000000 65535 f \n")
        for i in range(1, size):
            _ensure(self._xref[i] > 0, f"object {i} was never written")
            self._write(f"{self._xref[i]:010d} 00000 n \n".encode())

        # trailer; both ID halves carry the same checksum
        checksum = self.checksum(xref_pos)
        self._write(
            b"trailer\n",
            f"<</Size {size}/Root {catalog_id.ref}/Info {info_id.ref}\n".encode(),
            f"/ID[<{checksum}><{checksum}>]>>\n".encode(),
            b"startxref\n",
            f"{xref_pos}\n".encode(),
            b"%%EOF\n",
        )
        self.finished = True

        flush = getattr(self._sink, "flush", None)
        if flush is not None:
            try:
                flush()
            except OSError as e:
                log.error(f"[PDF] Flush failed: {e}")
                raise
        log.debug(f"[PDF] Finished: {len(self._pages)} page(s), {size} xref entries, {self.pos} bytes")

    def checksum(self, xref_pos: int) -> str:
        seed = f"{self.creation_date}/{self.title}/{xref_pos}"
        return hashlib.md5(seed.encode("utf-8", "surrogatepass")).hexdigest().upper()
