"""
document.py — Snowman document: page list, page size and metadata.

    doc = SnowmanDoc()
    doc.add_page(RGBA(0, 0, 255))
    with open("essential.pdf", "wb") as fh:
        doc.write_to(fh)

A document with no pages gets a single default page (red muffler) when it
is written. Writing freezes the document.
"""
import io
import logging
from dataclasses import dataclass
from datetime import datetime

import pdf_date
from artwork import essential_code, transform_code
from color import make_color_info, parse_color
from config import DEFAULT_CONFIG, VERSION, Config
from pdf_writer import PdfWriter, real_str

log = logging.getLogger(__name__)

# Snowman edge length relative to the longer page side at scale 1.
STD_SCALE = 0.6

INFO_KEYS = ("version", "title", "author", "subject", "producer", "creator", "creation_date")


class DocumentError(ValueError):
    pass


@dataclass
class Page:
    muffler: object
    scale: float


def version() -> str:
    return VERSION


def format_date(t: datetime) -> str:
    """Format t for use as the creation_date document info entry."""
    return pdf_date.format_date(t)


class SnowmanDoc:
    def __init__(self, cfg: Config | None = None):
        self.cfg = cfg or DEFAULT_CONFIG
        self.width = 0.0
        self.height = 0.0
        self.pages: list[Page] = []
        self.frozen = False
        self.info: dict[str, str] = {}

    @classmethod
    def new_with_size(cls, width: float, height: float, cfg: Config | None = None) -> "SnowmanDoc":
        doc = cls(cfg)
        doc.set_page_size(width, height)
        return doc

    def _check_frozen(self) -> None:
        if self.frozen:
            raise DocumentError("document is frozen")

    def set_page_size(self, width: float, height: float) -> None:
        """Set the page size in PDF points. Both values must be positive."""
        self._check_frozen()
        if width <= 0 or height <= 0:
            raise DocumentError(f"illegal page size ({width:.3g}x{height:.3g})")
        self.width, self.height = width, height

    def page_size(self) -> tuple[float, float]:
        self._auto_page_size()
        return self.width, self.height

    def _auto_page_size(self) -> None:
        if self.width == 0 and self.height == 0:
            self.width, self.height = self.cfg.page_width, self.cfg.page_height

    def add_page_scaled(self, muffler, scale: float) -> None:
        """
        Add a page whose snowman wears the given muffler, scaled relative to
        the standard size. The muffler is a color value or color text
        accepted by parse_color().
        """
        self._check_frozen()
        if scale <= 0:
            raise DocumentError(f"illegal scale value ({scale:.3g})")
        if muffler is None:
            raise DocumentError("illegal muffler value (None)")
        if isinstance(muffler, str):
            try:
                muffler = parse_color(muffler)
            except ValueError as e:
                raise DocumentError(str(e)) from None
        try:
            make_color_info(muffler)
        except TypeError as e:
            raise DocumentError(f"illegal muffler value ({e})") from None
        self.pages.append(Page(muffler=muffler, scale=scale * STD_SCALE))

    def add_page(self, muffler) -> None:
        self.add_page_scaled(muffler, 1)

    def set_doc_info(self, info: dict[str, str]) -> None:
        """
        Set document information. Effective keys:

          version: PDF version, such as "1.5" (default: config pdf_version)
          title / author / subject: (default: empty)
          producer / creator: (default: config values)
          creation_date: such as "D:20180808120000+09'00'" (default: now)
        """
        self._check_frozen()
        unknown = sorted(set(info) - set(INFO_KEYS))
        if unknown:
            log.warning(f"[DOC] Ignoring unknown document info key(s): {', '.join(unknown)}")
        self.info = dict(info)

    def write_to(self, sink) -> int:
        """
        Write the PDF to a binary sink and return the number of bytes written.

        OSError from the sink propagates; bytes already written stay written.
        """
        self._auto_page_size()
        if not self.pages:
            self.add_page(parse_color(self.cfg.muffler))
        self.frozen = True

        pw = PdfWriter(sink, self.info, self.cfg)
        resources = pw.new_id()
        pw.add_object(resources, b"<</ProcSet[/PDF]>>\n")

        media_box = f"/MediaBox[0 0 {real_str(self.width)} {real_str(self.height)}]".encode()
        for page in self.pages:
            cm, _ = transform_code(self.width, self.height, page.scale)
            code = f"q {cm}\n{essential_code(make_color_info(page.muffler))}Q\n"
            contents = pw.new_id()
            pw.add_stream(contents, code.encode("ascii"))
            pw.add_page(pw.new_id(), contents, resources, media_box)

        pw.finish()
        log.info(f"[DOC] Wrote {len(self.pages)} page(s), {pw.pos} bytes")
        return pw.pos

    def pdf_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.write_to(buf)
        return buf.getvalue()

    def __str__(self) -> str:
        pages = ";".join(f"{p.muffler}*{p.scale:.3g}" for p in self.pages)
        star = "*" if self.frozen else ""
        return f"Doc{star}({self.width:.3g}x{self.height:.3g})[{pages}]"
