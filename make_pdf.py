"""
make_pdf.py — Snowman PDF generation entry point.

Usage:
    python make_pdf.py --output snowman.pdf
    python make_pdf.py --output three.pdf --muffler red --muffler "#00f" \
        --muffler cmyk:0,0,255,0 --title "Three Snowmen"

Defaults (page size, muffler, PDF version, compression) come from .env;
see config.py.
"""
import argparse
import logging
import os
import sys

from color import parse_color
from config import load_config
from document import SnowmanDoc
from pdf_date import parse_date

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Write a PDF full of snowmen")
    parser.add_argument("--output", required=True, help="Path of the PDF file to write")
    parser.add_argument("--muffler", action="append", default=[],
                        help="Muffler color; one page per occurrence (e.g. red, #00ff00, gray:64)")
    parser.add_argument("--scale", type=float, default=1.0, help="Snowman scale for every page")
    parser.add_argument("--width",  type=float, help="Page width in points")
    parser.add_argument("--height", type=float, help="Page height in points")
    parser.add_argument("--title",   default="", help="Document title")
    parser.add_argument("--author",  default="", help="Document author")
    parser.add_argument("--subject", default="", help="Document subject")
    parser.add_argument("--creation-date", help="PDF date, e.g. D:20181224120000+09'00' (default: now)")
    parser.add_argument("--pdf-version", help="PDF version written in the header")
    return parser


def build_doc(args, cfg) -> SnowmanDoc:
    doc = SnowmanDoc(cfg)
    if args.width is not None or args.height is not None:
        width = cfg.page_width if args.width is None else args.width
        height = cfg.page_height if args.height is None else args.height
        doc.set_page_size(width, height)

    mufflers = args.muffler or [cfg.muffler]
    for text in mufflers:
        doc.add_page_scaled(parse_color(text), args.scale)

    info = {"title": args.title, "author": args.author, "subject": args.subject}
    if args.creation_date:
        parse_date(args.creation_date)
        info["creation_date"] = args.creation_date
    if args.pdf_version:
        info["version"] = args.pdf_version
    doc.set_doc_info(info)
    return doc


def main(argv=None):
    args = build_parser().parse_args(argv)
    cfg = load_config()

    try:
        doc = build_doc(args, cfg)
    except ValueError as e:
        log.error(f"[CLI] {e}")
        raise SystemExit(1)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        fh = open(args.output, "wb")
    except OSError as e:
        log.error(f"[CLI] Could not open {args.output}: {e}")
        raise SystemExit(1)

    try:
        with fh:
            size = doc.write_to(fh)
    except OSError as e:
        log.error(f"[CLI] Could not write {args.output}: {e}")
        # Partial output is not a valid PDF; only reached once open() succeeded.
        os.remove(args.output)
        raise SystemExit(1)

    print(f"Created: {args.output}  ({size} bytes)")
    sys.exit(0)


if __name__ == "__main__":
    main()
