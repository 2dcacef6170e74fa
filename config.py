"""
config.py — Load and validate .env configuration for PDF generation.

Every key is optional; unset keys fall back to DEFAULT_CONFIG.
"""
import os
import logging
from dataclasses import dataclass, replace

from dotenv import load_dotenv

load_dotenv()

log = logging.getLogger(__name__)

PACKAGE_NAME = "scpdf"
VERSION = "0.18.0"

# PDF points per millimetre.
_MM = 72 / 25.4


@dataclass(frozen=True)
class Config:
    pdf_version: str
    page_width: float
    page_height: float
    muffler: str
    deflate: bool
    creator: str
    producer: str


DEFAULT_CONFIG = Config(
    pdf_version="1.4",
    page_width=210 * _MM,
    page_height=294 * _MM,
    muffler="#ff0000",
    deflate=True,
    creator=PACKAGE_NAME,
    producer=f"{PACKAGE_NAME}-{VERSION}",
)


def _positive_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        log.error(f"[CONFIG] {key} is not a number: {raw!r}")
        raise SystemExit(1)
    if value <= 0:
        log.error(f"[CONFIG] {key} must be positive, got {value}")
        raise SystemExit(1)
    return value


def load_config() -> Config:
    # color -> pdf_writer -> config; import lazily.
    from color import parse_color

    muffler = os.getenv("SCPDF_MUFFLER", DEFAULT_CONFIG.muffler)
    try:
        parse_color(muffler)
    except ValueError as e:
        log.error(f"[CONFIG] SCPDF_MUFFLER is invalid: {e}")
        raise SystemExit(1)

    return replace(
        DEFAULT_CONFIG,
        pdf_version=os.getenv("SCPDF_PDF_VERSION", DEFAULT_CONFIG.pdf_version),
        page_width=_positive_float("SCPDF_PAGE_WIDTH", DEFAULT_CONFIG.page_width),
        page_height=_positive_float("SCPDF_PAGE_HEIGHT", DEFAULT_CONFIG.page_height),
        muffler=muffler,
        deflate=os.getenv("SCPDF_DEFLATE", "true").lower() == "true",
        creator=os.getenv("SCPDF_CREATOR", DEFAULT_CONFIG.creator),
        producer=os.getenv("SCPDF_PRODUCER", DEFAULT_CONFIG.producer),
    )
