import io
import logging

import pikepdf

from errors import MalformedPdfError

logger = logging.getLogger(__name__)


def strip_xfa(pdf_bytes: bytes) -> bytes:
    """Drop the XFA "smart form" layer so the AcroForm fields are authoritative.

    Hybrid forms carry both; viewers and PyMuPDF disagree about which one
    wins. Documents without XFA come back byte-for-byte unchanged.
    """
    try:
        pdf = pikepdf.Pdf.open(io.BytesIO(pdf_bytes))
    except pikepdf.PdfError as exc:
        raise MalformedPdfError(exc) from exc

    with pdf:
        acroform = pdf.Root.get("/AcroForm")
        if acroform is None or "/XFA" not in acroform:
            return pdf_bytes

        del acroform["/XFA"]
        logger.info("Removed XFA layer from form")

        out = io.BytesIO()
        pdf.save(out)
        return out.getvalue()
