"""Text extraction for EPF passbook PDFs using pdfplumber.

The parser itself only ever sees decoded text. This module is the one place
that opens a PDF document.
"""

import io
import logging
from pathlib import Path
from typing import Optional, Union

import pdfplumber

from passbook.core.exceptions import ExtractionError, InvalidInputError

logger = logging.getLogger(__name__)

PDFSource = Union[bytes, bytearray, str, Path]


def extract_text(source: PDFSource, password: Optional[str] = None) -> str:
    """
    Extract text from a passbook PDF.

    Args:
        source: Raw PDF bytes or a path to a PDF file
        password: PDF password (if encrypted)

    Returns:
        Text of every page, newline-joined

    Raises:
        ExtractionError: If the file is missing or cannot be decoded
        InvalidInputError: If source is neither bytes nor a path

    Examples:
        >>> text = extract_text(Path("passbook.pdf"))
        >>> text = extract_text(uploaded_bytes)
    """
    if isinstance(source, (bytes, bytearray)):
        stream = io.BytesIO(bytes(source))
        label = "<bytes>"
    elif isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise ExtractionError(f"File not found: {path}", source=str(path))
        stream = path
        label = path.name
    else:
        raise InvalidInputError(type(source), expected="bytes or path")

    text = ""
    try:
        with pdfplumber.open(stream, password=password or "") as pdf:
            for page in pdf.pages:
                page_text = page.extract_text()
                if page_text:
                    text += page_text + "\n"
            logger.info(f"Extracted text from {len(pdf.pages)} pages of {label}")
    except Exception as e:
        # pdfminer's password errors often carry an empty message
        error_msg = f"{type(e).__name__}: {e}"
        if "password" in error_msg.lower() or "encrypted" in error_msg.lower():
            message = "PDF is password-protected. Please provide the password."
        else:
            message = "Invalid PDF format. Please upload a valid EPF passbook from EPFO portal."
        logger.error(f"PDF text extraction failed for {label}: {error_msg}")
        raise ExtractionError(message, source=label) from e

    return text
