"""
QRVault Backend — QR Code Generator
=====================================

What:  Turns a text payload into PNG bytes of a square QR code.
How:   python-qrcode builds the symbol (version chosen to fit the data), Pillow
       rasterises it, and the image is scaled up to the pixel size requested
       with nearest-neighbour sampling so modules stay crisp. A symbol that
       needs more pixels than requested is rendered at one pixel per module
       instead of being shrunk.
Who:   Called by QRCodeService when a new code is created.

Output contract:
    - Always PNG (starts with b"\\x89PNG\\r\\n\\x1a\\n")
    - Square, at least size × size pixels, never smaller than the symbol
      plus its quiet zone
    - Deterministic for a given (content, size, error-correction level)
"""

import io
import logging

import qrcode
from qrcode.exceptions import DataOverflowError
from PIL import Image

from qrvault.exceptions import CodecError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 256
THUMBNAIL_SIZE = 64

# Quiet zone in modules; 4 is the minimum the QR standard asks for
BORDER_MODULES = 4

ERROR_CORRECTION_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


class QRCodeGenerator:
    """
    Stateless PNG encoder; one instance is shared by every request.

    Args:
        size:             Default edge length in pixels
        error_correction: QR recovery level, one of L, M, Q, H
    """

    def __init__(self, size: int = DEFAULT_SIZE, error_correction: str = "M"):
        level = error_correction.upper()
        if level not in ERROR_CORRECTION_LEVELS:
            raise ValueError(f"Unknown error correction level '{error_correction}'")
        self.size = size if size > 0 else DEFAULT_SIZE
        self.error_correction = level

    def generate(self, content: str) -> bytes:
        """Encode `content` at the generator's default size."""
        return self._encode(content, self.size)

    def generate_with_size(self, content: str, size: int) -> bytes:
        """Encode `content` at `size` pixels; non-positive sizes use the default."""
        if size <= 0:
            size = self.size
        return self._encode(content, size)

    def _encode(self, content: str, size: int) -> bytes:
        """
        Build the symbol and render it to PNG.

        Raises:
            ValidationError: content is empty
            CodecError:      content does not fit in any QR version, or rendering failed
        """
        if not content:
            raise ValidationError(message="Content cannot be empty", field="content")

        qr = qrcode.QRCode(
            error_correction=ERROR_CORRECTION_LEVELS[self.error_correction],
            box_size=1,
            border=BORDER_MODULES,
        )
        try:
            qr.add_data(content)
            qr.make(fit=True)

            # Largest whole-pixel box that fits; never go below one pixel per module
            modules = qr.modules_count + 2 * BORDER_MODULES
            size = max(size, modules)
            qr.box_size = size // modules
            image = qr.make_image(fill_color="black", back_color="white").get_image()
            if image.size != (size, size):
                image = image.resize((size, size), Image.Resampling.NEAREST)

            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
        except (DataOverflowError, ValueError, OSError) as e:
            logger.error("QR encoding failed for %d chars: %s", len(content), e)
            raise CodecError(
                context={"content_length": len(content), "error_type": type(e).__name__},
            ) from e

        return buffer.getvalue()
