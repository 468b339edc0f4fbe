"""Client for the OCR.space text recognition API.

Uploads a passport image as a multipart form and returns the parsed
plain text of the first result page.
"""

import requests

from passport_ocr.utils.config import OCRConfig
from passport_ocr.utils.logger import get_logger

from .errors import OCRServiceError

logger = get_logger(__name__)


class OCRSpaceClient:
    """Thin wrapper around the OCR.space ``parse/image`` endpoint.

    Args:
        config: OCR settings (endpoint, API key, language, engine, timeout).
        session: Optional pre-built ``requests`` session.
    """

    def __init__(
        self, config: OCRConfig, session: requests.Session | None = None
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        if not config.api_key:
            logger.warning("No OCR.space API key configured")

    def _form_data(self) -> dict[str, str]:
        return {
            "apikey": self.config.api_key,
            "language": self.config.language,
            "isOverlayRequired": "false",
            "detectOrientation": str(self.config.detect_orientation).lower(),
            "scale": str(self.config.scale).lower(),
            "OCREngine": str(self.config.engine),
        }

    def extract_text(
        self,
        image: bytes,
        filename: str = "passport.jpg",
        content_type: str = "application/octet-stream",
    ) -> str:
        """Run OCR on an image.

        Args:
            image: Raw image bytes.
            filename: File name sent with the upload; the provider uses its
                extension to detect the image format.
            content_type: MIME type of the upload.

        Returns:
            The recognized text. An empty string when the provider returned
            no parsed text.

        Raises:
            OCRServiceError: On network failure, an HTTP error status, an
                unreadable response, or a provider-reported processing error.
        """
        try:
            response = self.session.post(
                self.config.api_url,
                files={"file": (filename, image, content_type)},
                data=self._form_data(),
                timeout=self.config.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            logger.error("OCR.space request failed: %s", exc)
            raise OCRServiceError(f"OCR request failed: {exc}") from exc
        except ValueError as exc:
            logger.error("OCR.space returned a non-JSON response")
            raise OCRServiceError("OCR provider returned an invalid response") from exc

        # Some rejections (bad API key, rate limits) come back as a bare string.
        if not isinstance(payload, dict):
            logger.error("OCR.space rejected the request: %s", payload)
            raise OCRServiceError(str(payload))

        if payload.get("IsErroredOnProcessing"):
            message = payload.get("ErrorMessage") or "Failed to process the image"
            if isinstance(message, list):
                message = "; ".join(str(m) for m in message)
            logger.error("OCR.space processing error: %s", message)
            raise OCRServiceError(message)

        results = payload.get("ParsedResults") or []
        text = (results[0].get("ParsedText") or "") if results else ""
        logger.info("OCR.space returned %d characters for %s", len(text), filename)
        return text
