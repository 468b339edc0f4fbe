"""Exceptions raised by the OCR collaborators."""


class OCRServiceError(Exception):
    """OCR could not produce text for an image.

    Covers transport failures, provider-reported processing errors and
    local engine failures alike; callers only see one generic failure.
    """
