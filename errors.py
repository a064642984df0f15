"""
Error types shared by the fill engine, the progress store and the API.

Document-level problems raise; per-field problems are logged where they
happen and never reach this module.
"""


class PacketFillError(Exception):
    """Base exception for packet fill errors"""
    def __init__(self, message, error_code, details=None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self):
        """Convert error to JSON-serializable dict"""
        return {
            "success": False,
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class MalformedPdfError(PacketFillError):
    """The supplied bytes could not be decoded or parsed as a PDF"""
    def __init__(self, reason=None):
        super().__init__(
            message="Could not read PDF document",
            error_code="MALFORMED_PDF",
            details={
                "reason": str(reason) if reason else None,
                "suggestion": "Re-upload the form or start again from the blank template",
            },
        )


class FieldMapError(PacketFillError):
    """Field map resource missing or invalid"""
    def __init__(self, path, reason=None):
        super().__init__(
            message=f"Invalid field map: {path}",
            error_code="FIELD_MAP_INVALID",
            details={"path": str(path), "reason": str(reason) if reason else None},
        )


class InvalidKeyError(PacketFillError):
    """User id or form name cannot be used as a storage key"""
    def __init__(self, key_name, value):
        super().__init__(
            message=f"Invalid {key_name}: {value!r}",
            error_code="INVALID_KEY",
            details={key_name: value, "allowed": "letters, digits, '-' and '_'"},
        )


class NothingToFillError(PacketFillError):
    """Neither native filling nor the overlay changed the document"""
    def __init__(self, form_name):
        super().__init__(
            message=f"No fields could be filled on {form_name}",
            error_code="NOTHING_TO_FILL",
            details={
                "form_name": form_name,
                "suggestion": "Check the name and date values, or whether the form was already completed",
            },
        )


class TemplateNotFoundError(PacketFillError):
    """Template PDF not present on disk"""
    def __init__(self, template_path):
        super().__init__(
            message=f"Template file not found: {template_path}",
            error_code="TEMPLATE_NOT_FOUND",
            details={"template_path": str(template_path)},
        )
