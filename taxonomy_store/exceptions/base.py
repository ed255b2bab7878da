from typing import Any, Dict, Optional


class TaxonomyStoreError(Exception):
    """Base exception for every failure raised by the taxonomy store.

    Attributes:
        message: Human-readable error message
        original_error: The exception that caused this error, if any
        context: Structured details (stage, counts, keys) used when logging
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = context or {}
        super().__init__(message)

    def log_fields(self) -> Dict[str, Any]:
        """Flatten the error into key/value pairs for a single log line."""
        fields: Dict[str, Any] = {"error": self.__class__.__name__}
        fields.update(self.context)
        if self.original_error is not None:
            fields["cause"] = repr(self.original_error)
        return fields

    def __str__(self) -> str:
        error_str = self.message
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            error_str += f" (Context: {context_str})"
        return error_str

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, original_error={self.original_error!r}, context={self.context!r})"
