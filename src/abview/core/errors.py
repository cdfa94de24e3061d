"""Error types for abview.

Every rejected construction or assignment surfaces as InvalidArgumentError,
whatever validator caught it.
"""

from __future__ import annotations

from pydantic import ValidationError


class InvalidArgumentError(ValueError):
    """A required field was missing or a value violated its constraint.

    Only the first violation is reported, in field declaration order.

    Attributes:
        field: Name of the offending field, or None if not field-specific.
        reason: Why the value was rejected.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        reason: str | None = None,
    ):
        super().__init__(message)
        self.field = field
        self.reason = reason or message

    @classmethod
    def from_validation_error(
        cls,
        model_name: str,
        exc: ValidationError,
    ) -> InvalidArgumentError:
        """Build from the first error of a pydantic ValidationError.

        Args:
            model_name: Name of the model that rejected the input.
            exc: The pydantic error.

        Returns:
            InvalidArgumentError naming the first offending field.
        """
        first = exc.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else None
        # Custom validators raise ValueError; report its text without
        # pydantic's "Value error, " prefix.
        cause = first.get("ctx", {}).get("error")
        if first["type"] == "value_error" and cause:
            reason = str(cause)
        else:
            reason = first["msg"]
        message = f"Invalid {model_name}: {field or model_name}: {reason}"
        return cls(message, field, reason)
