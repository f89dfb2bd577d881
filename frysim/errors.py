"""Exception types raised by the simulation engine."""


class FrySimError(Exception):
    """Base class for FrySim errors."""


class UnknownProfileError(FrySimError, KeyError):
    """Raised when a fryer profile key is not in the fixed registry."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"unknown fryer profile {self.key!r}"


class UnknownFieldError(FrySimError, KeyError):
    """Raised when a catalog edit targets a field that is not editable."""

    def __init__(self, field: str) -> None:
        super().__init__(field)
        self.field = field

    def __str__(self) -> str:
        return f"product field {self.field!r} is not editable"
