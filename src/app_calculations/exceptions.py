"""
Custom exceptions for the calculation module.

Principles:
- Explicit error handling
- One exception type per kind of failure
- Messages that can be shown to the user as-is

Missing reference data is not an error: the resolver falls back to a
neutral factor (1.0) or a zero norm-hour.
"""


class CalculationError(Exception):
    """Base exception for the calculation module."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class UnknownScopeError(CalculationError):
    """Scope key without a calculator for the offerte type."""

    def __init__(self, scope: str, offerte_type: str):
        super().__init__(
            message=f"Onbekende scope '{scope}' voor offertetype '{offerte_type}'",
            details={"scope": scope, "offerte_type": offerte_type},
        )


class InvalidScopeDataError(CalculationError):
    """Scope input that cannot be calculated."""

    def __init__(self, scope: str, message: str):
        super().__init__(
            message=f"Ongeldige gegevens voor scope '{scope}': {message}",
            details={"scope": scope},
        )


class NormUurNotFoundError(CalculationError):
    """Norm-hour record not found."""

    def __init__(self, normuur_id: int):
        super().__init__(
            message=f"Normuur met ID {normuur_id} niet gevonden",
            details={"normuur_id": normuur_id},
        )


class DuplicateNormUurError(CalculationError):
    """A norm-hour for the same scope and activity already exists."""

    def __init__(self, scope: str, activiteit: str):
        super().__init__(
            message=(
                f"Er bestaat al een normuur voor activiteit '{activiteit}' "
                f"in scope '{scope}'"
            ),
            details={"scope": scope, "activiteit": activiteit},
        )


class CorrectieFactorNotFoundError(CalculationError):
    """No company override exists for the factor."""

    def __init__(self, factor_type: str, waarde: str):
        super().__init__(
            message=f"Geen eigen correctiefactor voor {factor_type}/{waarde}",
            details={"type": factor_type, "waarde": waarde},
        )
