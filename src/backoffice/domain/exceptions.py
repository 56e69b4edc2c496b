"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly.  The four direct
subclasses are the failure kinds a caller has to tell apart:

- ``ValidationError``      malformed or out-of-range input
- ``EntityNotFoundError``  unknown product id, or unknown color in a ledger
- ``DataIntegrityError``   persisted data breaks an invariant
- ``StoreUnavailableError`` the product store could not be read or written
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated by caller input."""


class VariantKindMismatchError(ValidationError):
    """The operation does not apply to the product's variant kind."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product with ID '{product_id}' not found")
        self.product_id = product_id


class ColorNotFoundError(EntityNotFoundError):

    def __init__(self, color: str) -> None:
        super().__init__(f"Color '{color}' not found in product ledger")
        self.color = color


class DataIntegrityError(DomainException):
    """Persisted data is malformed and will not be repaired automatically."""


class StoreUnavailableError(DomainException):
    """The underlying product store failed to read or write."""
