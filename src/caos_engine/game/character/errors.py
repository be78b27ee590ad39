"""Exceptions raised by the character calculation engine."""


class EngineError(Exception):
    """Base class for engine errors."""

    pass


class InvalidAttributeError(EngineError, ValueError):
    """Raised for an attribute name outside the six core attributes."""

    pass


class InvalidProficiencyError(EngineError, ValueError):
    """Raised for a proficiency outside leigo/adepto/versado/mestre."""

    pass


class CatalogLoadError(EngineError):
    """Raised when the skills catalog cannot be loaded or parsed."""

    pass


class CharacterValidationError(EngineError):
    """Raised when a character snapshot breaks a cross-entity rule."""

    pass


class InvalidSpellCircleError(EngineError, ValueError):
    """Raised for a spell circle outside 1-8."""

    pass
