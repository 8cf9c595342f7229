"""Error kinds surfaced by the journal services."""


class JournalError(Exception):
    """Base class for errors raised by the journal core."""


class NotFoundError(JournalError):
    """A trade, investment or wallet id does not exist in the store."""

    def __init__(self, entity: str, entity_id: int | str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found with id: {entity_id}")


class ValidationFailure(JournalError):
    """A field violates a constraint. Raised before any derived computation runs."""

    def __init__(self, field: str, constraint: str):
        self.field = field
        self.constraint = constraint
        super().__init__(f"{field}: {constraint}")

    @classmethod
    def from_pydantic(cls, error) -> "ValidationFailure":
        """Build from a pydantic ValidationError, keeping its first error."""
        first = error.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "__root__"
        return cls(field, first.get("msg", "invalid value"))
