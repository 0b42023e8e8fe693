"""Exception hierarchy for reprise."""


class RepriseError(Exception):
    """Base class for every error raised by reprise."""


class InvariantViolation(RepriseError, ValueError):
    """A card record's scheduling state is outside its valid domain."""


class CardNotFoundError(RepriseError, KeyError):
    """No card with the requested id exists in the collection(s) searched."""

    def __init__(self, card_id: str):
        super().__init__(card_id)
        self.card_id = card_id

    def __str__(self) -> str:
        return f"Card not found: {self.card_id}"


class CollectionNotFoundError(RepriseError, KeyError):
    def __init__(self, collection_id: str):
        super().__init__(collection_id)
        self.collection_id = collection_id

    def __str__(self) -> str:
        return f"Collection not found: {self.collection_id}"


class DeckFileError(RepriseError):
    """The deck file could not be read, parsed or validated."""
