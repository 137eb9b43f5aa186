"""
FibonRose Error Taxonomy

EntryNotFound is an integration fault and always propagates.
InvalidMilestone / InvalidAmount are caller input errors (ValueError).
An exceeded allocation is NOT an exception: consume() returns blocked=True.
"""


class FibonroseError(Exception):
    """Base class for engine errors."""


class EntryNotFound(FibonroseError, LookupError):
    """A ledger or identity id does not resolve to a live record."""

    def __init__(self, kind: str, entry_id: str):
        self.kind = kind
        self.entry_id = entry_id
        super().__init__(f"{kind} not found: {entry_id}")


class InvalidMilestone(FibonroseError, ValueError):
    """Milestone name is not in the pathway's fixed set."""

    def __init__(self, pathway: str, milestone: str):
        self.pathway = pathway
        self.milestone = milestone
        super().__init__(f"Unknown milestone '{milestone}' for pathway {pathway}")


class InvalidAmount(FibonroseError, ValueError):
    """Allocation or consumption amount out of range."""
