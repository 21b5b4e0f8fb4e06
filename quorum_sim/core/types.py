from dataclasses import dataclass
from typing import Union
import uuid

Id = int


@dataclass(frozen=True)
class Request:
    """Proposal sent by a client to an acceptor."""
    token: uuid.UUID
    proposed_id: Id


@dataclass(frozen=True)
class Response:
    """
    Acceptor reply. On acceptance `id` echoes the proposal, on rejection it
    carries the acceptor's current ceiling.
    """
    accepted: bool
    token: uuid.UUID
    id: Id


Message = Union[Request, Response]


@dataclass(frozen=True)
class Vote:
    """One acceptor's outcome inside a client tally."""
    accepted: bool
    id: Id


@dataclass(frozen=True)
class Outcome:
    """A concluded round, as reported by a client."""
    client: int
    succeeded: bool
    id: Id

    def __str__(self):
        word = "SUCCESS" if self.succeeded else "FAILURE"
        return f"{word}; ID = {self.id}"
