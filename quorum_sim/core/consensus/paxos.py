from typing import Callable, Dict, List, Optional, Sequence, Tuple
import uuid

from ..errors import ProtocolViolation, RoutingError
from ..tokens import TokenSource
from ..types import Id, Outcome, Request, Response, Vote


class Acceptor:
    """Acceptor role: accepts any proposal strictly above its ceiling."""

    def __init__(self, node_id: int):
        self.node_id = node_id
        self.highest_accepted_id: Id = 0
        self.accepted_token: Optional[uuid.UUID] = None

    def propose(self, src: int, token: uuid.UUID, proposed_id: Id) -> List[Tuple[int, Response]]:
        """
        Handle a proposal and reply to its sender. A repeated copy of the
        request that set the current ceiling is acknowledged again.
        """
        if proposed_id > self.highest_accepted_id:
            self.highest_accepted_id = proposed_id
            self.accepted_token = token
            return [(src, Response(accepted=True, token=token, id=proposed_id))]
        if token == self.accepted_token and proposed_id == self.highest_accepted_id:
            return [(src, Response(accepted=True, token=token, id=proposed_id))]
        return [(src, Response(accepted=False, token=token, id=self.highest_accepted_id))]


class Proposer:
    """
    Proposer role. Broadcasts one id per round to every acceptor and waits
    for a strict majority either way.

    A majority of acceptances commits the proposal. A majority of rejections
    moves the baseline up to the highest ceiling reported in the round and
    retries right away; the committed id itself only ever moves on success.
    """

    def __init__(self, node_id: int, acceptors: Sequence[int], tokens: TokenSource,
                 on_outcome: Optional[Callable[[Outcome], None]] = None):
        if not acceptors:
            raise ValueError("a proposer needs at least one acceptor")
        self.node_id = node_id
        self.acceptors = list(acceptors)
        self.tokens = tokens
        self.on_outcome = on_outcome

        self.committed_id: Id = 0
        self.baseline: Id = 0        # proposals are baseline + 1
        self.proposed_id: Id = 0
        self.active_token: Optional[uuid.UUID] = None
        self.round_open = False
        self.tally: Dict[int, Vote] = {}
        self.rounds = 0

    @property
    def quorum(self) -> int:
        """Smallest strict majority of the acceptors."""
        return len(self.acceptors) // 2 + 1

    def accepts(self) -> int:
        return sum(1 for v in self.tally.values() if v.accepted)

    def rejects(self) -> int:
        return sum(1 for v in self.tally.values() if not v.accepted)

    def start_round(self) -> List[Tuple[int, Request]]:
        """Open a new round and address a proposal to every acceptor."""
        self.active_token = self.tokens.next()
        self.tally = {}
        self.proposed_id = self.baseline + 1
        self.round_open = True
        self.rounds += 1
        req = Request(token=self.active_token, proposed_id=self.proposed_id)
        return [(a, req) for a in self.acceptors]

    def receive(self, src: int, response: Response) -> List[Tuple[int, Request]]:
        """
        Tally one acceptor response.

        Returns:
            The next round's requests when the round failed, otherwise [].
        """
        if response.token != self.active_token or not self.round_open:
            return []
        if src not in self.acceptors:
            raise RoutingError(f"client {self.node_id} got a response from non-acceptor {src}")
        # A retransmitted response must not count twice.
        if src in self.tally:
            return []

        if response.accepted:
            if response.id != self.proposed_id:
                raise ProtocolViolation(
                    f"client {self.node_id}: acceptance for id {response.id} "
                    f"but this round proposed {self.proposed_id}")
            self.tally[src] = Vote(accepted=True, id=response.id)
            if self.accepts() >= self.quorum:
                self._commit(response.id)
            return []

        self.tally[src] = Vote(accepted=False, id=response.id)
        if self.rejects() >= self.quorum:
            ceiling = max(v.id for v in self.tally.values() if not v.accepted)
            self.baseline = max(self.baseline, ceiling)
            self._notify(Outcome(client=self.node_id, succeeded=False, id=ceiling))
            return self.start_round()
        return []

    def _commit(self, new_id: Id):
        if new_id <= self.committed_id:
            raise ProtocolViolation(
                f"client {self.node_id}: committed id would move from "
                f"{self.committed_id} to {new_id}")
        self.committed_id = new_id
        self.baseline = new_id
        # Retiring the token makes every late response of this round inert.
        self.active_token = self.tokens.next()
        self.tally = {}
        self.round_open = False
        self._notify(Outcome(client=self.node_id, succeeded=True, id=new_id))

    def _notify(self, outcome: Outcome):
        if self.on_outcome is not None:
            self.on_outcome(outcome)
