from typing import Callable, List, Optional, Sequence

from ..core.bus import Msg
from ..core.consensus.paxos import Proposer
from ..core.tokens import TokenSource
from ..core.types import Outcome, Response
from .node import Node


class ClientNode(Node):
    """Proposer participant. Only Responses may be routed here."""
    role = "client"
    handles = Response

    def __init__(self, nid: int, servers: Sequence[int], tokens: TokenSource,
                 on_outcome: Optional[Callable[[Outcome], None]] = None):
        super().__init__(nid)
        self.proposer = Proposer(nid, servers, tokens, on_outcome)

    @property
    def committed_id(self) -> int:
        return self.proposer.committed_id

    def start(self) -> List[Msg]:
        """Open a fresh round and return its outbound requests."""
        return [Msg(src=self.id, dst=dst, body=req) for dst, req in self.proposer.start_round()]

    def handle(self, src: int, body: Response):
        return self.proposer.receive(src, body)
