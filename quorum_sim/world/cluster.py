from typing import Callable, List, Optional, Union

from ..agents.client import ClientNode
from ..agents.server import ServerNode
from ..core.bus import Msg
from ..core.tokens import TokenSource
from ..core.types import Outcome


class Cluster:
    """
    The fixed population. Servers take indices 0..servers-1 and clients the
    indices after them; every client is wired to exactly the server range, so
    requests can only ever be addressed to acceptors.
    """
    def __init__(self, servers: int, clients: int, tokens: TokenSource,
                 on_outcome: Optional[Callable[[Outcome], None]] = None):
        if servers < 1:
            raise ValueError(f"need at least one server, got {servers}")
        if clients < 0:
            raise ValueError(f"client count cannot be negative, got {clients}")

        self.servers: List[ServerNode] = [ServerNode(i) for i in range(servers)]
        server_ids = range(servers)
        self.clients: List[ClientNode] = [
            ClientNode(servers + i, server_ids, tokens, on_outcome)
            for i in range(clients)
        ]
        self.nodes: List[Union[ServerNode, ClientNode]] = [*self.servers, *self.clients]

    def __len__(self):
        return len(self.nodes)

    def __getitem__(self, idx: int):
        return self.nodes[idx]

    def seed_requests(self) -> List[Msg]:
        """Start the first round of every client."""
        out = []
        for c in self.clients:
            out.extend(c.start())
        return out

    def pending_clients(self) -> List[ClientNode]:
        """Clients whose current round never reached a majority."""
        return [c for c in self.clients if c.proposer.round_open]
