from ..core.consensus.paxos import Acceptor
from ..core.types import Request
from .node import Node


class ServerNode(Node):
    """Acceptor participant. Only Requests may be routed here."""
    role = "server"
    handles = Request

    def __init__(self, nid: int):
        super().__init__(nid)
        self.acceptor = Acceptor(nid)

    @property
    def highest_accepted_id(self) -> int:
        return self.acceptor.highest_accepted_id

    def handle(self, src: int, body: Request):
        return self.acceptor.propose(src, body.token, body.proposed_id)
