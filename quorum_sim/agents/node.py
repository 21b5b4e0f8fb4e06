from typing import List

from ..core.bus import Msg
from ..core.errors import RoutingError


class Node:
    """
    A participant on the bus. Subclasses declare which message variant they
    handle; anything else is a wiring fault.
    """
    role = "node"
    handles: type = object

    def __init__(self, nid: int):
        self.id = nid

    def receive(self, src: int, body) -> List[Msg]:
        if not isinstance(body, self.handles):
            raise RoutingError(
                f"{type(body).__name__} from {src} delivered to {self.role} {self.id}")
        return [Msg(src=self.id, dst=dst, body=out) for dst, out in self.handle(src, body)]

    def handle(self, src: int, body):
        raise NotImplementedError
