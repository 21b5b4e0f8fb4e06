from __future__ import annotations
from typing import Callable, Dict, List, Optional
from dataclasses import dataclass
import random

from .world.cluster import Cluster
from .world.render import render_status
from .core.bus import Bus, Delivery, QueueEmpty
from .core.errors import ProtocolViolation
from .core.logger import SimulationLogger
from .core.tokens import TokenSource
from .core.types import Outcome

@dataclass
class Config:
    servers: int = 10
    clients: int = 15
    drop_prob: float = 0.1
    dup_prob: float = 0.0
    seed: Optional[int] = None   # None draws a fresh seed, recorded in the log
    max_steps: Optional[int] = None
    print_every: int = 0         # 0 disables status rendering through emit
    log_file: str = "simulation_log.txt"
    detailed_log: bool = True

@dataclass
class Stats:
    seed: int
    delivered: int = 0
    dropped: int = 0
    duplicated: int = 0
    successes: int = 0
    failures: int = 0
    pending_clients: int = 0
    in_flight: int = 0

class Simulation:
    def __init__(self, cfg: Config, rng: Optional[random.Random] = None,
                 emit: Callable[[str], None] = print):
        self.cfg = cfg
        self.seed = cfg.seed if cfg.seed is not None else random.SystemRandom().randrange(2**32)
        self.rng = rng if rng is not None else random.Random(self.seed)
        self.emit = emit

        self.bus = Bus(self.rng, drop_prob=cfg.drop_prob, dup_prob=cfg.dup_prob)
        self.tokens = TokenSource(self.rng)
        self.cluster = Cluster(cfg.servers, cfg.clients, self.tokens, self._on_outcome)
        self.outcomes: List[Outcome] = []
        self.stats = Stats(seed=self.seed)
        self.t = 0
        self.closed = False

        # Last observed value per participant, for the monotonicity audit
        self._seen: Dict[int, int] = {n.id: 0 for n in self.cluster.nodes}

        self.logger = SimulationLogger(cfg.log_file, cfg.detailed_log)

        for m in self.cluster.seed_requests():
            self.bus.send(m)
        self.logger.log_simulation_start(cfg, self.seed, len(self.bus))

    def _on_outcome(self, outcome: Outcome):
        self.outcomes.append(outcome)
        if outcome.succeeded:
            self.stats.successes += 1
        else:
            self.stats.failures += 1
        self.logger.log_outcome(self.t, outcome)
        self.emit(str(outcome))

    def _audit(self, nid: int):
        """Re-check the monotonic value of the participant that just ran."""
        node = self.cluster[nid]
        value = node.highest_accepted_id if node.role == "server" else node.committed_id
        if value < self._seen[nid]:
            raise ProtocolViolation(
                f"{node.role} {nid} went backwards: {self._seen[nid]} -> {value}")
        self._seen[nid] = value

    def step(self) -> Delivery:
        """Deliver one message. Raises QueueEmpty once the network is drained."""
        delivery = self.bus.step(self.cluster)
        self._audit(delivery.msg.dst)

        self.stats.delivered += 1
        self.stats.dropped += len(delivery.dropped)
        self.stats.duplicated += len(delivery.duplicated)
        self.logger.log_delivery(self.t, delivery)
        self.t += 1

        if self.cfg.print_every and self.t % self.cfg.print_every == 0:
            self.emit(render_status(self.cluster, self.t, len(self.bus)))
            self.logger.log_snapshot(self.t, self.cluster, len(self.bus))
        return delivery

    def run(self) -> Stats:
        try:
            while self.cfg.max_steps is None or self.t < self.cfg.max_steps:
                self.step()
        except QueueEmpty:
            pass
        finally:
            self.close()
        return self.stats

    def close(self) -> Stats:
        """Fill in the closing statistics and release the log file. Idempotent."""
        if not self.closed:
            self.closed = True
            self.stats.pending_clients = len(self.cluster.pending_clients())
            self.stats.in_flight = len(self.bus)
            self.logger.log_simulation_end(self.stats, self.cluster)
            self.logger.close()
        return self.stats

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
