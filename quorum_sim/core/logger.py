from typing import Optional, TextIO

from .bus import Delivery, Msg
from .types import Outcome, Request
from ..world.render import render_status


def describe(msg: Msg) -> str:
    """One-line description of an envelope."""
    body = msg.body
    if isinstance(body, Request):
        detail = f"REQUEST id={body.proposed_id}"
    else:
        verdict = "ACCEPT" if body.accepted else "REJECT"
        detail = f"{verdict} id={body.id}"
    return f"N{msg.src} -> N{msg.dst}: {detail} token={str(body.token)[:8]}"


class SimulationLogger:
    """Handles detailed logging for quorum simulation debugging."""

    def __init__(self, log_file_path: str, enabled: bool = True):
        self.enabled = enabled
        self.log_file: Optional[TextIO] = None

        if self.enabled:
            self.log_file = open(log_file_path, 'w')

    def log_simulation_start(self, cfg, seed: int, seeded: int):
        """Log simulation initialization parameters."""
        if not self.enabled or not self.log_file:
            return

        self.log_file.write("=== QUORUM SIMULATION LOG ===\n")
        self.log_file.write(f"Seed: {seed}\n")
        self.log_file.write(f"Servers: {cfg.servers}, Clients: {cfg.clients}\n")
        self.log_file.write(f"Drop probability: {cfg.drop_prob}, Duplicate probability: {cfg.dup_prob}\n")
        self.log_file.write(f"Initial requests in flight: {seeded}\n\n")
        self.log_file.flush()

    def log_delivery(self, step: int, delivery: Delivery):
        """Log one delivered message and the replies it produced."""
        if not self.enabled or not self.log_file:
            return

        self.log_file.write(f"[{step:05d}] {describe(delivery.msg)}\n")
        for m in delivery.replies:
            self.log_file.write(f"    sent {describe(m)}\n")
        for m in delivery.duplicated:
            self.log_file.write(f"    duplicated {describe(m)}\n")
        for m in delivery.dropped:
            self.log_file.write(f"    dropped {describe(m)}\n")

    def log_outcome(self, step: int, outcome: Outcome):
        """Log a concluded round."""
        if not self.enabled or not self.log_file:
            return

        self.log_file.write(f"ROUND CLOSED at step {step}: client {outcome.client} {outcome}\n")
        self.log_file.flush()

    def log_snapshot(self, step: int, cluster, in_flight: int):
        """Log a status table of every participant."""
        if not self.enabled or not self.log_file:
            return

        for line in render_status(cluster, step, in_flight).split('\n'):
            self.log_file.write(f"  {line}\n")
        self.log_file.write("\n")
        self.log_file.flush()

    def log_simulation_end(self, stats, cluster):
        """Log run statistics with a final status snapshot."""
        if not self.enabled or not self.log_file:
            return

        self.log_file.write(f"\n=== SIMULATION COMPLETE ===\n")
        self.log_file.write(
            f"Delivered: {stats.delivered}, "
            f"Dropped: {stats.dropped}, Duplicated: {stats.duplicated}\n")
        self.log_file.write(f"Successes: {stats.successes}, Failures: {stats.failures}\n")
        if stats.pending_clients:
            self.log_file.write(f"Clients left awaiting quorum: {stats.pending_clients}\n")

        self.log_file.write("Final state:\n")
        for line in render_status(cluster, stats.delivered, stats.in_flight).split('\n'):
            self.log_file.write(f"  {line}\n")

        self.log_file.flush()

    def close(self):
        """Close the log file."""
        if self.log_file:
            self.log_file.close()
            self.log_file = None
