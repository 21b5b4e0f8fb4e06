from dataclasses import dataclass, field
from typing import List, Sequence

from .types import Message, Response


class QueueEmpty(Exception):
    """Raised by Bus.step when no message is in flight."""


@dataclass
class Msg:
    """
    Represents a message in flight between two participants.
    """
    src: int
    dst: int
    body: Message


@dataclass
class Delivery:
    """
    Record of one simulation step: the delivered message and what it produced.
    """
    msg: Msg
    replies: List[Msg] = field(default_factory=list)
    dropped: List[Msg] = field(default_factory=list)
    duplicated: List[Msg] = field(default_factory=list)


class Bus:
    """
    Simulates an unreliable network: every step delivers one message, then the
    whole in-flight queue is reshuffled so delivery order is arbitrary.
    """
    def __init__(self, rng, drop_prob=0.0, dup_prob=0.0):
        """
        Initialize the bus.

        Args:
            rng: Random number generator used for shuffling and loss trials.
            drop_prob: Probability of dropping a reply (float).
            dup_prob: Probability of enqueueing a Response twice (float).
        """
        for name, p in (("drop_prob", drop_prob), ("dup_prob", dup_prob)):
            if not 0.0 <= p <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {p}")
        self.rng = rng
        self.q: List[Msg] = []
        self.drop_prob = drop_prob
        self.dup_prob = dup_prob

    def __len__(self):
        return len(self.q)

    def send(self, m: Msg):
        """
        Enqueue a message without a loss trial. Used to seed the first rounds.
        """
        self.q.append(m)

    def pending(self) -> List[Msg]:
        """Snapshot of the messages currently in flight."""
        return list(self.q)

    def step(self, participants: Sequence) -> Delivery:
        """
        Deliver one message and enqueue whatever the recipient sends back.

        Args:
            participants: Indexable population; participants[i].receive(src, body)
                must return a list of Msg.

        Returns:
            Delivery describing the step.

        Raises:
            QueueEmpty: nothing is left to deliver.
        """
        if not self.q:
            raise QueueEmpty()

        # The queue is reshuffled after every step, so popping the tail is as
        # good as picking a random element.
        m = self.q.pop()
        delivery = Delivery(msg=m)
        for reply in participants[m.dst].receive(m.src, m.body):
            if self.rng.random() < self.drop_prob:
                delivery.dropped.append(reply)
                continue
            delivery.replies.append(reply)
            self.q.append(reply)
            # Only acceptor replies are retransmitted.
            if (self.dup_prob and isinstance(reply.body, Response)
                    and self.rng.random() < self.dup_prob):
                delivery.duplicated.append(reply)
                self.q.append(reply)

        self.rng.shuffle(self.q)
        return delivery
