import random
import uuid
from typing import Optional


class TokenSource:
    """
    Issues correlation tokens for proposal rounds.

    With an injected RNG the tokens are reproducible, which makes a seeded run
    replayable end to end.
    """
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng

    def next(self) -> uuid.UUID:
        """Return a fresh version 4 UUID."""
        if self.rng is None:
            return uuid.uuid4()
        return uuid.UUID(int=self.rng.getrandbits(128), version=4)
