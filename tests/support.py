"""Shared test constants and doubles."""

from dataclasses import dataclass

PROGRAM_ID = b"MNS1111111111111111111111111111111111111111"
START_TIME = 1_700_000_000
FEE = 100_000_000

AUTHORITY = "authority"
ALICE = "alice"
BOB = "bob"
CAROL = "carol"
TREASURY = "treasury"


@dataclass
class FakeClock:
    """Clock whose time only moves when a test advances it."""

    current: int = START_TIME

    def now(self) -> int:
        return self.current

    def advance(self, seconds: int) -> None:
        self.current += seconds
