"""Input history buffer: a chain of sample registers, newest first."""

from typing import List, Tuple

from .register import Register, RegisterBank

__all__ = ["HistoryBuffer"]


class HistoryBuffer:
    """The last ``length`` samples, x[n] at position 0 through x[n-length+1].

    Register 0 captures the external sample; register k captures what
    register k-1 held on the previous tick. The window length cannot change.
    """

    def __init__(self, length: int = 23, width: int = 16):
        self.chain = RegisterBank(length, width, "history")

    def __len__(self) -> int:
        return len(self.chain)

    def __getitem__(self, k: int) -> int:
        return self.chain[k].q

    @property
    def window(self) -> Tuple[int, ...]:
        return self.chain.values

    @property
    def registers(self) -> List[Register]:
        return list(self.chain)

    def drive(self, sample: int) -> None:
        prev = self.chain.values
        self.chain.load((sample,) + prev[:-1])
