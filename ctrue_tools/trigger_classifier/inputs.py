"""Generic decoding of the L0/L1 trigger-input words into named flags."""

from ctrue_tools.trigger_classifier.config import L0, L1, TRIGGER_INPUTS
from ctrue_tools.trigger_classifier.exceptions import ConfigurationError
from ctrue_tools.trigger_classifier.types import TriggerFlags

WORD_BITS = 32
_WORD_MASK = (1 << WORD_BITS) - 1


class TriggerInputSet:
    """Declarative (name, word, bit) table decoded bit by bit.

    Bits that no definition refers to are ignored.
    """

    def __init__(self, definitions, period: str = None):
        seen = set()
        defs = []
        for name, word, bit in definitions:
            if name in seen:
                raise ConfigurationError(f"Duplicate trigger input '{name}'")
            if word not in (L0, L1):
                raise ConfigurationError(f"Trigger input '{name}': unknown word '{word}'")
            if not 0 <= bit < WORD_BITS:
                raise ConfigurationError(
                    f"Trigger input '{name}': bit {bit} outside a {WORD_BITS}-bit word"
                )
            seen.add(name)
            defs.append((name, word, int(bit)))
        self.definitions = tuple(defs)
        self.period = period

    @classmethod
    def from_preset(cls, period: str) -> "TriggerInputSet":
        if period not in TRIGGER_INPUTS:
            raise ConfigurationError(
                f"Unknown period '{period}'. Available: {', '.join(TRIGGER_INPUTS)}"
            )
        return cls(TRIGGER_INPUTS[period], period=period)

    @property
    def names(self) -> tuple:
        return tuple(d[0] for d in self.definitions)

    def decode(self, l0_inputs: int, l1_inputs: int = 0) -> TriggerFlags:
        words = {L0: int(l0_inputs) & _WORD_MASK, L1: int(l1_inputs) & _WORD_MASK}
        return TriggerFlags({
            name: bool((words[word] >> bit) & 1)
            for name, word, bit in self.definitions
        })

    def encode(self, *names) -> tuple:
        """Return the (l0, l1) words with exactly the named inputs set."""
        positions = {d[0]: d[1:] for d in self.definitions}
        words = {L0: 0, L1: 0}
        for name in names:
            if name not in positions:
                raise ConfigurationError(f"Unknown trigger input '{name}'")
            word, bit = positions[name]
            words[word] |= 1 << bit
        return words[L0], words[L1]
