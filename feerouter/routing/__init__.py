"""Fee tier routing: per-tier probing and best-tier selection."""

from feerouter.routing.comparator import QuoteComparator, best_exact_input, best_exact_output
from feerouter.routing.types import TierProbe, TierQuote

__all__ = [
    "QuoteComparator",
    "TierProbe",
    "TierQuote",
    "best_exact_input",
    "best_exact_output",
]
