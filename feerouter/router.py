"""FeeTierRouter: the single entry point wiring every router component.

    router = FeeTierRouter(
        address=ROUTER_ACCOUNT,
        tokens=token_service,
        swap_router=swap_router,
        quoter=quoter,
        position_manager=position_manager,
    )
    outcome = router.swap_exact_input(caller, ExactInputRequest(...))
"""

from __future__ import annotations

import time
from collections.abc import Callable

import structlog

from feerouter.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from feerouter.constants import NO_PRICE_LIMIT
from feerouter.errors import InvalidConfiguration
from feerouter.events import EventLog, ToleranceUpdated
from feerouter.execution.guard import OperationGuard
from feerouter.execution.liquidity import LiquidityManager
from feerouter.execution.swap import SwapExecutor, validate_amount, validate_tokens
from feerouter.history import HistoryLedger
from feerouter.models.requests import (
    DecreaseLiquidityRequest,
    ExactInputRequest,
    ExactOutputRequest,
    IncreaseLiquidityRequest,
    LiquidityOutcome,
    SwapOutcome,
)
from feerouter.models.types import is_zero_address, normalize_address
from feerouter.protocol.factory import PoolFactory
from feerouter.protocol.positions import PositionManager
from feerouter.protocol.quoter import Quoter
from feerouter.protocol.swap_router import SwapRouter
from feerouter.protocol.tokens import Substrate, TokenService
from feerouter.routing.comparator import QuoteComparator
from feerouter.routing.types import TierQuote
from feerouter.slippage import SlippagePolicy

logger = structlog.get_logger()


def _require_collaborator(name: str, collaborator: object) -> str:
    """Return the collaborator's normalized address.

    Raises:
        InvalidConfiguration: If it is missing or sits at the null address
    """
    if collaborator is None:
        raise InvalidConfiguration(f"{name} is required")
    address = getattr(collaborator, "address", None)
    if is_zero_address(address):
        raise InvalidConfiguration(f"{name} address is missing or zero: {address!r}")
    return normalize_address(address)  # type: ignore[arg-type]


class FeeTierRouter:
    """Best-tier swap routing, slippage enforcement, and liquidity management.

    The pool factory is read from the swap router once, at construction.
    If the token service also implements Substrate (snapshot/revert/discard), every
    operation is rolled back as a whole when it fails.
    """

    def __init__(
        self,
        *,
        address: str,
        tokens: TokenService,
        swap_router: SwapRouter,
        quoter: Quoter,
        position_manager: PositionManager,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if is_zero_address(address):
            raise InvalidConfiguration(f"Router address is missing or zero: {address!r}")
        if tokens is None:
            raise InvalidConfiguration("tokens is required")
        router_address = _require_collaborator("swap_router", swap_router)
        quoter_address = _require_collaborator("quoter", quoter)
        positions_address = _require_collaborator("position_manager", position_manager)

        factory: PoolFactory = swap_router.factory
        _require_collaborator("pool factory", factory)

        self.address = normalize_address(address)
        self.config = config
        self.tokens = tokens
        self.swap_router = swap_router
        self.quoter = quoter
        self.position_manager = position_manager
        self.factory = factory

        self.events = EventLog()
        substrate = tokens if isinstance(tokens, Substrate) else None
        self.guard = OperationGuard(self.events, substrate)
        self.history = HistoryLedger()
        self.slippage = SlippagePolicy(config, self.events, self.guard)
        self.comparator = QuoteComparator(factory, quoter, config.fee_tiers)
        self.swaps = SwapExecutor(
            address=self.address,
            tokens=tokens,
            swap_router=swap_router,
            comparator=self.comparator,
            slippage=self.slippage,
            history=self.history,
            events=self.events,
            guard=self.guard,
            clock=clock,
        )
        self.liquidity = LiquidityManager(
            address=self.address,
            tokens=tokens,
            position_manager=position_manager,
            history=self.history,
            events=self.events,
            guard=self.guard,
            clock=clock,
        )

        logger.info(
            "fee_tier_router_initialized",
            address=self.address,
            swap_router=router_address,
            quoter=quoter_address,
            position_manager=positions_address,
            factory=normalize_address(factory.address),
            fee_tiers=config.fee_tiers,
            substrate=substrate is not None,
        )

    # --- Swaps ---

    def swap_exact_input(self, caller: str, request: ExactInputRequest) -> SwapOutcome:
        return self.swaps.swap_exact_input(caller, request)

    def swap_exact_output(self, caller: str, request: ExactOutputRequest) -> SwapOutcome:
        return self.swaps.swap_exact_output(caller, request)

    # --- Quotes (no custody, no history) ---

    def quote_exact_input(
        self,
        token_in: str,
        token_out: str,
        amount_in: int,
        sqrt_price_limit_x96: int = NO_PRICE_LIMIT,
    ) -> TierQuote:
        """Best tier and quoted output for amount_in, without executing."""
        token_in, token_out = validate_tokens(token_in, token_out)
        validate_amount(amount_in, "amount_in")
        return self.comparator.select_best_tier_exact_input(
            token_in, token_out, amount_in, sqrt_price_limit_x96
        )

    def quote_exact_output(
        self,
        token_in: str,
        token_out: str,
        amount_out: int,
        sqrt_price_limit_x96: int = NO_PRICE_LIMIT,
    ) -> TierQuote:
        """Best tier and quoted input for amount_out, without executing."""
        token_in, token_out = validate_tokens(token_in, token_out)
        validate_amount(amount_out, "amount_out")
        return self.comparator.select_best_tier_exact_output(
            token_in, token_out, amount_out, sqrt_price_limit_x96
        )

    # --- Liquidity ---

    def increase_liquidity(
        self, caller: str, request: IncreaseLiquidityRequest
    ) -> LiquidityOutcome:
        return self.liquidity.increase_liquidity(caller, request)

    def decrease_liquidity(
        self, caller: str, request: DecreaseLiquidityRequest
    ) -> LiquidityOutcome:
        return self.liquidity.decrease_liquidity(caller, request)

    # --- Slippage tolerance ---

    def get_slippage_tolerance(self, caller: str) -> int:
        return self.slippage.effective_tolerance(caller)

    def set_slippage_tolerance(self, caller: str, bps: int) -> ToleranceUpdated:
        return self.slippage.set_tolerance(caller, bps)

    def reset_slippage_tolerance(self, caller: str) -> ToleranceUpdated:
        return self.slippage.reset_tolerance(caller)

    # --- Global counters ---

    @property
    def total_swaps(self) -> int:
        return self.history.total_swaps

    @property
    def total_liquidity_actions(self) -> int:
        return self.history.total_liquidity_actions


__all__ = ["FeeTierRouter"]
