"""Swap and liquidity execution with custody, approval, and rollback handling."""

from feerouter.execution.custody import Custodian
from feerouter.execution.guard import OperationGuard
from feerouter.execution.liquidity import LiquidityManager
from feerouter.execution.swap import SwapExecutor

__all__ = ["Custodian", "LiquidityManager", "OperationGuard", "SwapExecutor"]
