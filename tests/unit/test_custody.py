"""Tests for token custody and one-shot approvals."""

import pytest

from feerouter.errors import TokenTransferFailed
from feerouter.execution.custody import Custodian
from tests.helpers import ALICE, ROUTER, WETH, ChainError, InMemoryChain, fund

SPENDER = "0x00000000000000000000000000000000000005e7"


@pytest.fixture
def chain() -> InMemoryChain:
    chain = InMemoryChain()
    fund(chain, ALICE, WETH, 1000)
    return chain


class TestTakeAndRelease:
    def test_take_moves_into_custody(self, chain):
        custodian = Custodian(chain, ROUTER)

        custodian.take(WETH, ALICE, 400)

        assert chain.balance_of(WETH, ALICE) == 600
        assert chain.balance_of(WETH, ROUTER) == 400
        assert chain.allowance(WETH, ALICE, ROUTER) == 600

    def test_release_returns_tokens(self, chain):
        custodian = Custodian(chain, ROUTER)
        custodian.take(WETH, ALICE, 400)

        custodian.release(WETH, ALICE, 150)

        assert chain.balance_of(WETH, ALICE) == 750
        assert chain.balance_of(WETH, ROUTER) == 250

    def test_zero_amounts_are_noops(self, chain):
        custodian = Custodian(chain, ROUTER)

        custodian.take(WETH, ALICE, 0)
        custodian.release(WETH, ALICE, 0)

        assert chain.balance_of(WETH, ALICE) == 1000

    def test_insufficient_allowance_propagates(self, chain):
        custodian = Custodian(chain, ROUTER)

        with pytest.raises(ChainError):
            custodian.take(WETH, ALICE, 1001)

    def test_false_return_raises(self, chain):
        custodian = Custodian(chain, ROUTER)
        custodian.take(WETH, ALICE, 10)
        chain.failing_transfers.add(WETH)

        with pytest.raises(TokenTransferFailed) as exc_info:
            custodian.release(WETH, ALICE, 10)

        assert exc_info.value.action == "transfer"
        assert exc_info.value.amount == 10


class TestApproval:
    def test_grants_exact_amount_then_revokes(self, chain):
        custodian = Custodian(chain, ROUTER)

        with custodian.approval(WETH, SPENDER, 250):
            assert chain.allowance(WETH, ROUTER, SPENDER) == 250

        assert chain.allowance(WETH, ROUTER, SPENDER) == 0

    def test_revokes_on_failure(self, chain):
        custodian = Custodian(chain, ROUTER)

        with pytest.raises(RuntimeError):
            with custodian.approval(WETH, SPENDER, 250):
                raise RuntimeError("router reverted")

        assert chain.allowance(WETH, ROUTER, SPENDER) == 0
        assert chain.approvals[-2:] == [
            (WETH, ROUTER, SPENDER, 250),
            (WETH, ROUTER, SPENDER, 0),
        ]

    def test_zero_amount_grants_nothing(self, chain):
        custodian = Custodian(chain, ROUTER)
        before = list(chain.approvals)

        with custodian.approval(WETH, SPENDER, 0):
            pass

        assert chain.approvals == before


class TestHolding:
    def test_success_keeps_custody_for_the_body(self, chain):
        custodian = Custodian(chain, ROUTER)

        with custodian.holding(WETH, ALICE, 400):
            assert chain.balance_of(WETH, ROUTER) == 400
            custodian.release(WETH, ALICE, 400)

        assert chain.balance_of(WETH, ALICE) == 1000

    def test_failure_returns_everything_held(self, chain):
        custodian = Custodian(chain, ROUTER)

        with pytest.raises(RuntimeError):
            with custodian.holding(WETH, ALICE, 400):
                raise RuntimeError("router reverted")

        assert chain.balance_of(WETH, ALICE) == 1000
        assert chain.balance_of(WETH, ROUTER) == 0

    def test_failure_returns_only_unspent_part(self, chain):
        custodian = Custodian(chain, ROUTER)

        with pytest.raises(RuntimeError):
            with custodian.holding(WETH, ALICE, 400):
                chain.transfer(WETH, ROUTER, SPENDER, 150)
                raise RuntimeError("slippage")

        assert chain.balance_of(WETH, ALICE) == 850
        assert chain.balance_of(WETH, SPENDER) == 150
        assert chain.balance_of(WETH, ROUTER) == 0

    def test_existing_router_balance_is_not_paid_out(self, chain):
        chain.mint(WETH, ROUTER, 70)
        custodian = Custodian(chain, ROUTER)

        with pytest.raises(RuntimeError):
            with custodian.holding(WETH, ALICE, 400):
                raise RuntimeError("boom")

        assert chain.balance_of(WETH, ALICE) == 1000
        assert chain.balance_of(WETH, ROUTER) == 70
