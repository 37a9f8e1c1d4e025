"""Тесты для Reentrancy Guard."""

import pytest

from src.core.errors import ReentrancyError
from src.gatekeeper.reentrancy import ReentrancyGuard


class TestReentrancyGuard:
    def test_enter_and_release(self):
        guard = ReentrancyGuard()
        with guard.enter("swap"):
            assert guard.locked
            assert guard.entry_point == "swap"
        assert not guard.locked
        assert guard.entry_point is None

    def test_nested_entry_rejected(self):
        guard = ReentrancyGuard()
        with guard.enter("swap"):
            with pytest.raises(ReentrancyError) as exc_info:
                with guard.enter("remove_liquidity"):
                    pass
            assert guard.locked
        assert exc_info.value.context == {
            "entry_point": "remove_liquidity",
            "active_entry_point": "swap",
        }

    def test_released_after_exception(self):
        guard = ReentrancyGuard()
        with pytest.raises(RuntimeError):
            with guard.enter("swap"):
                raise RuntimeError("boom")
        assert not guard.locked
        with guard.enter("swap"):
            pass
