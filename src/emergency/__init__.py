"""Emergency Unwind — необратимая остановка пула и выкуп по снапшоту.

- Latch ACTIVE → HALTED
- Снапшот реальных балансов на момент halt
- Пропорциональный выкуп claim-токенов с округлением вниз
"""

from .state_machine import EmergencyStateMachine, EmergencyTransitionResult

__all__ = [
    "EmergencyStateMachine",
    "EmergencyTransitionResult",
]
