from scopelint.engine.runner import (
    ElementUnit,
    SelectorUnit,
    SerialDispatcher,
    ThreadPoolDispatcher,
    UnitResult,
    evaluate_unit,
    run_analysis,
)

__all__ = [
    "SelectorUnit",
    "ElementUnit",
    "UnitResult",
    "evaluate_unit",
    "SerialDispatcher",
    "ThreadPoolDispatcher",
    "run_analysis",
]
