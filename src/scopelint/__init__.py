"""scopelint -- static checker for Container/Modifier/Private CSS scoping conventions."""

__version__ = "0.1.0"

from scopelint.analysis import analyze_selector  # noqa: E402
from scopelint.classifier import Classifier, classify  # noqa: E402
from scopelint.config import ConventionConfig, load_config  # noqa: E402
from scopelint.engine import (  # noqa: E402
    ElementUnit,
    SelectorUnit,
    SerialDispatcher,
    ThreadPoolDispatcher,
    run_analysis,
)
from scopelint.report import ReportAggregator, Summary  # noqa: E402
from scopelint.validation import check_element, run_rules  # noqa: E402

__all__ = [
    "__version__",
    "classify",
    "Classifier",
    "analyze_selector",
    "run_rules",
    "check_element",
    "run_analysis",
    "SelectorUnit",
    "ElementUnit",
    "SerialDispatcher",
    "ThreadPoolDispatcher",
    "ReportAggregator",
    "Summary",
    "ConventionConfig",
    "load_config",
]
