from scopelint.validation.markup import check_element
from scopelint.validation.reuse import PrivateIndex, PrivateUsage, check_private_reuse
from scopelint.validation.validator import run_rules

__all__ = [
    "run_rules",
    "check_element",
    "PrivateIndex",
    "PrivateUsage",
    "check_private_reuse",
]
