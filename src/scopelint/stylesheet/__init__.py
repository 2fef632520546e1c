from scopelint.stylesheet.flatten import flatten
from scopelint.stylesheet.model import AtRuleBlock, Declaration, RuleBlock, Stylesheet
from scopelint.stylesheet.parser import parse_stylesheet
from scopelint.stylesheet.selectors import parse_selector, parse_selector_list

__all__ = [
    "parse_stylesheet",
    "parse_selector",
    "parse_selector_list",
    "flatten",
    "Stylesheet",
    "RuleBlock",
    "AtRuleBlock",
    "Declaration",
]
