from scopelint.analysis.analyzer import analyze_selector

__all__ = ["analyze_selector"]
