from scopelint.markup.extract import MarkupElement, element_units, extract_elements

__all__ = ["MarkupElement", "extract_elements", "element_units"]
