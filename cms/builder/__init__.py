"""
Form schema editing for admin UIs.
"""

from cms.builder.form_builder import Clipboard, FieldUIState, FormBuilder

__all__ = ["Clipboard", "FieldUIState", "FormBuilder"]
