from .key_term import KeyTerm
from .module import Module
from .question import Question

__all__ = ["KeyTerm", "Module", "Question"]
