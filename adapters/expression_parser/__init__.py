from .precedence_parser import PrecedenceParser

__all__ = ["PrecedenceParser"]
