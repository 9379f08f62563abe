"""Kernel value types."""
from es_atompub.kernel.types.option import Nothing, Option, Some, option_of
from es_atompub.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Nothing", "Ok", "Option", "Result", "Some", "option_of"]
