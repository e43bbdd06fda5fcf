__version__ = "0.1.0"

from dictkit.dictionary import Dictionary
from dictkit.equality import deep_equal
from dictkit.frozen import FrozenDictionary
from dictkit.zero import zero_factory

__all__ = [
    "Dictionary",
    "FrozenDictionary",
    "deep_equal",
    "zero_factory",
]
