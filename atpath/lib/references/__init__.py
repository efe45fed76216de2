"""Reference engine for @path shorthand.

Suggests reference targets while typing and keeps references valid when
files and folders move.
"""

from .hook import RenameHook
from .propagator import RenamePropagator
from .propagator import propagate
from .suggester import Suggester
from .suggester import find_trigger
from .suggester import suggest

__all__ = [
    "RenameHook",
    "RenamePropagator",
    "Suggester",
    "find_trigger",
    "propagate",
    "suggest",
]
