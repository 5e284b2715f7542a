"""Kind-specific extractors and the component walker dispatching to them."""

from .base import AbstractExtractor, ExtractionContext
from .component import ScriptExtractor
from .computed import ComputedExtractor, collect_dependencies
from .data import DataExtractor
from .events import EventExtractor
from .methods import MethodExtractor, build_syntax
from .model import ModelExtractor
from .props import PropExtractor
from .slots import SlotExtractor

__all__ = [
    "AbstractExtractor",
    "ComputedExtractor",
    "DataExtractor",
    "EventExtractor",
    "ExtractionContext",
    "MethodExtractor",
    "ModelExtractor",
    "PropExtractor",
    "ScriptExtractor",
    "SlotExtractor",
    "build_syntax",
    "collect_dependencies",
]
