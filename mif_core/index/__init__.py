"""Entity index built by the first pass over the input."""

from mif_core.index.entity_index import EntityIndex
from mif_core.index.index_builder import IndexBuilder

__all__ = ['EntityIndex', 'IndexBuilder']
