"""Request-to-query translation: column resolution, search, ordering, paging.

Submodules are imported directly (``from gridquery.core.filters import ...``);
nothing is re-exported here so configuration modules can import
``core.template`` without pulling in the builders.
"""
