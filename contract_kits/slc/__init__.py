# Smart Legal Contract Kit
# Drive an external contract engine from on-disk template, data, state
# and per-clause request artifacts, with uniform response envelopes

from .envelope import ErrorCode, ErrorTaxonomy, make_response
from .storage import ContractLayout, ContractStorage, LoadResult, LoadStatus, load_json
from .clauses import ClauseTable, DEFAULT_CLAUSE_REQUESTS
from .engine import ContractEngine, EngineResult
from .orchestrator import ContractOrchestrator

__all__ = [
    'ContractOrchestrator',
    'ContractEngine',
    'EngineResult',
    'ClauseTable',
    'DEFAULT_CLAUSE_REQUESTS',
    'ContractLayout',
    'ContractStorage',
    'LoadResult',
    'LoadStatus',
    'load_json',
    'ErrorCode',
    'ErrorTaxonomy',
    'make_response',
]
__version__ = '1.0.0'
