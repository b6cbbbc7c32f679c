# startup.py
# Runs before the FastAPI app serves requests
# Resolves the contract engine and builds the orchestrator

import importlib
import logging
from typing import Any, Optional

from contract_kits.slc import ClauseTable, ContractEngine, ContractLayout, ContractOrchestrator
from contract_kits.slc.dev_engine import DevContractEngine

logger = logging.getLogger(__name__)


def load_engine(engine_path: Optional[str], environment: str = "development") -> Any:
    """
    Resolve the contract engine.

    engine_path is "package.module:attribute"; the attribute is either an
    engine instance or a zero-argument factory returning one.
    Unset: the development engine is used (warned about in production).
    """
    if not engine_path:
        if environment == "production":
            logger.warning("[STARTUP] WARNING: SLC_ENGINE not set, falling back to development engine")
        else:
            logger.info("[STARTUP] Using development contract engine")
        return DevContractEngine()

    module_name, sep, attr = engine_path.partition(":")
    if not sep or not module_name or not attr:
        raise RuntimeError(f"SLC_ENGINE must look like 'package.module:attribute', got {engine_path!r}")

    try:
        module = importlib.import_module(module_name)
        target = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise RuntimeError(f"SLC_ENGINE {engine_path!r} could not be loaded: {e}") from e

    # A class also satisfies the protocol check, so instantiate classes first
    if isinstance(target, type):
        engine = target()
    elif isinstance(target, ContractEngine):
        engine = target
    elif callable(target):
        engine = target()
    else:
        engine = target

    if not isinstance(engine, ContractEngine):
        raise RuntimeError(
            f"SLC_ENGINE {engine_path!r} does not provide load_template/create_clause/init/trigger"
        )
    logger.info(f"[STARTUP] Loaded contract engine from {engine_path}")
    return engine


def build_orchestrator(settings) -> ContractOrchestrator:
    """Build the orchestrator for the configured contract directory."""
    engine = load_engine(settings.engine_path, settings.environment)
    layout = ContractLayout.from_directory(settings.contract_dir)
    if not layout.root.is_dir():
        logger.warning(f"[STARTUP] Contract directory {layout.root} does not exist yet")

    return ContractOrchestrator(
        engine,
        layout,
        clause_table=ClauseTable(layout, settings.clause_table),
        engine_timeout=settings.engine_timeout_seconds,
    )
