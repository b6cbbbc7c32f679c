"""
Application settings for the signature service.
Externalizes config so the same image runs any contract directory/engine.
"""
import os
from typing import Dict, Optional

from contract_kits.slc.clauses import parse_clause_table


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _env_float(name: str) -> Optional[float]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    value = float(raw)
    if value <= 0:
        raise ValueError(f"{name} must be a positive number of seconds")
    return value


class AppSettings:
    """Application settings with environment variable support."""

    def __init__(self):
        # Deployment role shown by the greeting route (intentionally no default)
        self.role: Optional[str] = os.getenv("ROLE")

        self.contract_dir: str = os.getenv("CONTRACT_DIR", "./contracts/refrigerated-transportation/")
        # JSON object {"ClauseName": "request-file.json", ...}; unset keeps the built-in table
        self.clause_table: Optional[Dict[str, str]] = parse_clause_table(os.getenv("SLC_CLAUSE_TABLE"))
        # "package.module:attribute" of an engine instance or zero-arg factory
        self.engine_path: Optional[str] = (os.getenv("SLC_ENGINE") or "").strip() or None
        self.engine_timeout_seconds: Optional[float] = _env_float("ENGINE_TIMEOUT_SECONDS")

        self.enable_contract_api: bool = _env_flag("ENABLE_CONTRACT_API", "false")
        self.enable_audit_logging: bool = _env_flag("ENABLE_AUDIT_LOGGING", "true")

        self.api_version: str = os.getenv("API_VERSION", "1.0.0")
        self.build_commit: str = os.getenv("BUILD_COMMIT", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "development")
        self.port: int = int(os.getenv("PORT", "3000"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = AppSettings()
