from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from .storage import ContractLayout

logger = logging.getLogger(__name__)


# Refrigerated transportation contract: clause name -> request file under requests/
DEFAULT_CLAUSE_REQUESTS: Dict[str, str] = {
    "ShipmentAgreed": "shipmentagreedrequest.json",
    "AutomaticAgreement": "automaticagreementrequest.json",
    "BuyerPayment": "buyerpaymentrequest.json",
    "EndLitigation": "endlitigationrequest.json",
    "LateShipment": "lateshipmentrequest.json",
    "SetContractInLitigation": "setcontractinlitigationrequest.json",
    "ShipmentDelivered": "shipmentdeliveredrequest.json",
    "TemperatureExcess": "temperatureexcessrequest.json",
}


def parse_clause_table(raw: Optional[str]) -> Optional[Dict[str, str]]:
    """Parse a JSON object of clause name -> request filename.

    Returns None for an empty value. Raises ValueError on anything that is
    not a flat object of non-empty strings.
    """
    if raw is None or not raw.strip():
        return None

    table = json.loads(raw)
    if not isinstance(table, dict):
        raise ValueError("clause table must be a JSON object")

    out: Dict[str, str] = {}
    for name, filename in table.items():
        if not isinstance(filename, str) or not filename.strip():
            raise ValueError(f"clause {name!r} must map to a non-empty filename")
        # Request files live directly under requests/
        if Path(filename).name != filename:
            raise ValueError(f"clause {name!r} filename must not contain a path: {filename!r}")
        out[str(name)] = filename
    return out


class ClauseTable:
    """Resolve a clause name to the request file that triggers it."""

    def __init__(self, layout: ContractLayout, requests: Optional[Mapping[str, str]] = None):
        self.layout = layout
        self.requests: Dict[str, str] = dict(DEFAULT_CLAUSE_REQUESTS if requests is None else requests)

    def names(self) -> List[str]:
        return list(self.requests.keys())

    def resolve(self, clause_name: str) -> Optional[Path]:
        filename = self.requests.get(clause_name)
        if not filename:
            logger.error(f"No request associated to clause {clause_name!r}.")
            return None
        return self.layout.request_path(filename)
