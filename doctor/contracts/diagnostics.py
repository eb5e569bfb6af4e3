from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

RPC_ERROR = "rpc error"
INCORRECT_DATA = "incorrect data"
EXCEPTION = "exception"

FRONTIER_ENDPOINT = "get_asset_frontier"
CHAIN_ENDPOINT = "get_asset_chain"
AT_HEIGHT_ENDPOINT = "get_asset_at_height"


@dataclass(frozen=True)
class ValidationError:
    type: str
    mint_block_hash: str
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": self.type,
            "mint_block_hash": self.mint_block_hash,
            "field": self.field,
            "message": self.message,
        }


def exception_error(exc: BaseException, mint_block_hash: str = "") -> ValidationError:
    return ValidationError(
        type=EXCEPTION,
        mint_block_hash=mint_block_hash,
        field="",
        message=f"{exc.__class__.__name__}: {exc}",
    )


@dataclass(frozen=True)
class ExpectedAssetState:
    """
    Hand-verified ground truth for one asset at one point of its chain.
    verified=False marks values nobody has checked against the ledger yet.
    """
    mint_block_hash: str
    block_hash: str
    account: str
    owner: str
    locked: bool
    verified: bool = True


@dataclass(frozen=True)
class AssetQuery:
    endpoint: str
    issuer: str
    mint_block_hash: str
    height: Optional[int] = None

    def params(self) -> Dict[str, str]:
        out = {"issuer": self.issuer, "mint_block_hash": self.mint_block_hash}
        if self.height is not None:
            out["height"] = str(self.height)
        return out


@dataclass(frozen=True)
class DiagnosticOutcome:
    success: bool
    errors: List[ValidationError] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "errors": [e.to_dict() for e in self.errors]}


class Report(Dict[str, DiagnosticOutcome]):
    """
    Case name -> outcome, in case declaration order.
    """

    @property
    def ok(self) -> bool:
        return all(o.success for o in self.values())

    def failed(self) -> List[str]:
        return [name for name, o in self.items() if not o.success]

    def to_dict(self) -> Dict[str, Any]:
        return {name: o.to_dict() for name, o in self.items()}
