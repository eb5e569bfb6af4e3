from __future__ import annotations

import json
from typing import Any, List, Optional

from doctor.contracts.diagnostics import (
    INCORRECT_DATA,
    RPC_ERROR,
    ExpectedAssetState,
    ValidationError,
)

_MISSING = object()


def json_type(value: Any) -> str:
    """
    Name of the JSON type a decoded value came from. Absent keys are 'undefined'.
    """
    if value is _MISSING:
        return "undefined"
    if value is None:
        return "null"
    # bool before int: True is an int in Python
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def loosely_equal(actual: Any, expected: bool) -> bool:
    """
    Boolean comparison that also accepts the stringified form ("true"/"false")
    some upstream serializers emit.
    """
    if isinstance(actual, bool):
        return actual is expected
    if isinstance(actual, str):
        return actual.strip().lower() == ("true" if expected else "false")
    return False


def _render_bool(value: bool) -> str:
    return "true" if value else "false"


def _string_field_message(name: str, actual: Any, expected: str) -> Optional[str]:
    if json_type(actual) != "string":
        return f"expected typeof {name} to be 'string', got: '{json_type(actual)}'"
    if actual != expected:
        return f"expected {name} '{expected}', got: '{actual}'"
    return None


def _locked_message(actual: Any, expected: bool) -> Optional[str]:
    if json_type(actual) != "boolean":
        return f"expected typeof locked to be 'boolean', got: '{json_type(actual)}'"
    if not loosely_equal(actual, expected):
        return f"expected locked to be {_render_bool(expected)}, got: {_render_bool(actual)}"
    return None


def _rpc_message(err: Any) -> str:
    if isinstance(err, str):
        return err
    try:
        return json.dumps(err)
    except (TypeError, ValueError):
        return str(err)


def rpc_error(mint_block_hash: str, err: Any) -> ValidationError:
    return ValidationError(type=RPC_ERROR, mint_block_hash=mint_block_hash, field="", message=_rpc_message(err))


def validate(
    observed: Any,
    mint_block_hash: str,
    expected_block_hash: str,
    expected_account: str,
    expected_owner: str,
    expected_locked: bool,
) -> List[ValidationError]:
    """
    Compare one asset block returned by the API with ground truth.

    Never raises. An upstream {"error": ...} payload short-circuits into a single
    rpc error; otherwise each of the four fields is checked on its own, type
    first, then value.
    """
    fields = observed if isinstance(observed, dict) else {}

    if "error" in fields:
        return [rpc_error(mint_block_hash, fields["error"])]

    checks = [
        ("block_hash", _string_field_message("block_hash", fields.get("block_hash", _MISSING), expected_block_hash)),
        ("account", _string_field_message("account", fields.get("account", _MISSING), expected_account)),
        ("owner", _string_field_message("owner", fields.get("owner", _MISSING), expected_owner)),
        ("locked", _locked_message(fields.get("locked", _MISSING), expected_locked)),
    ]

    errors: List[ValidationError] = []
    for name, message in checks:
        if message is None:
            continue
        errors.append(
            ValidationError(
                type=INCORRECT_DATA,
                mint_block_hash=mint_block_hash,
                field=name,
                message=message,
            )
        )
    return errors


def validate_expected(observed: Any, expected: ExpectedAssetState) -> List[ValidationError]:
    return validate(
        observed,
        expected.mint_block_hash,
        expected.block_hash,
        expected.account,
        expected.owner,
        expected.locked,
    )
