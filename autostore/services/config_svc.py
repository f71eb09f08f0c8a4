# autostore/services/config_svc.py
from __future__ import annotations

from dataclasses import dataclass

from ..db import read_config_yaml

DEFAULTS = {
    "depreciate_on_update": False,
    "restrict_store_delete": False,
    "strict_condition": False,
    "log_level": "INFO",
    "operator": "owner",
    "export_dir": "exports",
}


def _to_bool(v, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"):
            return True
        if s in ("0", "false", "no", "off", ""):
            return False
    return default


def get_config(path: str | None = None) -> dict:
    cfg = read_config_yaml(path)

    # typed values with defaults as fallback
    out = {
        "depreciate_on_update": _to_bool(cfg.get("depreciate_on_update"), DEFAULTS["depreciate_on_update"]),
        "restrict_store_delete": _to_bool(cfg.get("restrict_store_delete"), DEFAULTS["restrict_store_delete"]),
        "strict_condition": _to_bool(cfg.get("strict_condition"), DEFAULTS["strict_condition"]),
        "log_level": str(cfg.get("log_level") or DEFAULTS["log_level"]).upper(),
        "operator": str(cfg.get("operator") or DEFAULTS["operator"]),
        "export_dir": str(cfg.get("export_dir") or DEFAULTS["export_dir"]),
    }
    return out


@dataclass(frozen=True)
class Policy:
    """Behaviour switches for the Repository."""
    depreciate_on_update: bool = False
    restrict_store_delete: bool = False
    strict_condition: bool = False

    @classmethod
    def from_config(cls, cfg: dict) -> "Policy":
        return cls(
            depreciate_on_update=bool(cfg.get("depreciate_on_update", DEFAULTS["depreciate_on_update"])),
            restrict_store_delete=bool(cfg.get("restrict_store_delete", DEFAULTS["restrict_store_delete"])),
            strict_condition=bool(cfg.get("strict_condition", DEFAULTS["strict_condition"])),
        )
