from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel

from .registry import registry

# Ensure built-in checks are imported/registered when generating a catalog.
from . import checks as _builtin_checks  # noqa: F401


class CheckCatalogEntry(BaseModel):
    check_id: str
    check_title: str
    suite: str

    module: str
    class_name: str

    config_model: str
    config_schema: Dict[str, Any]

    column_candidates: List[str]
    partial_match: bool


def build_catalog() -> List[CheckCatalogEntry]:
    entries: List[CheckCatalogEntry] = []
    for check_id in registry.ids():
        check_cls = registry.get(check_id)
        cfg_model = check_cls.config_model
        defaults = check_cls().default_config()
        entries.append(
            CheckCatalogEntry(
                check_id=check_id,
                check_title=getattr(check_cls, "check_title", ""),
                suite=check_cls.suite,
                module=check_cls.__module__,
                class_name=check_cls.__name__,
                config_model=cfg_model.__name__,
                config_schema=cfg_model.model_json_schema(),
                column_candidates=list(defaults.column_candidates),
                partial_match=defaults.partial_match,
            )
        )

    entries.sort(key=lambda e: e.check_id)
    return entries


def _dump_json(catalog: list[dict[str, Any]]) -> str:
    return json.dumps(catalog, indent=2, sort_keys=True)


def _dump_yaml(catalog: list[dict[str, Any]]) -> str:
    return yaml.safe_dump(catalog, sort_keys=True)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate a checks catalog from the registry.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    args = parser.parse_args(argv)

    catalog = [e.model_dump() for e in build_catalog()]
    if args.format == "json":
        print(_dump_json(catalog))
    else:
        print(_dump_yaml(catalog))


if __name__ == "__main__":
    main()
