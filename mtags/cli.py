from __future__ import annotations

import argparse
import json
import logging
import os
import platform
import sys
from pathlib import Path
from typing import Any, Optional

from .config import EngineConfig, find_config, load_config
from .errors import MTagsUserError
from .registry import TagRegistry, create_default_registry
from .schema import DiagReport, ParameterInfo, TagInfo, TagsList
from .version import tool_version


def _dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, default=str)


def _setup_logging() -> None:
    level = logging.DEBUG if os.environ.get("MTAGS_DEBUG") == "1" else logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    root = logging.getLogger("mtags")
    root.handlers[:] = [handler]
    root.setLevel(level)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mtags",
        description="Mustache-style tag engine (introspection)",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--config",
        metavar="PATH",
        help="путь к mtags.yaml (по умолчанию ищется в текущем каталоге)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_list = sub.add_parser("list", help="Списки сущностей (JSON)")
    sp_list.add_argument("what", choices=["tags"], help="что вывести")

    sub.add_parser("diag", help="Диагностика окружения и конфига (JSON)")

    return p


def _resolve_config(ns: argparse.Namespace) -> tuple[Optional[Path], EngineConfig]:
    if ns.config:
        path = Path(ns.config)
        if not path.is_file():
            raise ValueError(f"Config file not found: {path}")
    else:
        path = find_config(Path.cwd())
    return path, load_config(path)


def _list_tags(registry: TagRegistry) -> TagsList:
    return TagsList(
        tags=[
            TagInfo(
                name=tag.name,
                kind=tag.kind.value,
                parameters=[
                    ParameterInfo(name=p.name, required=p.required, default=p.default)
                    for p in tag.parameters()
                ],
                context_sensitive=tag.is_context_sensitive(),
                has_content=tag.has_content,
                has_else=tag.has_else_branch,
            )
            for tag in registry.tags()
        ]
    )


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging()

    try:
        config_path, cfg = _resolve_config(ns)
        registry = create_default_registry(cfg)

        if ns.cmd == "list":
            if ns.what == "tags":
                data = _list_tags(registry).model_dump(by_alias=True, mode="json")
            else:
                raise ValueError(f"Unknown list target: {ns.what}")
            sys.stdout.write(_dumps(data))
            return 0

        if ns.cmd == "diag":
            report = DiagReport(
                tool_version=tool_version(),
                python=sys.version.split()[0],
                platform=platform.platform(),
                config_path=str(config_path) if config_path else None,
                config=cfg.to_dict(),
                tag_stats=registry.get_stats(),
            )
            sys.stdout.write(_dumps(report.model_dump(by_alias=True, mode="json")))
            return 0

    except MTagsUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
