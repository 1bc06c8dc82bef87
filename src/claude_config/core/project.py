# src/claude_config/core/project.py
"""
Descoberta de projetos com configuração local.

`scan_projects(start)` percorre a árvore de diretórios a partir de `start`
e retorna um `ProjectInfo` para cada diretório que contém
`.claude/config.json`.

Regras:
    - Diretórios cujo nome começa (sem diferenciar maiúsculas) por um item
      da lista de ignorados não são visitados
      (default: node_modules, target, .git, dist, build)
    - Diretórios ilegíveis são pulados silenciosamente
    - Com `max_depth`, a varredura para quando a profundidade atinge o
      limite (`start` tem profundidade 0; `max_depth=1` olha apenas os
      filhos diretos)
    - Resultado ordenado por nome e depois por raiz, sem duplicatas
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from .paths import project_config_path


logger = logging.getLogger(__name__)

DEFAULT_IGNORE = ("node_modules", "target", ".git", "dist", "build")


@dataclass(frozen=True)
class ProjectInfo:
    root: Path
    claude_dir: Path
    config_path: Path
    has_config: bool
    name: str
    last_modified: Optional[datetime] = None

    @classmethod
    def from_config_path(cls, config_path: Union[str, Path]) -> "ProjectInfo":
        config_path = Path(config_path)
        claude_dir = config_path.parent
        root = claude_dir.parent

        try:
            mtime = config_path.stat().st_mtime
            last_modified: Optional[datetime] = datetime.fromtimestamp(mtime, tz=timezone.utc)
            has_config = True
        except OSError:
            last_modified = None
            has_config = False

        return cls(
            root=root,
            claude_dir=claude_dir,
            config_path=config_path,
            has_config=has_config,
            name=root.name or "unknown",
            last_modified=last_modified,
        )


def _is_ignored(name: str, ignore: Iterable[str]) -> bool:
    lowered = name.lower()
    return any(lowered.startswith(item.lower()) for item in ignore)


def scan_projects(
    start: Union[str, Path],
    max_depth: Optional[int] = None,
    ignore: Sequence[str] = DEFAULT_IGNORE,
) -> List[ProjectInfo]:
    """Lista os projetos sob `start` que possuem `.claude/config.json`."""
    found = {}

    def _scan(directory: Path, depth: int) -> None:
        if max_depth is not None and depth >= max_depth:
            return
        try:
            with os.scandir(directory) as it:
                children = sorted(Path(e.path) for e in it if e.is_dir())
        except OSError as exc:
            logger.debug("Diretório ignorado (ilegível): %s: %s", directory, exc)
            return

        for child in children:
            if _is_ignored(child.name, ignore):
                continue
            config = project_config_path(child)
            if config.is_file():
                found[child] = ProjectInfo.from_config_path(config)
            _scan(child, depth + 1)

    _scan(Path(start), 0)
    return sorted(found.values(), key=lambda p: (p.name, str(p.root)))


__all__ = ["ProjectInfo", "DEFAULT_IGNORE", "scan_projects"]
