"""
Resolve the ``DAIETSU_*`` settings a client is configured from.

Settings can sit in the process environment, in a ``.env`` file, or be passed
as explicit overrides. :func:`build_environment` layers the three into one
mapping for :meth:`daietsu_api.core.config.ClientConfig.from_mapping`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _read_dotenv(path: Path) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` lines; a missing file yields no settings."""
    if not path.is_file():
        return {}

    settings: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        name, value = line.split("=", 1)
        settings[name.strip()] = _strip_quotes(value.strip())
    return settings


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Copy settings from a dotenv file into ``environ`` (``os.environ`` by default).

    Names already present in ``environ`` keep their value. Returns a snapshot
    of ``environ`` after loading.
    """
    target: MutableMapping[str, str] = os.environ if environ is None else environ
    for name, value in _read_dotenv(Path(path)).items():
        target.setdefault(name, value)
    return dict(target)


@dataclass(frozen=True)
class ClientEnvironment:
    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    Layer ``base`` (the process environment unless given), the dotenv file and
    ``overrides``, in increasing priority.

    The dotenv file only supplies names the base lacks; ``env_file=None``
    skips it.
    """
    settings: Dict[str, str] = dict(os.environ if base is None else base)

    if env_file is not None:
        for name, value in _read_dotenv(Path(env_file)).items():
            settings.setdefault(name, value)

    settings.update(overrides or {})
    return ClientEnvironment(variables=settings)
