"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI params
2) Environment variables
3) ~/.config/faultline/faultline.yaml
4) Built-in defaults

Environment variable format:
- Prefix: ``FAULTLINE_``
- Nested keys: ``__`` separator
- Example: ``FAULTLINE_HTTP__DECODER__MAX_BODY_BYTES=4096``
  -> ``http.decoder.max_body_bytes = 4096``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Mapping

from .models import DEFAULT_CONFIG_PATH, FaultlineSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> FaultlineSettings:
    """Resolve settings, reading YAML from ``config_path`` when given.

    A missing YAML file is not an error; its layer is simply empty.
    """
    resolved = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    class _Settings(FaultlineSettings):
        config_path: ClassVar[Path] = resolved

    return _Settings(**dict(cli_params or {}))
