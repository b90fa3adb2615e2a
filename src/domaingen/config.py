"""Generator settings, read from ``DOMAINGEN_*`` environment variables."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


class GeneratorConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    output_dir: Path = Path(".")
    package_name: str = "domain"
    # Import path of the ORM classes and their enums, used by generated imports.
    orm_module: str = "models"
    runtime_package: str = "domaingen.runtime"
    generate_repository: bool = True
    generate_service: bool = True

    @classmethod
    def from_env(cls) -> GeneratorConfig:
        return cls(
            output_dir=Path(os.getenv("DOMAINGEN_OUTPUT_DIR", ".")),
            package_name=os.getenv("DOMAINGEN_PACKAGE_NAME", "domain"),
            orm_module=os.getenv("DOMAINGEN_ORM_MODULE", "models"),
            runtime_package=os.getenv("DOMAINGEN_RUNTIME_PACKAGE", "domaingen.runtime"),
            generate_repository=_env_flag("DOMAINGEN_GENERATE_REPOSITORY", True),
            generate_service=_env_flag("DOMAINGEN_GENERATE_SERVICE", True),
        )
