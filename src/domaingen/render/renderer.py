"""Render domain model, repository and service modules for schema types.

Templates live in ``templates/`` next to this module. Every field selector
and code fragment helper is exposed to them as a Jinja2 global.
"""

from __future__ import annotations

import ast
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from domaingen.annotations import FieldScope
from domaingen.config import GeneratorConfig
from domaingen.core import codegen, fields, scope, typechecks
from domaingen.core.naming import pascal_case, snake_case
from domaingen.core.resolver import get_domain_field
from domaingen.schema.descriptors import FieldDescriptor, TypeDescriptor

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

# Outputs of earlier single-entity layouts, removed on every run.
LEGACY_OUTPUTS = ("domain_model.py", "repository.py", "service.py")

_GLOBALS: dict[str, Any] = {
    "FieldScope": FieldScope,
    "domain_fields": fields.domain_fields,
    "create_fields": fields.create_fields,
    "update_fields": fields.update_fields,
    "response_fields": fields.response_fields,
    "query_fields": fields.query_fields,
    "searchable_fields": fields.searchable_fields,
    "sortable_fields": fields.sortable_fields,
    "updateable_fields": fields.updateable_fields,
    "non_default_domain_fields": fields.non_default_domain_fields,
    "default_domain_fields": fields.default_domain_fields,
    "has_scope": scope.has_scope,
    "is_required": scope.is_required,
    "is_time_field": typechecks.is_time_field,
    "has_time_fields": typechecks.has_time_fields,
    "field_predicate": codegen.field_predicate,
    "search_method": codegen.search_method,
    "find_by_method": codegen.find_by_method,
    "generate_search_condition": codegen.generate_search_condition,
    "generate_id_operation": codegen.generate_id_operation,
    "id_conversion": codegen.id_conversion,
    "generate_orm_to_domain_assignment": codegen.generate_orm_to_domain_assignment,
    "set_field_call": codegen.set_field_call,
    "specific_methods": codegen.specific_methods,
    "id_class": codegen.id_class,
    "wrap_id": codegen.wrap_id,
    "last": codegen.last,
    "get_domain_field": get_domain_field,
    "pascal_case": pascal_case,
    "snake_case": snake_case,
}


def _optional(field: FieldDescriptor) -> str:
    return f"{field.python_type} | None"


def _pydantic_default(field: FieldDescriptor) -> str:
    """Right-hand side of a generated pydantic field declaration."""
    annotation = get_domain_field(field)
    kwargs: list[str] = []
    if annotation is not None:
        if annotation.description:
            kwargs.append(f"description={annotation.description!r}")
        if annotation.example is not None:
            kwargs.append(f"examples=[{annotation.example!r}]")
        if annotation.sensitive:
            kwargs.append("repr=False")
    if not kwargs:
        return "None"
    return f"Field(default=None, {', '.join(kwargs)})"


_env: Environment | None = None


def create_jinja_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    env.globals.update(_GLOBALS)
    env.filters["optional"] = _optional
    env.filters["pydantic_default"] = _pydantic_default
    return env


def get_jinja_env() -> Environment:
    global _env
    if _env is None:
        _env = create_jinja_env()
    return _env


def _module_names(type_: TypeDescriptor) -> dict[str, str]:
    base = snake_case(type_.entity_name)
    return {
        "model": f"{base}_domain_model",
        "repository": f"{base}_domain_repository",
        "service": f"{base}_domain_service",
    }


def _context(type_: TypeDescriptor, config: GeneratorConfig) -> dict[str, Any]:
    annotated = fields.domain_fields(type_)
    signature_types = [f.python_type for f in annotated] + [type_.id.python_type]
    enums = sorted({f.enum_class for f in annotated if f.is_enum})
    return {
        "type": type_,
        "entity": type_.entity_name,
        "orm": type_.name,
        "config": config,
        "runtime": config.runtime_package,
        "modules": _module_names(type_),
        "enums": enums,
        "uses_datetime": any("datetime" in t for t in signature_types),
        "uses_uuid": any("UUID" in t for t in signature_types),
        "time_sortable": [f.name for f in fields.sortable_fields(type_) if typechecks.is_time_field(f)],
        "enum_sortable": {f.name: f.enum_class for f in fields.sortable_fields(type_) if f.is_enum},
    }


def render_type(type_: TypeDescriptor, config: GeneratorConfig) -> dict[str, str]:
    """Return ``{filename: source}`` for every module generated for ``type_``."""
    env = get_jinja_env()
    context = _context(type_, config)
    modules = context["modules"]

    outputs = {f"{modules['model']}.py": env.get_template("domain_model.py.j2").render(context)}
    if config.generate_repository:
        outputs[f"{modules['repository']}.py"] = env.get_template("repository.py.j2").render(context)
    if config.generate_service:
        outputs[f"{modules['service']}.py"] = env.get_template("service.py.j2").render(context)
    return outputs


def _check_source(path: Path, source: str) -> bool:
    try:
        ast.parse(source, filename=str(path))
    except SyntaxError as exc:
        logger.warning("Generated %s does not parse: %s (line %s)", path, exc.msg, exc.lineno)
        return False
    return True


def generate(types: Iterable[TypeDescriptor], config: GeneratorConfig) -> list[Path]:
    """Write generated modules for ``types`` into ``config.output_dir``.

    A module that fails to parse is still written so it can be inspected.
    Returns the written paths.
    """
    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    for legacy in LEGACY_OUTPUTS:
        stale = output_dir / legacy
        if stale.exists():
            stale.unlink()
            logger.info("Removed legacy output %s", stale)

    written: list[Path] = []
    for type_ in types:
        for filename, source in render_type(type_, config).items():
            path = output_dir / filename
            _check_source(path, source)
            path.write_text(source, encoding="utf-8")
            logger.info("Generated %s", path)
            written.append(path)
    return written
