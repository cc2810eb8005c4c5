"""
Frontmatter parsing for SKILL.md and rule files.

The block between the leading pair of `---` lines is parsed with
yaml.safe_load and then validated against one of two closed record
shapes: SkillFrontmatter or RuleFrontmatter. Anything that does not fit
is rejected with a FrontmatterError subclass.

Usage:
    from skillkit.loader.frontmatter import parse_skill_frontmatter

    frontmatter, body = parse_skill_frontmatter(text, path)
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from skillkit.config import MAX_DESCRIPTION_LENGTH
from skillkit.errors import (
    DescriptionTooLongError,
    InvalidFrontmatterError,
    InvalidImpactError,
    MissingFieldError,
    MissingFrontmatterError,
    UnrecognizedFieldError,
)
from skillkit.types.skill_types import RuleFrontmatter, SkillFrontmatter

log = logging.getLogger("skillkit.frontmatter")

# Opening delimiter on the very first line, closing delimiter on its own line.
FRONTMATTER_PATTERN = re.compile(
    r"\A(?:\ufeff)?---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)

M = TypeVar("M", bound=BaseModel)


def split_frontmatter(text: str, path: Path) -> tuple[str, str]:
    """Split a Markdown document into (frontmatter text, body).

    Raises MissingFrontmatterError when the document does not open with a
    `---` delimited block.
    """
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        raise MissingFrontmatterError(path)
    return match.group(1), text[match.end():]


def _load_mapping(block: str, path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise InvalidFrontmatterError(path, f"frontmatter is not valid YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidFrontmatterError(
            path, f"frontmatter must be a mapping of key: value pairs, got {type(data).__name__}"
        )
    return {str(k): v for k, v in data.items()}


def _validate_record(model: type[M], data: dict[str, Any], path: Path) -> M:
    """Validate `data` against a closed record, mapping pydantic errors to ours."""
    allowed = list(model.model_fields)

    unknown = [k for k in data if k not in allowed]
    if unknown:
        raise UnrecognizedFieldError(path, unknown, allowed)

    # null and blank strings count as absent
    missing = [
        name
        for name, field in model.model_fields.items()
        if field.is_required() and (data.get(name) is None or data.get(name) == "")
    ]
    if missing:
        raise MissingFieldError(path, missing)

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field_name = ".".join(str(p) for p in first["loc"])
        if first["type"] == "enum" and first["loc"][:1] == ("impact",):
            raise InvalidImpactError(path, data.get("impact")) from exc
        raise InvalidFrontmatterError(path, f'field "{field_name}": {first["msg"]}') from exc


def parse_skill_frontmatter(
    text: str,
    path: Path,
    max_description_length: int = MAX_DESCRIPTION_LENGTH,
) -> tuple[SkillFrontmatter, str]:
    """Parse a SKILL.md document into its frontmatter record and body."""
    block, body = split_frontmatter(text, path)
    frontmatter = _validate_record(SkillFrontmatter, _load_mapping(block, path), path)

    if len(frontmatter.description) > max_description_length:
        raise DescriptionTooLongError(path, len(frontmatter.description), max_description_length)

    log.debug("Parsed frontmatter of %s (name=%s)", path, frontmatter.name)
    return frontmatter, body


def parse_rule_frontmatter(text: str, path: Path) -> RuleFrontmatter:
    """Parse the frontmatter of an individual rule file."""
    block, _ = split_frontmatter(text, path)
    data = _load_mapping(block, path)
    if isinstance(data.get("impact"), str):
        data["impact"] = data["impact"].strip()
    return _validate_record(RuleFrontmatter, data, path)
