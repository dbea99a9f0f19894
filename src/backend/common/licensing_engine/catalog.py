from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import CatalogError
from .models import AuthorityCategory, DataIntegrityGap, MappingRule, RequirementRecord

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "licensing_requirements.json"

# Section key(s) in `regulatoryRequirements` -> category. Long names first.
SECTION_KEYS: Tuple[Tuple[AuthorityCategory, Tuple[str, ...]], ...] = (
    (AuthorityCategory.GENERAL, ("generalRequirements", "general")),
    (AuthorityCategory.POLICE, ("policeRequirements", "police")),
    (AuthorityCategory.HEALTH, ("healthMinistryRequirements", "health")),
    (AuthorityCategory.FIRE, ("fireAuthorityRequirements", "fire")),
)


def catalog_path() -> Path:
    override = os.getenv("LICENSING_CATALOG_PATH", "").strip()
    return Path(override) if override else DEFAULT_CATALOG_PATH


class RequirementCatalog:
    """Immutable requirement records and mapping rules, in document order."""

    def __init__(
        self,
        requirements: Iterable[RequirementRecord],
        rules: Iterable[MappingRule],
        *,
        metadata: Optional[Mapping[str, Any]] = None,
    ):
        self._requirements = tuple(requirements)
        self._rules = tuple(rules)
        self._metadata = MappingProxyType(dict(metadata or {}))

        by_id: Dict[str, RequirementRecord] = {}
        for record in self._requirements:
            if record.requirement_id in by_id:
                raise CatalogError(f"Duplicate requirementId in catalog: {record.requirement_id}")
            by_id[record.requirement_id] = record
        self._by_id = MappingProxyType(by_id)

        rule_ids = set()
        for rule in self._rules:
            if rule.rule_id in rule_ids:
                raise CatalogError(f"Duplicate ruleId in catalog: {rule.rule_id}")
            rule_ids.add(rule.rule_id)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "RequirementCatalog":
        if not isinstance(document, Mapping):
            raise CatalogError("Catalog document must be an object.")
        sections = document.get("regulatoryRequirements")
        mapping = document.get("businessLicensingMapping")
        if not isinstance(sections, Mapping):
            raise CatalogError("Catalog document missing required block: regulatoryRequirements")
        if not isinstance(mapping, Mapping):
            raise CatalogError("Catalog document missing required block: businessLicensingMapping")

        try:
            requirements: List[RequirementRecord] = []
            for category, keys in SECTION_KEYS:
                for entry in _select_section(sections, keys):
                    requirements.append(RequirementRecord.model_validate({**entry, "category": category}))
            rules = [MappingRule.model_validate(entry) for entry in mapping.get("rules") or []]
        except PydanticValidationError as exc:
            raise CatalogError(f"Catalog document failed validation: {exc}") from exc

        metadata = {k: v for k, v in document.items() if k not in ("regulatoryRequirements", "businessLicensingMapping")}
        return cls(requirements, rules, metadata=metadata)

    @classmethod
    def from_path(cls, path: Path) -> "RequirementCatalog":
        with Path(path).open(encoding="utf-8") as handle:
            document = json.load(handle)
        catalog = cls.from_document(document)
        logger.info(
            "Loaded licensing catalog from %s (%d requirements, %d rules)",
            path,
            len(catalog.requirements),
            len(catalog.rules),
        )
        for gap in find_integrity_gaps(catalog):
            logger.warning(
                "Catalog rule %s references unknown requirement %s", gap.rule_id, gap.requirement_id
            )
        return catalog

    @property
    def requirements(self) -> Tuple[RequirementRecord, ...]:
        return self._requirements

    @property
    def rules(self) -> Tuple[MappingRule, ...]:
        return self._rules

    @property
    def metadata(self) -> Mapping[str, Any]:
        return self._metadata

    def get(self, requirement_id: str) -> Optional[RequirementRecord]:
        return self._by_id.get(requirement_id)

    def __contains__(self, requirement_id: object) -> bool:
        return requirement_id in self._by_id

    def __len__(self) -> int:
        return len(self._requirements)


def load_catalog(path: Optional[Path] = None) -> RequirementCatalog:
    return RequirementCatalog.from_path(path or catalog_path())


def find_integrity_gaps(catalog: RequirementCatalog) -> List[DataIntegrityGap]:
    gaps: List[DataIntegrityGap] = []
    for rule in catalog.rules:
        for requirement_id in rule.applicable_requirements:
            if requirement_id not in catalog:
                gaps.append(DataIntegrityGap(rule_id=rule.rule_id, requirement_id=requirement_id))
    return gaps


def _select_section(sections: Mapping[str, Any], keys: Tuple[str, ...]) -> List[Mapping[str, Any]]:
    for key in keys:
        entries = sections.get(key)
        if entries is None:
            continue
        if not isinstance(entries, list):
            raise CatalogError(f"Catalog section {key} must be a list.")
        for entry in entries:
            if not isinstance(entry, Mapping):
                raise CatalogError(f"Catalog section {key} entries must be objects.")
        return entries
    return []


class CatalogEntry(BaseModel):
    requirement_id: str
    title: str
    authority: str
    category: str
    mandatory: bool
    referenced_by_rules: List[str] = Field(default_factory=list)


def build_listing(catalog: RequirementCatalog) -> List[CatalogEntry]:
    referenced: Dict[str, List[str]] = {}
    for rule in catalog.rules:
        for requirement_id in rule.applicable_requirements:
            referenced.setdefault(requirement_id, []).append(rule.rule_id)

    return [
        CatalogEntry(
            requirement_id=record.requirement_id,
            title=record.title,
            authority=record.authority,
            category=record.category.value,
            mandatory=record.mandatory,
            referenced_by_rules=referenced.get(record.requirement_id, []),
        )
        for record in catalog.requirements
    ]


def _dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)


def _dump_yaml(payload: dict[str, Any]) -> str:
    return yaml.safe_dump(payload, sort_keys=True, allow_unicode=True)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="List the licensing requirements catalog.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    parser.add_argument("--catalog", type=Path, default=None, help="Catalog JSON (default: packaged catalog).")
    args = parser.parse_args(argv)

    catalog = load_catalog(args.catalog)
    payload = {
        "requirements": [e.model_dump() for e in build_listing(catalog)],
        "integrity_gaps": [g.model_dump() for g in find_integrity_gaps(catalog)],
    }
    if args.format == "json":
        print(_dump_json(payload))
    else:
        print(_dump_yaml(payload))


if __name__ == "__main__":
    main()
