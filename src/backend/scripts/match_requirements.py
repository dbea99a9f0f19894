from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


_ensure_backend_on_path()

from common.licensing_engine.catalog import load_catalog  # noqa: E402
from common.licensing_engine.engine import MatchingEngine  # noqa: E402
from common.licensing_engine.errors import ValidationError  # noqa: E402
from common.licensing_engine.models import MatchResult, Recommendation  # noqa: E402
from pipelines.report import generate_licensing_report  # noqa: E402


def _load_json(path: Path):
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def render_markdown(result: MatchResult, recommendations: list[Recommendation]) -> str:
    profile = result.business_profile
    summary = result.summary
    lines = [
        f"# Licensing requirements: {profile.business_type.value}",
        "",
        f"Seating: {profile.seating_capacity} | Floor area: {profile.floor_area:g} m²",
        f"Processed at: {result.processed_at.isoformat()}",
        "",
        "## Summary",
        f"- Total: {summary.total_requirements}",
        f"- Mandatory: {summary.mandatory_requirements}",
        f"- Optional: {summary.optional_requirements}",
        f"- Estimated processing time: {summary.estimated_processing_time}",
        f"- Complexity: {summary.complexity_level.value}",
    ]
    for category, matched in result.requirements.items():
        if not matched:
            continue
        lines.append("")
        lines.append(f"## {category.value} ({len(matched)})")
        for row in matched:
            record = row.requirement
            tag = "mandatory" if record.mandatory else "optional"
            lines.append(f"- [{record.requirement_id}] {record.title} ({tag}, via {row.matched_by_rule})")
            lines.append(f"  - Authority: {record.authority}")
    if recommendations:
        lines.append("")
        lines.append("## Recommendations")
        for rec in recommendations:
            lines.append(f"- ({rec.priority.value}) {rec.message}")
    return "\n".join(lines)


def main() -> int:
    parser = argparse.ArgumentParser(description="Match a business profile against the licensing catalog.")
    parser.add_argument("--profile", required=True, help="Path to a business profile JSON file.")
    parser.add_argument("--catalog", default=None, help="Catalog JSON (default: LICENSING_CATALOG_PATH or packaged).")
    parser.add_argument("--format", choices=("json", "markdown"), default="markdown")
    parser.add_argument(
        "--report",
        action="store_true",
        help="Also generate a narrative report (falls back to the templated report offline).",
    )
    parser.add_argument("--offline", action="store_true", help="With --report, skip the text-generation service.")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    engine = MatchingEngine(load_catalog(Path(args.catalog) if args.catalog else None))
    profile = _load_json(Path(args.profile))

    try:
        if args.report:
            bundle = generate_licensing_report(engine, profile, use_ai=not args.offline)
            result, recommendations = bundle.requirements, list(bundle.recommendations)
        else:
            result = engine.find_applicable_requirements(profile)
            recommendations = engine.get_business_recommendations(result.business_profile)
    except ValidationError as exc:
        print(f"Invalid business profile ({exc.field}): {exc}", file=sys.stderr)
        return 2

    if args.format == "json":
        payload = result.model_dump(mode="json", by_alias=True)
        payload["recommendations"] = [r.model_dump(mode="json", by_alias=True) for r in recommendations]
        if args.report:
            payload["report"] = bundle.report.model_dump(mode="json", by_alias=True)
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(render_markdown(result, recommendations))
        if args.report:
            print("")
            print(f"# {bundle.report.title}")
            print(bundle.report.summary)
            for section in bundle.report.sections:
                print("")
                print(section.content)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
