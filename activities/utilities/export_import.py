"""
Export and Import functionality for plan documents.
"""
import csv
import io
import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from activities.domain.Plan import Plan
from activities.logic.reporting.financials import compute_financials
from activities.utilities.constants import EXPORT_FILENAME_FORMAT
from activities.utilities.validators import PlanDocument

logger = logging.getLogger(__name__)


class InvalidPlanDocument(ValueError):
    """Raised when imported text is not a valid plan document."""


class PlanExporter:
    """Export a plan as a JSON document or its financial summary as CSV."""

    def export_json(self, plan: Plan) -> str:
        return json.dumps(plan.to_dict(), indent=2, ensure_ascii=False)

    def export_filename(self, today: Optional[date] = None) -> str:
        return EXPORT_FILENAME_FORMAT.format(date=(today or date.today()).isoformat())

    def export_to_file(self, plan: Plan, output_path: Path = None) -> Path:
        """Write the plan document to disk (default name carries today's date)."""
        output_path = Path(output_path or self.export_filename())
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(self.export_json(plan))
        logger.info(f"Exported plan ({len(plan.kids)} kids) to {output_path}")
        return output_path

    def export_financials_csv(self, plan: Plan, catalog, normalize_monthly: bool = True) -> str:
        """Financial summary for Excel: one row per kid and a total row."""
        summary = compute_financials(plan, catalog, normalize_monthly)
        buf = io.StringIO()
        fieldnames = ['kid', 'grade', 'monthly', 'term', 'materials']
        writer = csv.DictWriter(buf, fieldnames=fieldnames)
        writer.writeheader()
        for kid in plan.kids:
            agg = summary['per_kid'][kid.id]
            writer.writerow({
                'kid': kid.name,
                'grade': kid.grade,
                'monthly': f"{agg['monthly']:.2f}",
                'term': f"{agg['term']:.2f}",
                'materials': f"{agg['materials']:.2f}",
            })
        writer.writerow({
            'kid': 'Total',
            'grade': '',
            'monthly': f"{summary['total_monthly']:.2f}",
            'term': f"{summary['total_term']:.2f}",
            'materials': f"{summary['total_materials']:.2f}",
        })
        return buf.getvalue()


class PlanImporter:
    """Parse imported text into a Plan; all-or-nothing."""

    def parse(self, text) -> Plan:
        if isinstance(text, bytes):
            try:
                text = text.decode('utf-8')
            except UnicodeDecodeError as e:
                raise InvalidPlanDocument(f"Plan document is not UTF-8 text: {e}") from e
        try:
            raw = json.loads(text)
        except (TypeError, json.JSONDecodeError) as e:
            raise InvalidPlanDocument(f"Plan document is not valid JSON: {e}") from e
        try:
            document = PlanDocument.model_validate(raw)
        except ValidationError as e:
            raise InvalidPlanDocument(f"Plan document does not match the schema: {e}") from e
        plan, migrated = Plan.from_dict_with_migration(document.model_dump())
        if migrated:
            logger.info("Imported plan document was migrated to the current schema")
        return plan

    def import_from_file(self, input_path: Path) -> Plan:
        with open(input_path, 'r', encoding='utf-8') as f:
            return self.parse(f.read())


# CLI interface
if __name__ == "__main__":
    import argparse
    from activities.infra.Catalog_Repository import load_catalog
    from activities.infra.Plan_Repository import PlanRepository

    parser = argparse.ArgumentParser(description='Export/Import the activities plan')
    parser.add_argument('action', choices=['export', 'import'], help='Action to perform')
    parser.add_argument('--format', choices=['json', 'csv'], default='json', help='Export format')
    parser.add_argument('--file', help='Input/output file path')

    args = parser.parse_args()
    repo = PlanRepository()

    if args.action == 'export':
        plan = repo.load() or Plan()
        exporter = PlanExporter()
        if args.format == 'csv':
            out = Path(args.file or 'activities-financials.csv')
            out.write_text(exporter.export_financials_csv(plan, load_catalog()), encoding='utf-8')
        else:
            out = exporter.export_to_file(plan, Path(args.file) if args.file else None)
        print(f"✓ Exported to: {out}")

    elif args.action == 'import':
        if not args.file:
            print("Error: --file is required for import")
            raise SystemExit(1)
        try:
            plan = PlanImporter().import_from_file(Path(args.file))
        except (OSError, InvalidPlanDocument) as e:
            print(f"✗ Import failed: {e}")
            raise SystemExit(1)
        repo.save(plan)
        print(f"✓ Successfully imported from: {args.file}")
