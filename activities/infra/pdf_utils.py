import io
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from activities.infra.Catalog_Repository import group_by_day_slot
from activities.utilities.config import CURRENCY_SYMBOL
from activities.utilities.constants import DAYS, SLOTS

HEADER_STYLE = [
    ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#334155")),
    ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
    ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
    ("FONTSIZE", (0,0), (-1,0), 11),
    ("BOTTOMPADDING", (0,0), (-1,0), 8),
    ("VALIGN", (0,0), (-1,-1), "TOP"),
    ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
]


def _money(value) -> str:
    return f"{value:.2f}{CURRENCY_SYMBOL}"


def _cell(activities, plan) -> str:
    lines = []
    for a in activities:
        kids = [plan.find_kid(k) for k in plan.assigned_kids(a.id)]
        names = ", ".join(k.name for k in kids if k)
        if names:
            lines.append(f"{a.time or ''} {a.name}: {names}".strip())
    return "\n".join(lines) or "-"


def generate_pdf_for_plan(plan, catalog, financials, conflicts):
    """Printable plan: Day / Midday / Afternoon grid, financial summary and conflicts."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [Paragraph("Activities Plan", styles["Title"]), Spacer(1, 12)]

    grouped = group_by_day_slot(catalog)
    data = [["Day"] + SLOTS]
    for day in DAYS:
        data.append([day] + [_cell(grouped[day][slot], plan) for slot in SLOTS])
    schedule = Table(data, repeatRows=1, colWidths=[90, 330, 330])
    schedule.setStyle(TableStyle(HEADER_STYLE))
    elements += [schedule, Spacer(1, 16)]

    elements.append(Paragraph("Financial summary", styles["Heading2"]))
    money = [["Kid", "Monthly", "Term", "Materials (once)"]]
    for kid in plan.kids:
        agg = financials['per_kid'][kid.id]
        money.append([f"{kid.name} ({kid.grade})", _money(agg['monthly']), _money(agg['term']), _money(agg['materials'])])
    money.append(["Total", _money(financials['total_monthly']), _money(financials['total_term']),
                  _money(financials['total_materials'])])
    summary = Table(money, repeatRows=1)
    summary.setStyle(TableStyle(HEADER_STYLE + [("FONTNAME", (0,-1), (-1,-1), "Helvetica-Bold")]))
    elements.append(summary)

    if conflicts:
        elements += [Spacer(1, 16), Paragraph("Conflicts", styles["Heading2"])]
        rows = [["Kid", "Day", "Slot", "Activities"]]
        for c in conflicts:
            rows.append([c['kid'].name, c['day'], c['slot'],
                         f"{c['activity_a'].name} / {c['activity_b'].name}"])
        table = Table(rows, repeatRows=1)
        table.setStyle(TableStyle(HEADER_STYLE))
        elements.append(table)

    doc.build(elements)
    return buf.getvalue()
