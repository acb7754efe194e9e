"""Message catalog for the estimator notes, CLI and printable report.

English is the reference catalog; a key missing from another language falls
back to the English text.
"""

from nettoit.models.enums import Language

MESSAGES: dict[Language, dict[str, str]] = {
    Language.EN: {
        # Social contribution notes
        "note.private_premium": (
            "Private health selected: statutory health/care contributions are shown as 0. "
            "The private premium of {premium} per month is deducted from net."
        ),
        "note.private_excluded": (
            "Private health selected: statutory health/care contributions are shown as 0. "
            "Private premiums are NOT included."
        ),
        "note.childless": "Includes childless care surcharge ({rate}) if 23+.",
        "note.children": "Care surcharge not applied (children allowance > 0).",
        # Report
        "report.brand": "TOOLSTACK",
        "report.title": "Netto-It - German Net Salary (Estimate)",
        "report.generated": "Report generated {timestamp}",
        "report.net_monthly": "Net (monthly est.)",
        "report.inputs": "Inputs",
        "report.gross_monthly": "Gross monthly",
        "report.tax_class": "Tax class",
        "report.state": "State",
        "report.church_tax": "Church tax",
        "report.yes": "Yes",
        "report.no": "No",
        "report.child_allowance": "Children allowance",
        "report.health": "Health",
        "report.health_public": "Public (GKV)",
        "report.health_private": "Private (PKV)",
        "report.pkv_premium": "Private premium (monthly)",
        "report.summary": "Summary",
        "report.gross_annual": "Gross (annual)",
        "report.social_annual": "Social (annual)",
        "report.taxes_annual": "Taxes (annual)",
        "report.pkv_annual": "Private premium (annual)",
        "report.net_annual": "Net (annual est.)",
        "report.taxes_breakdown": "Taxes breakdown (annual)",
        "report.income_tax": "Income tax",
        "report.soli": "Solidarity surcharge",
        "report.church": "Church tax",
        "report.church_rate": "Rate: {rate}",
        "report.social_breakdown": "Social breakdown (monthly)",
        "report.pension": "Pension (RV)",
        "report.unemployment": "Unemployment (AV)",
        "report.health_insurance": "Health (KV)",
        "report.care": "Care (PV)",
        "report.taxable_income": "Taxable income (annual estimate)",
        "report.disclaimer": "Disclaimer",
        "report.disclaimer_estimate": "This is a simplified estimate. Your actual payroll net can differ.",
        "report.disclaimer_classes": "Tax class V/VI are approximations, not full ELStAM wage-tax tables.",
        "report.disclaimer_soli": "Solidarity surcharge uses annual income tax thresholds ({year}).",
        "report.disclaimer_age": "Care childless surcharge assumes age 23+ if children allowance is 0.",
        "report.storage_key": "Storage key: {storage_key}",
        "report.print_hint": "Print will include only this report sheet.",
    },
    Language.DE: {
        "note.private_premium": (
            "Private Krankenversicherung gewählt: gesetzliche Kranken-/Pflegebeiträge werden mit 0 angezeigt. "
            "Der private Beitrag von {premium} pro Monat wird vom Netto abgezogen."
        ),
        "note.private_excluded": (
            "Private Krankenversicherung gewählt: gesetzliche Kranken-/Pflegebeiträge werden mit 0 angezeigt. "
            "Private Beiträge sind NICHT berücksichtigt."
        ),
        "note.childless": "Enthält Kinderlosenzuschlag zur Pflegeversicherung ({rate}) ab 23 Jahren.",
        "note.children": "Kein Kinderlosenzuschlag (Kinderfreibetrag > 0).",
        "report.title": "Netto-It - Nettogehalt Deutschland (Schätzung)",
        "report.generated": "Bericht erstellt {timestamp}",
        "report.net_monthly": "Netto (monatlich, geschätzt)",
        "report.inputs": "Eingaben",
        "report.gross_monthly": "Brutto monatlich",
        "report.tax_class": "Steuerklasse",
        "report.state": "Bundesland",
        "report.church_tax": "Kirchensteuer",
        "report.yes": "Ja",
        "report.no": "Nein",
        "report.child_allowance": "Kinderfreibeträge",
        "report.health": "Krankenversicherung",
        "report.health_public": "Gesetzlich (GKV)",
        "report.health_private": "Privat (PKV)",
        "report.pkv_premium": "PKV-Beitrag (monatlich)",
        "report.summary": "Übersicht",
        "report.gross_annual": "Brutto (jährlich)",
        "report.social_annual": "Sozialabgaben (jährlich)",
        "report.taxes_annual": "Steuern (jährlich)",
        "report.pkv_annual": "PKV-Beitrag (jährlich)",
        "report.net_annual": "Netto (jährlich, geschätzt)",
        "report.taxes_breakdown": "Steuern im Detail (jährlich)",
        "report.income_tax": "Lohnsteuer",
        "report.soli": "Solidaritätszuschlag",
        "report.church": "Kirchensteuer",
        "report.church_rate": "Satz: {rate}",
        "report.social_breakdown": "Sozialabgaben im Detail (monatlich)",
        "report.pension": "Rentenversicherung (RV)",
        "report.unemployment": "Arbeitslosenversicherung (AV)",
        "report.health_insurance": "Krankenversicherung (KV)",
        "report.care": "Pflegeversicherung (PV)",
        "report.taxable_income": "Zu versteuerndes Einkommen (Jahresschätzung)",
        "report.disclaimer": "Hinweis",
        "report.disclaimer_estimate": "Dies ist eine vereinfachte Schätzung. Ihre tatsächliche Abrechnung kann abweichen.",
        "report.disclaimer_classes": "Steuerklassen V/VI sind Näherungen, keine vollständigen ELStAM-Lohnsteuertabellen.",
        "report.disclaimer_soli": "Der Solidaritätszuschlag nutzt die Jahresfreigrenzen ({year}).",
        "report.disclaimer_age": "Der Kinderlosenzuschlag setzt ein Alter ab 23 voraus, wenn kein Kinderfreibetrag angegeben ist.",
        "report.storage_key": "Speicherschlüssel: {storage_key}",
        "report.print_hint": "Gedruckt wird nur dieses Berichtsblatt.",
    },
}


def translate(message_key: str, /, language: Language = Language.EN, **params: object) -> str:
    """Look up *message_key* for *language* and fill in ``{placeholders}``."""
    template = MESSAGES.get(language, {}).get(message_key)
    if template is None:
        template = MESSAGES[Language.EN][message_key]
    return template.format(**params)
