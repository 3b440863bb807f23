"""
email_extractor/presentation.py
Terminal rendering of batch results and outreach mailto links
"""
import json
from typing import List
from urllib.parse import quote

from .schema import BatchRun, ExtractionSuccess

# Characters encodeURIComponent leaves unescaped besides those quote() always keeps
_URI_COMPONENT_SAFE = "!'()*"

OUTREACH_SUBJECT = "Advertising Proposal"

OUTREACH_BODY = """Dear Sir/Madam,

it was with great joy that I've found your contact on your website ({source_url}).

I'd like to reach out to you on a meeting as I'd like to explain my interest in driving an advertising campaign in your website and pay you for that based on the traffic your website has.

Looking forward to hearing from you.

Best regards,
Your Best AI Media Buyer"""


def build_outreach_mailto(recipient: str, source_url: str) -> str:
    """Compose a mailto: link with the fixed outreach subject and body"""
    subject = quote(OUTREACH_SUBJECT, safe=_URI_COMPONENT_SAFE)
    body = quote(OUTREACH_BODY.format(source_url=source_url), safe=_URI_COMPONENT_SAFE)
    return f"mailto:{recipient}?subject={subject}&body={body}"


def format_results(run: BatchRun, include_contact_links: bool = False) -> str:
    """Render a settled run the way the CLI prints it"""
    lines: List[str] = ["=" * 80]

    if not run.has_emails:
        lines.append("NO EMAILS FOUND")
        lines.append("=" * 80)
        lines.append("The AI couldn't find any email addresses from the provided source(s).")
        for url, outcome in run.results.items():
            if not isinstance(outcome, ExtractionSuccess):
                lines.append(f"\n{url}")
                lines.append(f"  Error: {outcome.message}")
        lines.append("=" * 80)
        return "\n".join(lines)

    lines.append(
        f"Found {run.total_emails} email(s) across {len(run.results)} source(s)"
    )
    lines.append("=" * 80)

    for url, outcome in run.results.items():
        lines.append(f"\n{url}")
        if isinstance(outcome, ExtractionSuccess):
            if not outcome.emails:
                lines.append("  No emails found.")
            for email in outcome.emails:
                lines.append(f"  ✉ {email}")
                if include_contact_links:
                    lines.append(f"    Contact: {build_outreach_mailto(email, url)}")
        else:
            lines.append(f"  Error: {outcome.message}")

    lines.append("=" * 80)
    return "\n".join(lines)


def results_to_json(run: BatchRun) -> str:
    return json.dumps(run.model_dump(mode="json"), indent=2, ensure_ascii=False)
