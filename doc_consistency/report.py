"""HTML rendering of a VerificationResult for direct display in the UI.

The markup uses Tailwind utility classes: a status banner coloured by the
verdict, then one card per inconsistency coloured by severity. The issues
section is left out entirely when there is nothing to report.
"""

from __future__ import annotations

from jinja2 import BaseLoader, Environment

from .models import Severity, VerificationResult

# Autoescape on: descriptions quote raw OCR values.
_env = Environment(loader=BaseLoader(), autoescape=True, trim_blocks=True, lstrip_blocks=True)

STATUS_CLASSES = {
    True: "text-green-700 bg-green-50",
    False: "text-red-700 bg-red-50",
}

SEVERITY_CLASSES = {
    Severity.HIGH: "text-red-700 bg-red-50",
    Severity.MEDIUM: "text-orange-700 bg-orange-50",
    Severity.LOW: "text-yellow-700 bg-yellow-50",
}

_REPORT_TEMPLATE = """\
<div class="rounded-lg p-4 {{ status_class }} mb-4">
  <div class="font-medium flex items-center">
    <span class="mr-2 text-lg">{{ status_icon }}</span>
    <span>Overall Status: {{ status_label }}</span>
  </div>
  <p class="mt-1">{{ result.summary }}</p>
</div>
{% if issues %}
<div class="text-gray-800 font-medium mb-2">Identified Issues:</div>
<ul class="space-y-2">
{% for issue in issues %}
  <li class="rounded p-3 {{ issue.css }}">
    <div class="font-medium">{{ issue.label }} SEVERITY</div>
    <div class="mt-1">{{ issue.description }}</div>
    <div class="mt-1 text-sm">Documents: {{ issue.documents }}</div>
  </li>
{% endfor %}
</ul>
{% endif %}
"""

_template = _env.from_string(_REPORT_TEMPLATE)


def render_verification_report(result: VerificationResult) -> str:
    """Render `result` as an HTML fragment."""
    issues = [
        {
            "css": SEVERITY_CLASSES[issue.severity],
            "label": issue.severity.value.upper(),
            "description": issue.description,
            "documents": ", ".join(issue.involved_documents),
        }
        for issue in result.inconsistencies
    ]
    return _template.render(
        result=result,
        issues=issues,
        status_class=STATUS_CLASSES[result.is_valid],
        status_icon="✓" if result.is_valid else "✗",
        status_label="VERIFIED" if result.is_valid else "VERIFICATION FAILED",
    )
