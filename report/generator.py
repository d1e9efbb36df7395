"""Report Generator - Generate reports in various formats."""

import json
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence

from takeover.models import ScanOutcome, Status


class ReportGenerator:
    """Generate takeover scan reports."""
    
    def __init__(self, outcomes: Sequence[ScanOutcome]):
        """Initialize with scan outcomes, in arrival order."""
        self.outcomes = list(outcomes)
    
    def to_records(self) -> List[Dict[str, Any]]:
        return [outcome.to_dict() for outcome in self.outcomes]
    
    def to_json(self, indent: int = 2) -> str:
        """Generate JSON report."""
        return json.dumps(self.to_records(), indent=indent)
    
    def summary(self) -> Dict[str, int]:
        counts = Counter(outcome.status for outcome in self.outcomes)
        return {status.value: counts.get(status, 0) for status in Status}
    
    def to_markdown(self) -> str:
        """Generate Markdown report."""
        lines = []
        
        # Header
        lines.append("# Subdomain Takeover Report")
        lines.append("")
        lines.append(f"**Generated:** {datetime.now(timezone.utc).isoformat()}")
        lines.append(f"**Targets reported:** {len(self.outcomes)}")
        lines.append("")
        
        # Summary
        lines.append("## Summary")
        lines.append("")
        lines.append("| Status | Count |")
        lines.append("|--------|-------|")
        for status, count in self.summary().items():
            lines.append(f"| {status} | {count} |")
        lines.append("")
        
        vulnerable = [o for o in self.outcomes if o.vulnerable]
        if vulnerable:
            lines.append("## Vulnerable Subdomains")
            lines.append("")
            for outcome in vulnerable:
                fp = outcome.fingerprint
                lines.append(f"### {outcome.target}")
                lines.append("")
                lines.append(f"**Service:** {fp.service}")
                if outcome.cname:
                    lines.append(f"**CNAME:** `{outcome.cname}`")
                if outcome.status_code is not None:
                    lines.append(f"**HTTP status:** {outcome.status_code}")
                lines.append("")
                if outcome.evidence:
                    lines.append(f"> {outcome.evidence}")
                    lines.append("")
                
                references = [ref for ref in (fp.discussion_url, fp.documentation_url) if ref]
                if references:
                    lines.append("**References:**")
                    for ref in references:
                        lines.append(f"- {ref}")
                    lines.append("")
        
        others = [o for o in self.outcomes if not o.vulnerable]
        if others:
            lines.append("## Other Results")
            lines.append("")
            lines.append("| Subdomain | Status |")
            lines.append("|-----------|--------|")
            for outcome in others:
                lines.append(f"| {outcome.target} | {outcome.status.value} |")
            lines.append("")
        
        return "\n".join(lines)
    
    def render(self, fmt: str = "json") -> str:
        if fmt == "md":
            return self.to_markdown()
        return self.to_json()
