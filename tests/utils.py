from __future__ import annotations

from pathlib import Path

SCENARIO_TEXT = "I worked on a project that improved 15% of customer retention."

SAMPLE_RESUME = """Jane Doe
SUMMARY:
I worked on a project that improved 15% of customer retention.

EXPERIENCE:
- Helped launch a data platform for 2,000 users
- Responsible for the AWS migration budget
"""


def write_text_file(path: Path, text: str) -> Path:
    """Write ``text`` as UTF-8 and return the path for chaining."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
