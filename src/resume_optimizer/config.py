from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping

import yaml

DEFAULT_VERB_REPLACEMENTS: Dict[str, List[str]] = {
    "worked": ["spearheaded", "executed", "implemented"],
    "made": ["created", "developed", "established"],
    "helped": ["facilitated", "supported", "guided"],
    "responsible for": ["led", "managed", "orchestrated"],
    "did": ["accomplished", "achieved", "completed"],
    "improved": ["optimized", "enhanced", "streamlined"],
}

DEFAULT_METRIC_UNITS: List[str] = [
    "percent",
    "users",
    "customers",
    "dollars",
    "revenue",
    "growth",
    "increase",
    "decrease",
    "improvement",
]

DEFAULT_ALLOWED_FONTS: List[str] = ["Calibri", "Arial", "Times New Roman", "Helvetica"]

CLOUD_MODES = ("single", "multi", "both")


@dataclass(slots=True)
class CertificationSpec:
    """A certification and the spellings that count as a match."""

    name: str
    aliases: List[str] = field(default_factory=list)

    def patterns(self) -> List[str]:
        return [self.name, *[alias for alias in self.aliases if alias]]


def _default_certifications() -> List[CertificationSpec]:
    return [
        CertificationSpec("PMP", ["Project Management Professional"]),
        CertificationSpec("AWS", ["Amazon Web Services"]),
        CertificationSpec(
            "CISSP", ["Certified Information Systems Security Professional"]
        ),
    ]


@dataclass(slots=True)
class ResumeOptimizerConfig:
    """Configuration options shared by the cloud, rewriting and scoring engines."""

    ngram_limit: int = 15
    cloud_mode: str = "single"
    use_trigrams: bool = False
    context_chars: int = 30
    seed: int | None = None
    min_text_length: int = 300
    verb_replacements: Dict[str, List[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_VERB_REPLACEMENTS.items()}
    )
    metric_units: List[str] = field(default_factory=lambda: list(DEFAULT_METRIC_UNITS))
    allowed_fonts: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_FONTS))
    certifications: List[CertificationSpec] = field(
        default_factory=_default_certifications
    )

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(ResumeOptimizerConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    if "certifications" in data:
        kwargs["certifications"] = [
            _build_certification(item) for item in data["certifications"] or []
        ]
    if "verb_replacements" in data:
        mapping = data["verb_replacements"] or {}
        kwargs["verb_replacements"] = {
            str(weak): [str(choice) for choice in choices]
            for weak, choices in mapping.items()
        }
    return kwargs


def _build_certification(data: Any) -> CertificationSpec:
    if isinstance(data, CertificationSpec):
        return data
    if isinstance(data, str):
        return CertificationSpec(name=data)
    if isinstance(data, Mapping):
        cert_allowed = {field.name for field in fields(CertificationSpec)}
        filtered = {key: data[key] for key in data if key in cert_allowed}
        return CertificationSpec(**filtered)
    raise ValueError(f"Unsupported certification entry: {data!r}")


def config_from_dict(data: Mapping[str, Any] | None) -> ResumeOptimizerConfig:
    """Build a ResumeOptimizerConfig from a dictionary-like input."""
    if data is None:
        return ResumeOptimizerConfig()
    return ResumeOptimizerConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> ResumeOptimizerConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> ResumeOptimizerConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return ResumeOptimizerConfig()
    return config_from_yaml(path)
