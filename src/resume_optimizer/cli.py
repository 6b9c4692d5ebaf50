from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, TypedDict

import typer
import yaml

from .cloud import CloudWord, build_cloud
from .config import ResumeOptimizerConfig, load_config
from .errors import InputError
from .markup import render_html
from .models import Change, HighlightSpan, RewriteResult, ScoreReport
from .pipeline import analyze_document, build_policy, optimize_text
from .scoring import score as score_text

app = typer.Typer(help="Resume Optimizer CLI.", no_args_is_help=True)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine progress."),
) -> None:
    """Keyword clouds, phrasing enhancement and ATS scoring for resume text."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def cloud(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    mode: str | None = typer.Option(
        None, "--mode", "-m", help="Cloud mode: 'single', 'multi' or 'both'."
    ),
    trigrams: bool | None = typer.Option(
        None,
        "--trigrams/--bigrams",
        help="Use 3-word phrases instead of 2-word phrases for multi clouds.",
    ),
    limit: int | None = typer.Option(
        None, "--limit", "-l", help="Maximum entries per n-gram list."
    ),
    exclude: List[str] | None = typer.Option(
        None, "--exclude", "-x", help="Phrase to suppress (repeatable)."
    ),
) -> None:
    """Extract ranked n-grams for a word cloud and emit them as JSON."""
    cfg = load_config(config)
    _apply_cloud_overrides(cfg, mode, trigrams, limit)
    text = _read_text(input_path)
    excluded = {phrase.lower().strip() for phrase in exclude or []}
    try:
        words = build_cloud(text, cfg, excluded)
    except InputError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(json.dumps({"words": [_cloud_word_dict(w) for w in words]}, indent=2))


@app.command()
def optimize(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    keyword: List[str] | None = typer.Option(
        None, "--keyword", "-k", help="Keyword or phrase to highlight (repeatable)."
    ),
    keywords_file: Path | None = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="One keyword per line."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    seed: int | None = typer.Option(
        None, "--seed", help="Seed for reproducible replacement choices."
    ),
    html_output: Path | None = typer.Option(
        None, "--html-output", dir_okay=False, help="Write highlighted HTML here."
    ),
) -> None:
    """Highlight keywords, strengthen weak verbs and flag metrics."""
    cfg = load_config(config)
    if seed is not None:
        cfg.seed = seed
    text = _read_text(input_path)
    keywords = _collect_keywords(keyword, keywords_file)
    try:
        result = optimize_text(text, keywords, cfg, build_policy(cfg))
    except InputError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if html_output is not None:
        html_output.parent.mkdir(parents=True, exist_ok=True)
        html_output.write_text(render_html(result), encoding="utf-8")
    typer.echo(json.dumps(_rewrite_dict(result), indent=2))


@app.command()
def score(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    keyword: List[str] | None = typer.Option(
        None, "--keyword", "-k", help="Keyword to check coverage for (repeatable)."
    ),
    keywords_file: Path | None = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="One keyword per line."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Score the document against ATS heuristics and emit a JSON report."""
    cfg = load_config(config)
    text = _read_text(input_path)
    keywords = _collect_keywords(keyword, keywords_file)
    try:
        report = score_text(text, keywords, cfg)
    except InputError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(json.dumps(_score_dict(report), indent=2))


@app.command()
def analyze(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    keyword: List[str] | None = typer.Option(
        None,
        "--keyword",
        "-k",
        help="Keyword to use; defaults to the visible cloud entries.",
    ),
    keywords_file: Path | None = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="One keyword per line."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    seed: int | None = typer.Option(None, "--seed"),
) -> None:
    """Run the cloud, optimizer and scorer together and emit one JSON summary."""
    cfg = load_config(config)
    if seed is not None:
        cfg.seed = seed
    text = _read_text(input_path)
    keywords = _collect_keywords(keyword, keywords_file)
    try:
        if not keywords:
            # Without explicit keywords, hand the cloud's phrases to the other engines.
            keywords = [word.text for word in build_cloud(text, cfg)]
        analysis = analyze_document(text, keywords, cfg, build_policy(cfg))
    except InputError as exc:
        raise typer.BadParameter(str(exc)) from exc
    payload = {
        "keywords": keywords,
        "cloud": [_cloud_word_dict(w) for w in analysis.cloud],
        "rewrite": _rewrite_dict(analysis.rewrite),
        "score": _score_dict(analysis.score),
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = ResumeOptimizerConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


class ChangePayload(TypedDict):
    original: str
    optimized: str
    type: str
    context: str
    start: int
    end: int


class SpanPayload(TypedDict):
    start: int
    end: int
    category: str
    tooltip: str


class RewritePayload(TypedDict):
    text: str
    changes: List[ChangePayload]
    spans: List[SpanPayload]


def _apply_cloud_overrides(
    config: ResumeOptimizerConfig,
    mode: str | None,
    trigrams: bool | None,
    limit: int | None,
) -> None:
    """Apply CLI overrides to cloud-related config fields when provided."""
    if mode:
        config.cloud_mode = mode
    if trigrams is not None:
        config.use_trigrams = trigrams
    if limit is not None:
        config.ngram_limit = limit


def _read_text(path: Path) -> str:
    """Read a plain-text document; other formats are parsed upstream."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(f"{path} is not UTF-8 text: {exc}") from exc


def _collect_keywords(keywords: List[str] | None, keywords_file: Path | None) -> List[str]:
    """Merge repeated --keyword options with the lines of --keywords-file."""
    collected = [k for k in keywords or [] if k.strip()]
    if keywords_file is not None:
        for line in _read_text(keywords_file).splitlines():
            if line.strip():
                collected.append(line.strip())
    return collected


def _cloud_word_dict(word: CloudWord) -> Dict[str, Any]:
    return {"text": word.text, "value": word.value, "size": word.size, "kind": word.kind}


def _change_dict(change: Change) -> ChangePayload:
    return {
        "original": change.original,
        "optimized": change.optimized,
        "type": change.type.value,
        "context": change.context,
        "start": change.start,
        "end": change.end,
    }


def _span_dict(span: HighlightSpan) -> SpanPayload:
    return {
        "start": span.start,
        "end": span.end,
        "category": span.category.value,
        "tooltip": span.tooltip,
    }


def _rewrite_dict(result: RewriteResult) -> RewritePayload:
    return {
        "text": result.text,
        "changes": [_change_dict(c) for c in result.changes],
        "spans": [_span_dict(s) for s in result.spans],
    }


def _score_dict(report: ScoreReport) -> Dict[str, Any]:
    """Serialize a ScoreReport so it can be emitted in JSON."""
    breakdown = report.breakdown
    return {
        "overall": breakdown.overall,
        "keyword_match": breakdown.keyword_match,
        "formatting": breakdown.formatting,
        "readability": breakdown.readability,
        "certifications": breakdown.certifications,
        "fonts": breakdown.fonts,
        "keyword_matches": [
            {"word": m.word, "count": m.count} for m in report.keyword_matches
        ],
        "missing_keywords": list(report.missing_keywords),
        "readability_checks": [
            {
                "section": c.section,
                "requirement": c.requirement,
                "met": c.met,
                "details": c.details,
            }
            for c in report.readability_checks
        ],
        "formatting_checks": [
            {"name": c.name, "met": c.met} for c in report.formatting_checks
        ],
        "font_checks": [{"name": c.name, "found": c.found} for c in report.font_checks],
        "certification_checks": [
            {"name": c.name, "found": c.found} for c in report.certification_checks
        ],
    }


if __name__ == "__main__":
    main()
