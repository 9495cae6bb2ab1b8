"""Command-line client for the entity highlighter.

Usage:
    ehl-analyze "Ada Lovelace worked with Charles Babbage in London."
    cat article.txt | ehl-analyze - --threshold 0.7 --json
    ehl-analyze "..." --url http://localhost:8000 --html out.html
"""

from __future__ import annotations

import asyncio
import json
import sys
import time
from pathlib import Path
from typing import Any

import click
import httpx

from ehl.config import Settings
from ehl.extraction.extractor import LLMEntityExtractor
from ehl.extraction.filter import ConfidenceFilter
from ehl.pipeline import AnalysisPipeline, AnalysisStatus
from ehl.shared.llm import get_provider


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def _format_terminal(data: dict[str, Any]) -> str:
    """Format an analysis as coloured terminal text followed by a legend."""
    parts: list[str] = []
    for segment in data["segments"]:
        if segment["is_entity"]:
            parts.append(
                click.style(segment["text"], fg="black", bg=_hex_to_rgb(segment["color"]))
            )
        else:
            parts.append(segment["text"])

    lines = ["".join(parts), ""]
    if data["legend"]:
        legend = "  ".join(
            click.style(f" {entry['category']} ", fg="black", bg=_hex_to_rgb(entry["color"]))
            for entry in data["legend"]
        )
        lines.append(f"Legend: {legend}")
    lines.append(f"{data['notice']['title']}: {data['notice']['description']}")
    return "\n".join(lines)


def _build_pipeline(settings: Settings, model: str, threshold: float) -> AnalysisPipeline:
    extractor = LLMEntityExtractor(
        get_provider(),
        model=model,
        timeout=settings.llm_timeout,
        max_tokens=settings.llm_max_tokens,
    )
    return AnalysisPipeline(extractor, ConfidenceFilter(), threshold=threshold)


def _analyze_local(text: str, model: str, threshold: float) -> dict[str, Any]:
    from ehl.service.app import _to_response

    try:
        pipeline = _build_pipeline(Settings.from_env(), model, threshold)
    except ValueError as e:
        raise click.ClickException(str(e))
    start_time = time.time()
    result = asyncio.run(pipeline.analyze(text))
    if result.status is AnalysisStatus.FAILED:
        raise click.ClickException(f"{result.notice.title}: {result.notice.description}")
    return _to_response(result, (time.time() - start_time) * 1000).model_dump()


def _analyze_remote(text: str, url: str, threshold: float) -> dict[str, Any]:
    try:
        response = httpx.post(
            f"{url}/analyze",
            json={"text": text, "confidence_threshold": threshold},
            timeout=120,
        )
    except httpx.ConnectError:
        raise click.ClickException(f"Could not connect to service at {url}")
    except httpx.TimeoutException:
        raise click.ClickException(f"Request to {url} timed out")

    if not response.is_success:
        try:
            detail = response.json().get("detail", {})
        except json.JSONDecodeError:
            detail = {}
        if isinstance(detail, dict) and "title" in detail:
            message = f"{detail['title']}: {detail['description']}"
        else:
            message = f"Service returned {response.status_code}: {response.text[:200]}"
        raise click.ClickException(message)
    return response.json()


def _write_html(path: Path, data: dict[str, Any]) -> None:
    path.write_text(
        "<!doctype html>\n<html><head><meta charset='utf-8'>"
        "<title>Entity Highlighter</title></head><body>\n"
        f"{data['legend_html']}\n{data['html']}\n</body></html>\n",
        encoding="utf-8",
    )


@click.command()
@click.argument("text")
@click.option(
    "--threshold",
    type=click.FloatRange(0.0, 1.0),
    default=None,
    help="Minimum confidence (default: EHL_CONFIDENCE_THRESHOLD or 0.5)",
)
@click.option("--model", default=None, help="LLM model or alias (default: EHL_MODEL)")
@click.option(
    "--url",
    default=None,
    help="Use a running service instead of calling the LLM directly (not combinable with --model)",
)
@click.option("--json", "json_output", is_flag=True, help="Output raw JSON")
@click.option(
    "--html",
    "html_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the highlighted text to an HTML file",
)
def main(
    text: str,
    threshold: float | None,
    model: str | None,
    url: str | None,
    json_output: bool,
    html_path: Path | None,
) -> None:
    """Highlight named entities in TEXT ('-' reads standard input)."""
    if text == "-":
        text = sys.stdin.read()

    settings = Settings.from_env()
    threshold = settings.confidence_threshold if threshold is None else threshold

    if not text.strip():
        raise click.UsageError("Please enter some text to analyze.")
    if url and model:
        raise click.UsageError("--model cannot be used with --url; the service uses its own EHL_MODEL.")

    if url:
        data = _analyze_remote(text, url.rstrip("/"), threshold)
    else:
        data = _analyze_local(text, model or settings.model, threshold)

    if html_path is not None:
        _write_html(html_path, data)

    if json_output:
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(_format_terminal(data))


if __name__ == "__main__":
    main()
