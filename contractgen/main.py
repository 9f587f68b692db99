from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from . import config
from .models import reset_engine
from .pipeline.generate import generate_agreement
from .pipeline.ingest import load_records, load_signature
from .pipeline.run import run_batch

app = typer.Typer(help="Pilot agreement PDF generator")


def _parse_signed_at(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"Not an ISO timestamp: {value}") from exc


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def build(
    input_path: Path = typer.Option(..., "--input", help="CSV or JSON file with agreement records"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    signature: Optional[Path] = typer.Option(None, "--signature", help="Client signature image (PNG)"),
    signed_at: Optional[str] = typer.Option(None, "--signed-at", help="Signing timestamp, ISO format"),
    previews: bool = typer.Option(False, "--previews", help="Also render PNG previews"),
) -> None:
    if out:
        config.set_out_dir(out)
        reset_engine()
    records = load_records(input_path)
    typer.echo(f"Loaded {len(records)} records")
    results = run_batch(
        records,
        signature=load_signature(signature),
        signed_at=_parse_signed_at(signed_at),
        previews=previews,
    )
    typer.echo(f"READY: {len(results.ready)}")
    typer.echo(f"FAILED: {len(results.failed)}")
    for slug in results.failed:
        typer.echo(f"FAILED: {slug}")
    if results.failed:
        raise typer.Exit(code=1)


@app.command()
def render(
    record_path: Path = typer.Argument(..., help="JSON file with one agreement record"),
    out: Path = typer.Option(Path("."), "--out", help="Directory for the PDF"),
    signature: Optional[str] = typer.Option(None, "--signature", help="Signature image path or data URL"),
    signed_at: Optional[str] = typer.Option(None, "--signed-at", help="Signing timestamp, ISO format"),
    document_id: Optional[str] = typer.Option(None, "--document-id", help="Document number override"),
) -> None:
    records = load_records(record_path)
    if len(records) != 1:
        raise typer.BadParameter(f"{record_path} holds {len(records)} records, expected one")
    result = generate_agreement(
        records[0],
        signature=load_signature(signature),
        signed_at=_parse_signed_at(signed_at),
        document_id=document_id,
    )
    out.mkdir(parents=True, exist_ok=True)
    path = out / result.filename
    path.write_bytes(result.data)
    typer.echo(f"{path} ({result.page_count} pages)")


if __name__ == "__main__":
    app()
