import logging
from pathlib import Path
from typing import Optional

import typer

from .config import (
    ERA_LIST_FILE,
    ERA_TABLE_FILE,
    READINGS_FILE,
    SITES_DIR,
    SPECIAL_DATES_FILE,
)
from .utils.fs import load_json, sanitize_filename, write_json, write_text

app = typer.Typer(add_completion=False)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def fetch_eras(
    output: Path = typer.Option(ERA_LIST_FILE, help="Where to write the era list (JSON)")
):
    """
    Fetch the list of all eras from Wikipedia.
    """
    from .client.wikipedia import WikipediaClient

    gengous = WikipediaClient().fetch_era_list()
    write_json(output, gengous)
    print(f"Saved {len(gengous)} eras to {output}")


@app.command()
def fetch_sites(
    eras: Path = typer.Option(ERA_LIST_FILE, help="Era list produced by fetch-eras"),
    sites_dir: Path = typer.Option(SITES_DIR, help="Directory for saved era articles"),
    force: bool = typer.Option(False, help="Re-download pages that already exist"),
):
    """
    Download the Wikipedia article of every era.
    """
    from tqdm import tqdm
    from .client.wikipedia import WikipediaClient

    client = WikipediaClient()
    gengous = load_json(eras)
    for gengou in tqdm(gengous, desc="Fetching Era Pages"):
        path = sites_dir / f"{sanitize_filename(gengou['name'])}.html"
        if path.exists() and not force:
            continue
        write_text(path, client.fetch_era_page(gengou["href"]))


@app.command()
def build(
    eras: Path = typer.Option(ERA_LIST_FILE, help="Era list produced by fetch-eras"),
    sites_dir: Path = typer.Option(SITES_DIR, help="Directory of saved era articles"),
    readings: Path = typer.Option(READINGS_FILE, help="Era readings (YAML)"),
    special_dates: Path = typer.Option(SPECIAL_DATES_FILE, help="Start/end overrides (YAML)"),
    output: Path = typer.Option(ERA_TABLE_FILE, help="Generated era table (JSON)"),
    report: Optional[Path] = typer.Option(None, help="Write build diagnostics to this JSON file"),
):
    """
    Build the era/year/month lookup table from saved era articles.
    """
    from .core.builder import EraTableBuilder, load_readings, load_special_dates
    from .core.source_table import SiteDirectorySource
    from .core.writer import write_era_table

    names = [gengou["name"] for gengou in load_json(eras)]
    print(f"Building table for {len(names)} eras...")

    builder = EraTableBuilder(
        names,
        SiteDirectorySource(sites_dir),
        load_readings(readings),
        load_special_dates(special_dates),
    )
    result = builder.build(progress=True)
    write_era_table(result.registry, output)

    print(f"Done. {len(result.diagnostics)} diagnostics.")
    if report:
        write_json(report, {
            "total_eras": len(names),
            "diagnostics": [d.to_dict() for d in result.diagnostics],
        })


@app.command()
def convert(
    text: str = typer.Argument(..., help="Era date, e.g. 令和2年5月1日"),
    table: Path = typer.Option(ERA_TABLE_FILE, help="Generated era table (JSON)"),
):
    """
    Convert an era date string to a Gregorian date.
    """
    from .core.dates import parse_era_date, resolve_parsed
    from .core.writer import load_registry

    registry = load_registry(table)
    parsed = parse_era_date(text, registry)
    if parsed is None:
        typer.echo(f"Could not interpret: {text}", err=True)
        raise typer.Exit(code=1)

    result = resolve_parsed(parsed, registry)
    if result is None:
        typer.echo(
            f"Could not resolve to a single day: {text[:parsed.match_length]}", err=True
        )
        raise typer.Exit(code=1)

    year, month, day = result
    typer.echo(f"{year:04d}-{month:02d}-{day:02d}")


if __name__ == "__main__":
    app()
