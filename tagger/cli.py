"""
Command-line interface for content tagging.

This module provides a CLI for extracting document text and running label
suggestions from the terminal.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import (
    TaggingConfig,
    TransportConfig,
    load_tagging_config,
    load_transport_config,
)
from .exceptions import ConfigurationError
from .models import LabelCatalog, SuggestionResult
from .pipeline import TaggingPipeline
from .resolver import map_concepts_to_labels
from .stores import InMemoryLabelCatalogStore, JsonDocumentStore, JsonLabelCatalogStore
from .transport import OpenAITransport
from .tree import extract_clean_tree, flatten_text

console = Console()

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(verbose: int) -> None:
    """
    Configure logging from the -v count.

    0 = warnings only, 1 = info, 2+ = debug.
    """
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def load_configs(config_path: Optional[Path]) -> tuple[TaggingConfig, TransportConfig]:
    if config_path is None:
        return TaggingConfig(), TransportConfig()
    return load_tagging_config(config_path), load_transport_config(config_path)


def create_pipeline(
    config_path: Optional[Path], model: Optional[str] = None, base_url: Optional[str] = None
) -> TaggingPipeline:
    """
    Build a pipeline from an optional config file and CLI overrides.

    Raises:
        ConfigurationError: If the config is invalid or no API key is available
    """
    tagging_config, transport_config = load_configs(config_path)

    overrides = {}
    if model:
        overrides["model_name"] = model
    if base_url:
        overrides["base_url"] = base_url
    if overrides:
        transport_config = transport_config.model_copy(update=overrides)

    return TaggingPipeline(OpenAITransport(transport_config), tagging_config)


def read_stdin_text() -> str:
    stream = click.get_text_stream("stdin")
    return stream.read().strip()


def display_suggestion(result: SuggestionResult, catalog: LabelCatalog, title: str) -> None:
    """
    Display a suggestion result in the console.

    Args:
        result: Result from the pipeline
        catalog: Catalog used for the request (for label titles)
        title: Panel title
    """
    if result.ok:
        lines = [f"  • {label} ({catalog.get(label, label)})" for label in result.labels]
        body = "[bold]Suggested labels:[/bold]\n" + "\n".join(lines)
        border_style = "green"
    else:
        body = (
            f"[bold]Failure:[/bold] {result.failure_kind}\n"
            f"[bold]Detail:[/bold] {result.detail or '(none)'}"
        )
        if result.labels:
            body += "\n[bold]Labels:[/bold] " + ", ".join(result.labels)
        if result.raw_response:
            body += f"\n[bold]Raw response:[/bold] {result.raw_response}"
        border_style = "red"

    console.print(Panel(body, title=title, border_style=border_style))


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v, -vv)")
def main(verbose: int):
    """
    LLM-assisted content tagging.

    Suggests labels from a controlled catalog for hierarchical content documents.
    """
    configure_logging(verbose)


@main.command()
@click.option(
    "--store",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to the JSON document repository",
)
@click.option("--path", "doc_path", type=str, required=True, help="Document path, e.g. /content/site/en")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Optional JSON configuration file",
)
@click.option("--json", "as_json", is_flag=True, help="Print the clean tree instead of the text")
def extract(store: Path, doc_path: str, config: Optional[Path], as_json: bool):
    """
    Show what the model would see for a document, without calling it.

    Examples:

        tagger extract --store repo.json --path /content/site/en/page
    """
    try:
        tagging_config = load_tagging_config(config) if config else TaggingConfig()
        document_store = JsonDocumentStore(
            store, tagging_config.content_child, tagging_config.labels_property
        )
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    node = document_store.get_resource(doc_path)
    if node is None:
        console.print(f"[red]Resource not found: {doc_path}[/red]")
        raise SystemExit(1)

    clean_tree = extract_clean_tree(node, tagging_config.excluded_keys, tagging_config.max_depth)

    if as_json:
        console.print_json(json.dumps(clean_tree, ensure_ascii=False, default=str))
        return

    text = flatten_text(clean_tree, tagging_config.text_keys)
    if not text:
        console.print("[yellow]No text content found[/yellow]")
        return

    console.print(Panel(text, title=f"Text: {doc_path}", border_style="blue"))


@main.command()
@click.option(
    "--store",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to the JSON document repository",
)
@click.option("--path", "doc_path", type=str, required=True, help="Document path, e.g. /content/site/en")
@click.option(
    "--catalog",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to the label catalog JSON file",
)
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Optional JSON configuration file",
)
@click.option("--model", type=str, default=None, help="Model name override")
@click.option("--base-url", type=str, default=None, help="OpenAI-compatible endpoint override")
@click.option("--apply", "apply_labels", is_flag=True, help="Write the labels back to the store")
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="Optional JSON output file",
)
def suggest(
    store: Path,
    doc_path: str,
    catalog: Path,
    config: Optional[Path],
    model: Optional[str],
    base_url: Optional[str],
    apply_labels: bool,
    output: Optional[Path],
):
    """
    Suggest catalog labels for a document.

    Examples:

        # Preview suggestions
        tagger -v suggest --store repo.json --path /content/site/en/page --catalog tags.json

        # Apply them to the document
        tagger suggest --store repo.json --path /content/site/en/page --catalog tags.json --apply
    """
    try:
        pipeline = create_pipeline(config, model=model, base_url=base_url)
        document_store = JsonDocumentStore(
            store, pipeline.config.content_child, pipeline.config.labels_property
        )
        labels = JsonLabelCatalogStore(catalog).get_all_available_labels()
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    console.print(f"[cyan]Suggesting labels for {doc_path} ({len(labels)} available)[/cyan]")

    result = pipeline.process_document(
        doc_path,
        store=document_store,
        catalog_store=InMemoryLabelCatalogStore(labels),
        sink=document_store if apply_labels else None,
    )

    display_suggestion(result, labels, title=f"Document: {doc_path}")

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            json.dump(
                {"path": doc_path, **result.model_dump()}, f, indent=2, ensure_ascii=False
            )
        console.print(f"[green]Results saved to {output}[/green]")

    if not result.ok:
        raise SystemExit(1)

    if apply_labels:
        console.print(f"[green]✓ Applied {len(result.labels)} labels to {doc_path}[/green]")


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Optional JSON configuration file",
)
@click.option("--model", type=str, default=None, help="Model name override")
@click.option("--base-url", type=str, default=None, help="OpenAI-compatible endpoint override")
def concepts(config: Optional[Path], model: Optional[str], base_url: Optional[str]):
    """
    Extract free-form concepts from stdin and map them to labels.

    Examples:

        echo "Our new electric SUV charges in minutes" | tagger concepts
    """
    text = read_stdin_text()
    if not text:
        console.print("[yellow]No input text provided.[/yellow]")
        return

    try:
        pipeline = create_pipeline(config, model=model, base_url=base_url)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    extracted = pipeline.extract_concepts(text)
    if not extracted:
        console.print("[yellow]No concepts extracted[/yellow]")
        raise SystemExit(1)

    table = Table(title="Concepts")
    table.add_column("Concept")
    table.add_column("Label")
    for concept in extracted:
        mapped = map_concepts_to_labels([concept], pipeline.config.concept_table)
        table.add_row(concept, mapped[0] if mapped else "[dim]unmapped[/dim]")
    console.print(table)

    labels = map_concepts_to_labels(extracted, pipeline.config.concept_table)
    console.print(f"[bold]Labels:[/bold] {', '.join(labels) if labels else '(none)'}")


@main.command(name="content-type")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Optional JSON configuration file",
)
@click.option("--model", type=str, default=None, help="Model name override")
@click.option("--base-url", type=str, default=None, help="OpenAI-compatible endpoint override")
def content_type(config: Optional[Path], model: Optional[str], base_url: Optional[str]):
    """
    Classify stdin text into a single content type.

    Examples:

        cat page.txt | tagger content-type
    """
    text = read_stdin_text()
    if not text:
        console.print("[yellow]No input text provided.[/yellow]")
        return

    try:
        pipeline = create_pipeline(config, model=model, base_url=base_url)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    result = pipeline.classify_content_type(text)
    if result is None:
        console.print("[yellow]Could not determine content type[/yellow]")
        raise SystemExit(1)

    console.print(f"[green]{result}[/green]")


if __name__ == "__main__":
    main()
