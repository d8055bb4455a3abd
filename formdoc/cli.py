# formdoc/cli.py
import asyncio, logging, sys
import click
from .config import load_settings
from .fields import TRACKED_FIELDS, load_fields
from .preview import FormState, PreviewRenderer
from .schema import DocumentType, OutputFormat
from .exporter import handle_generate
from .ui import ConsoleUI

DOC_TYPES = [t.value for t in DocumentType]
FORMATS = [f.value for f in OutputFormat]

PROMPTS = {
    "full_name": "Full Name",
    "company": "Company",
    "email": "Email",
    "address": "Address",
    "date": "Date (YYYY-MM-DD)",
    "notes": "Notes",
}

def field_options(f):
    for opt in reversed([
        click.option('--fields', 'fields_path', type=click.Path(exists=True, dir_okay=False),
                     help="JSON file of form fields; other options override it."),
        click.option('--full-name'),
        click.option('--company'),
        click.option('--email'),
        click.option('--address'),
        click.option('--date', help="YYYY-MM-DD, defaults to today."),
        click.option('--notes'),
        click.option('--format', 'fmt', type=click.Choice(FORMATS)),
    ]):
        f = opt(f)
    return f

def _collect(fields_path, **options):
    raw = load_fields(fields_path) if fields_path else {}
    for k, v in options.items():
        if v is not None:
            raw["format" if k == "fmt" else k] = v
    return raw

@click.group()
@click.option('-v', '--verbose', is_flag=True, help="Debug logging.")
def cli(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

@cli.command()
@click.argument('doc_type', type=click.Choice(DOC_TYPES))
@field_options
@click.option('--out-dir', type=click.Path(file_okay=False), help="Defaults to FORMDOC_OUT_DIR or '.'.")
@click.option('--show-preview', is_flag=True)
def generate(doc_type, fields_path, out_dir, show_preview, **options):
    """Generate one NDA, invoice or letter."""
    settings = load_settings()
    if out_dir:
        settings = settings.model_copy(update={"out_dir": out_dir})
    raw = _collect(fields_path, **options)
    ui = ConsoleUI(show_previews=show_preview)
    path = asyncio.run(handle_generate(DocumentType(doc_type), raw, ui, settings))
    if path is None:
        sys.exit(1)
    click.echo(f"Wrote {path}")

@cli.command()
@field_options
def preview(fields_path, **options):
    """Print the live letter preview for the given fields."""
    raw = _collect(fields_path, **options)
    click.echo(PreviewRenderer(ConsoleUI()).render(raw))

@cli.command()
@click.option('--out-dir', type=click.Path(file_okay=False))
def interactive(out_dir):
    """Fill the form field by field, watching the preview, then generate."""
    settings = load_settings()
    if out_dir:
        settings = settings.model_copy(update={"out_dir": out_dir})
    ui = ConsoleUI()
    form = FormState()
    form.reset_date()
    PreviewRenderer(ui).bind(form)

    for field in TRACKED_FIELDS:
        form.set(field, click.prompt(PROMPTS[field], default=form.get(field), show_default=bool(form.get(field))))
    form.set("format", click.prompt("Format", type=click.Choice(FORMATS), default="pdf"))
    doc_type = DocumentType(click.prompt("Document", type=click.Choice(DOC_TYPES), default="letter"))

    while True:
        ui.focused = None
        path = asyncio.run(handle_generate(doc_type, form.snapshot(), ui, settings))
        if path is not None:
            click.echo(f"Wrote {path}")
            return
        if ui.focused is None:
            # collaborator failure; retrying will not help
            sys.exit(1)
        form.set(ui.focused, click.prompt(PROMPTS[ui.focused]))

if __name__ == "__main__":
    cli()
