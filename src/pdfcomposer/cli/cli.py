"""CLI entrypoint: Typer app definition and command registration"""

import typer

from pdfcomposer.cli.commands import fonts_cmd, generate_cmd, paper_sizes_cmd


app = typer.Typer(name="pdfcomposer", no_args_is_help=True, help="Compose PDFs from YAML front matter Markdown documents")

app.command(name="generate")(generate_cmd)
app.command(name="paper-sizes")(paper_sizes_cmd)
app.command(name="fonts")(fonts_cmd)
