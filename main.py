"""Operator manifest check CLI entrypoint."""
import typer
from rich.console import Console
from rich.table import Table

from manifestcheck.manifest.errors import AssertionMismatch, ManifestError
from manifestcheck.manifest.parser import ManifestParser
from manifestcheck.operator.inputs import OperatorInputs
from manifestcheck.operator.verifier import ParsedOperatorManifest

app = typer.Typer(help="Operator manifest check - inspect and verify generated weblogic-operator manifests")
console = Console()


@app.command("inspect")
def inspect(
    manifest: str = typer.Argument(..., help="Path to the generated manifest YAML file"),
    debug: bool = typer.Option(False, "--debug", help="Print verbose debug information while parsing")
):
    """List the resources in a manifest."""
    try:
        index = ManifestParser.load(manifest, debug=debug)
    except ManifestError as e:
        console.print(f"[bold red]Error: {e}[/]")
        raise typer.Exit(code=1)

    table = Table(title=f"Resources in {manifest}")
    table.add_column("Kind", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Namespace")
    table.add_column("API Version")
    for resource in index.resources():
        table.add_row(resource.kind, resource.metadata.name,
                      resource.metadata.namespace or "", resource.api_version)
    console.print(table)


@app.command("verify")
def verify(
    manifest: str = typer.Argument(..., help="Path to the generated manifest YAML file"),
    inputs: str = typer.Option("create-weblogic-operator-inputs.yaml", "--inputs", "-i", help="Path to the operator inputs YAML file"),
    external_cert: str = typer.Option(..., "--external-cert", help="Expected externalOperatorCert value"),
    external_key: str = typer.Option(..., "--external-key", help="Expected decoded externalOperatorKey value"),
    debug: bool = typer.Option(False, "--debug", help="Print verbose debug information including each check run")
):
    """Verify a generated manifest against the operator inputs."""
    console.print(f"[bold blue]Verifying {manifest}...[/]")

    try:
        operator_inputs = OperatorInputs.load(inputs)
        parsed = ParsedOperatorManifest.load(manifest, debug=debug)
        parsed.verify(operator_inputs, external_cert, external_key, debug=debug)
    except AssertionMismatch as e:
        console.print(f"[bold red]Mismatch: {e}[/]")
        raise typer.Exit(code=1)
    except ManifestError as e:
        console.print(f"[bold red]Error: {e}[/]")
        raise typer.Exit(code=1)

    console.print("[green]Manifest matches the operator inputs[/]")


if __name__ == "__main__":
    app()
