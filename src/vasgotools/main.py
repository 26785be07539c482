#!/usr/bin/env python3
"""
VasGoTools Main Entry Point

Command-line interface for generating Go workspaces, applications and
libraries.
"""

import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Iterable, List, Optional, Set

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import ToolsConfig, load_config
from .errors import ArgumentError, ConfigurationError
from .integrations.editor import EditorLauncher
from .integrations.gotool import GoAdapter
from .integrations.process import ProcessRunner
from .integrations.registry import detect_all
from .integrations.vcs import GitAdapter
from .pipeline import Pipeline, PipelineOptions, PipelineResult
from .scaffold import ModuleScaffolder
from .utils.json_logger import configure_logging
from .workspace import WorkspaceAssembler

app = typer.Typer(
    name="vasgotools",
    rich_markup_mode="rich",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
err_console = Console(stderr=True)

WORK_SWITCHES = {"nogit", "nocode"}
MODULE_SWITCHES = {"nogit", "nocode", "nomain"}

# Exit status click uses for usage errors
USAGE_ERROR_EXIT = 2


# Cross-platform safe success/failure symbols (avoid Unicode on legacy Windows)
def _symbol(ok: bool) -> str:
    enc = (getattr(sys.stdout, "encoding", None) or "").lower()
    if "utf" in enc:
        return "✓" if ok else "✗"
    return "OK" if ok else "FAIL"


def get_version_string() -> str:
    try:
        return version("vasgotools")
    except PackageNotFoundError:
        return __version__


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"Version: {get_version_string()}")
        raise typer.Exit()


def parse_switches(switches: Optional[Iterable[str]], allowed: Set[str]) -> Set[str]:
    """Validate the bare-word switches (nogit, nocode, nomain)."""
    found = set()
    for word in switches or []:
        if word not in allowed:
            raise ArgumentError(
                f"Unknown option '{word}' (expected one of: {', '.join(sorted(allowed))})"
            )
        found.add(word)
    return found


def _build_pipeline(cfg: ToolsConfig) -> Pipeline:
    runner = ProcessRunner()
    go = GoAdapter(runner, cfg.go_path)
    git = GitAdapter(runner, cfg.git_path)
    return Pipeline(
        assembler=WorkspaceAssembler(go, git),
        scaffolder=ModuleScaffolder(go),
        git=git,
        editor=EditorLauncher(runner, cfg.editor_command),
    )


def _config(ctx: typer.Context) -> ToolsConfig:
    return ctx.obj if isinstance(ctx.obj, ToolsConfig) else load_config()


def _finish(result: PipelineResult) -> None:
    if not result.success:
        err_console.print(f"[red]{_symbol(False)} {escape(result.message)}[/red]")
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def root(
    ctx: typer.Context,
    show_version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    log_json: bool = typer.Option(False, "--log-json", help="Log as JSON lines"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="Path to a vasgotools YAML config file"
    ),
) -> None:
    """VasGoTools - A utility tool for managing Go projects

    Simplifies the creation and management of Go projects, including generating
    Go workspaces, applications and libraries.

    Endorsed folder structure for workspaces:

        <workspace-root>/
        ├── go.work         # The Go workspace file
        ├── app1/           # Application 1 folder
        ├── app2/           # Application 2 folder
        └── ext/            # Folder for libraries
            ├── lib1/       # Library 1 folder
            └── lib2/       # Library 2 folder

    Examples:

        vasgotools work --path ~/projects/myworkspace
        vasgotools app myapp --path ~/projects
        vasgotools lib mylib nogit nocode
        vasgotools app myapp nomain nogit
        vasgotools app myapp --module-prefix github.com/custom-prefix/
    """
    configure_logging(logging.DEBUG if verbose else logging.INFO, json_output=log_json)
    try:
        ctx.obj = load_config(config_file)
    except ConfigurationError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(code=1)


@app.command("work")
def work_cmd(
    ctx: typer.Context,
    switches: Optional[List[str]] = typer.Argument(
        None, metavar="[nogit] [nocode]", help="Skip git initialization / editor launch"
    ),
    path: Optional[Path] = typer.Option(
        None, "--path", help="Workspace folder (defaults to the current working directory)"
    ),
    no_git: bool = typer.Option(False, "--no-git", help="Skip Git repository initialization"),
    no_code: bool = typer.Option(False, "--no-code", help="Skip the open_vscode script"),
    keep_going: bool = typer.Option(
        False, "--keep-going", help="Keep adding submodules after one fails"
    ),
) -> None:
    """Generate a Go workspace (i.e., a go.work file)."""
    cfg = _config(ctx)
    try:
        words = parse_switches(switches, WORK_SWITCHES)
    except ArgumentError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    root_path = (path or Path.cwd()).resolve()
    options = PipelineOptions(
        no_git=no_git or "nogit" in words or cfg.no_git,
        no_code=no_code or "nocode" in words or cfg.no_code,
        keep_going=keep_going or cfg.submodules_keep_going,
    )

    console.print(f"[bold blue]Generating workspace:[/bold blue] {escape(str(root_path))}")
    result = _build_pipeline(cfg).run_workspace(root_path, options)
    _finish(result)

    if result.assemble is not None and result.assemble.created:
        console.print(f"[green]{_symbol(True)} go.work created with {len(result.assemble.references)} module(s)[/green]")
        for ref in result.assemble.references:
            console.print(f"  {ref}", markup=False)
    else:
        console.print("[yellow]No subfolders with go.mod found. No go.work file created.[/yellow]")
    if result.submodules is not None and result.submodules.count:
        console.print(f"[dim]Submodules added: {escape(', '.join(result.submodules.registered))}[/dim]")


def _module_command(
    ctx: typer.Context,
    name: Optional[str],
    switches: Optional[List[str]],
    path: Optional[Path],
    module_prefix: Optional[str],
    no_git: bool,
    no_code: bool,
    no_main: bool,
    library: bool,
) -> None:
    cfg = _config(ctx)
    kind = "lib" if library else "app"
    try:
        if not name:
            raise ArgumentError("Name is required.")
        words = parse_switches(switches, WORK_SWITCHES if library else MODULE_SWITCHES)
    except ArgumentError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        err_console.print(
            f"Usage: vasgotools {kind} <name> [--path <path>] [--module-prefix <prefix>] "
            f"[nogit] [nocode]{'' if library else ' [nomain]'}",
            markup=False,
        )
        raise typer.Exit(code=1)

    prefix = cfg.resolve_prefix(module_prefix)
    parent = (path or Path.cwd()).resolve()
    options = PipelineOptions(
        no_git=no_git or "nogit" in words or cfg.no_git,
        no_code=no_code or "nocode" in words or cfg.no_code,
    )

    result = _build_pipeline(cfg).run_module(
        parent,
        name,
        prefix,
        library=library,
        no_main=no_main or "nomain" in words,
        options=options,
    )
    _finish(result)
    console.print(
        f"[green]{_symbol(True)} '{escape(prefix + name)}' created successfully in folder '{escape(str(result.folder))}'.[/green]"
    )


@app.command("app")
def app_cmd(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Application name"),
    switches: Optional[List[str]] = typer.Argument(
        None, metavar="[nogit] [nocode] [nomain]", help="Skip steps"
    ),
    path: Optional[Path] = typer.Option(
        None, "--path", help="Parent folder (defaults to the current working directory)"
    ),
    module_prefix: Optional[str] = typer.Option(
        None,
        "--module-prefix",
        help="Module prefix (default: none, shortcuts: 'vas' for muellerbbm-vas, 'slb' for mbbm-slb)",
    ),
    no_git: bool = typer.Option(False, "--no-git", help="Skip Git repository initialization"),
    no_code: bool = typer.Option(False, "--no-code", help="Skip the open_vscode script"),
    no_main: bool = typer.Option(False, "--no-main", help="Skip creation of main.go"),
) -> None:
    """Create a new Go application."""
    _module_command(ctx, name, switches, path, module_prefix, no_git, no_code, no_main, library=False)


@app.command("lib")
def lib_cmd(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Library name"),
    switches: Optional[List[str]] = typer.Argument(
        None, metavar="[nogit] [nocode]", help="Skip steps"
    ),
    path: Optional[Path] = typer.Option(
        None, "--path", help="Parent folder (defaults to the current working directory)"
    ),
    module_prefix: Optional[str] = typer.Option(
        None,
        "--module-prefix",
        help="Module prefix (default: none, shortcuts: 'vas' for muellerbbm-vas, 'slb' for mbbm-slb)",
    ),
    no_git: bool = typer.Option(False, "--no-git", help="Skip Git repository initialization"),
    no_code: bool = typer.Option(False, "--no-code", help="Skip the open_vscode script"),
) -> None:
    """Create a new Go library."""
    _module_command(ctx, name, switches, path, module_prefix, no_git, no_code, True, library=True)


@app.command("doctor")
def doctor_cmd(ctx: typer.Context) -> None:
    """Check that go, git and the editor can be started."""
    cfg = _config(ctx)
    probes = detect_all(ProcessRunner(timeout_s=10.0), cfg)

    table = Table(title="External Tools")
    table.add_column("Tool", style="cyan")
    table.add_column("Status")
    table.add_column("Version", style="magenta")
    table.add_column("Path", style="dim")
    for name, probe in probes.items():
        table.add_row(
            name,
            _symbol(probe.ok),
            probe.version or "-",
            probe.path or (probe.details or "not found"),
        )
    console.print(table)

    if not all(p.ok for p in probes.values()):
        raise typer.Exit(code=1)


@app.command("version")
def version_cmd() -> None:
    """Show the version."""
    console.print(f"Version: {get_version_string()}")


@app.command("help")
def help_cmd(ctx: typer.Context) -> None:
    """Show this message."""
    console.print(ctx.parent.get_help() if ctx.parent else ctx.get_help())


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit code.

    Usage errors (unknown command, bad option) exit with 1 rather than
    the usual 2.
    """
    command = typer.main.get_command(app)
    try:
        command.main(
            args=argv if argv is not None else sys.argv[1:],
            prog_name="vasgotools",
            standalone_mode=True,
        )
    except SystemExit as e:
        if e.code is None:
            return 0
        if not isinstance(e.code, int):
            err_console.print(str(e.code), markup=False)
            return 1
        return 1 if e.code == USAGE_ERROR_EXIT else e.code
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
