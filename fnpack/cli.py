"""fnpack CLI application with Typer."""

import json
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer

from fnpack import __version__
from fnpack.app.adapters import ConsoleLoggerAdapter, SubprocessCommandRunner
from fnpack.app.ports import LoggerPort
from fnpack.bootstrap import ApplicationContainer, bootstrap_application
from fnpack.config import get_settings, set_settings
from fnpack.errors import FnpackError
from fnpack.packagers import BasePackager, get_packager

STATE_FILE_NAME = "service-state.json"

app = typer.Typer(
    name="fnpack",
    help="Package compiled serverless functions into deployable zip artifacts",
    add_completion=True,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"fnpack version {__version__}")
        raise typer.Exit()


def _console_logger() -> LoggerPort:
    return ConsoleLoggerAdapter(typer.echo, verbose=get_settings().verbose)


def _fail(exc: Exception) -> NoReturn:
    typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def _container() -> ApplicationContainer:
    try:
        return bootstrap_application(logger=_console_logger())
    except FnpackError as exc:
        _fail(exc)


def _write_state(container: ApplicationContainer) -> Path:
    """Persist the mutated service definition next to the staged artifacts."""
    state_path = container.settings.get_staging_dir() / STATE_FILE_NAME
    state_path.parent.mkdir(parents=True, exist_ok=True)
    state = json.dumps(container.host.to_dict(), indent=2, sort_keys=True)
    state_path.write_text(state, encoding="utf-8")
    return state_path


def _print_bindings(bindings: dict[str, str]) -> None:
    for function_name, artifact_path in sorted(bindings.items()):
        typer.echo(f"  {function_name} -> {artifact_path}")


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True),
    ] = None,
    project_dir: Annotated[
        Path | None,
        typer.Option("--project-dir", "-p", help="Service root (defaults to cwd)"),
    ] = None,
    build_dir: Annotated[
        Path | None,
        typer.Option("--build-dir", help="Bundler output directory"),
    ] = None,
    packager: Annotated[
        str | None,
        typer.Option("--packager", help="Dependency-management backend (npm or yarn)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show verbose packaging output"),
    ] = False,
) -> None:
    """fnpack - deterministic serverless artifact packaging."""
    # Update settings with CLI flags
    settings = get_settings()
    if project_dir:
        settings.project_dir = project_dir
    if build_dir:
        settings.build_output_dir = build_dir
    if packager:
        settings.packager = packager
    if verbose:
        settings.verbose = True
    set_settings(settings)


@app.command("package")
def package_command(
    function: Annotated[
        str | None,
        typer.Option("--function", "-f", help="Only package and bind this function"),
    ] = None,
    config: Annotated[
        str | None,
        typer.Option("--config", help="Service definition file inside the project dir"),
    ] = None,
    exclude: Annotated[
        str | None,
        typer.Option("--exclude", help="Regular expression of files to drop from artifacts"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the packaging result as JSON"),
    ] = False,
) -> None:
    """Zip every compiled unit and stage the artifacts for deployment."""
    settings = get_settings()
    if config:
        settings.service_file = config
    if exclude:
        settings.exclude_regex = exclude
    set_settings(settings)

    container = _container()
    try:
        result = container.packaging_service.package(function=function)
    except FnpackError as exc:
        _fail(exc)

    state_path = _write_state(container)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return

    typer.secho(
        f"✓ Packaged {len(result.artifacts)} artifact(s) ({result.mode.value})",
        fg=typer.colors.GREEN,
    )
    _print_bindings(result.bindings)
    if result.service_artifact:
        typer.echo(f"  service -> {result.service_artifact}")
    typer.echo(f"  State: {state_path}")


@app.command("copy-artifacts")
def copy_artifacts_command(
    function: Annotated[
        str | None,
        typer.Option("--function", "-f", help="Only copy and bind this function"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print bindings as JSON"),
    ] = False,
) -> None:
    """Stage previously built artifacts without rebuilding them."""
    container = _container()
    try:
        bindings = container.packaging_service.copy_existing_artifacts(function)
    except FnpackError as exc:
        _fail(exc)

    _write_state(container)

    if as_json:
        typer.echo(json.dumps(bindings, indent=2, sort_keys=True))
        return

    typer.secho(f"✓ Assigned {len(bindings)} artifact(s)", fg=typer.colors.GREEN)
    _print_bindings(bindings)


# Packager subcommand
packager_app = typer.Typer(help="Dependency-management backend operations")
app.add_typer(packager_app, name="packager")


def _resolve_packager() -> BasePackager:
    try:
        return get_packager(
            get_settings().packager,
            logger=_console_logger(),
            runner=SubprocessCommandRunner(),
        )
    except FnpackError as exc:
        _fail(exc)


def _packager_cwd(cwd: Path | None) -> Path:
    return (cwd or get_settings().get_project_dir()).resolve()


CwdOption = Annotated[
    Path | None,
    typer.Option("--cwd", help="Package directory (defaults to the project dir)"),
]


@packager_app.command("version")
def packager_version(cwd: CwdOption = None) -> None:
    """Show the installed packager version."""
    packager = _resolve_packager()
    try:
        info = packager.get_packager_version(_packager_cwd(cwd))
    except FnpackError as exc:
        _fail(exc)
    typer.echo(f"{packager.packager_id} {info['version']}")


@packager_app.command("deps")
def packager_deps(
    cwd: CwdOption = None,
    depth: Annotated[int, typer.Option("--depth", min=1, help="Dependency tree depth")] = 1,
) -> None:
    """Print the production dependency tree as JSON."""
    packager = _resolve_packager()
    try:
        tree = packager.get_prod_dependencies(_packager_cwd(cwd), depth)
    except FnpackError as exc:
        _fail(exc)
    typer.echo(json.dumps(tree, indent=2, sort_keys=True))


@packager_app.command("install")
def packager_install(cwd: CwdOption = None) -> None:
    """Install dependencies."""
    packager = _resolve_packager()
    try:
        packager.install(_packager_cwd(cwd))
    except FnpackError as exc:
        _fail(exc)
    typer.secho(f"✓ {packager.packager_id} install finished", fg=typer.colors.GREEN)


@packager_app.command("prune")
def packager_prune(cwd: CwdOption = None) -> None:
    """Remove extraneous dependencies."""
    packager = _resolve_packager()
    try:
        packager.prune(_packager_cwd(cwd))
    except FnpackError as exc:
        _fail(exc)
    typer.secho(f"✓ {packager.packager_id} prune finished", fg=typer.colors.GREEN)


@packager_app.command("run-scripts")
def packager_run_scripts(
    names: Annotated[list[str], typer.Argument(help="Package scripts to run in order")],
    cwd: CwdOption = None,
) -> None:
    """Run package scripts in order."""
    packager = _resolve_packager()
    try:
        packager.run_scripts(_packager_cwd(cwd), names)
    except FnpackError as exc:
        _fail(exc)
    typer.secho(f"✓ Ran {len(names)} script(s)", fg=typer.colors.GREEN)


@packager_app.command("rebase-lockfile")
def packager_rebase_lockfile(
    package_root: Annotated[str, typer.Argument(help="Path prefix for relative file: references")],
    cwd: CwdOption = None,
    write: Annotated[
        bool,
        typer.Option("--write", help="Rewrite the lockfile in place instead of printing it"),
    ] = False,
) -> None:
    """Rebase relative file: references in the packager's lockfile."""
    packager = _resolve_packager()
    lockfile_path = _packager_cwd(cwd) / packager.lockfile_name
    if not lockfile_path.is_file():
        typer.secho(f"Error: Lockfile not found: {lockfile_path}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    text = lockfile_path.read_text(encoding="utf-8")
    lockfile: Any = text
    if lockfile_path.suffix == ".json":
        try:
            lockfile = json.loads(text)
        except json.JSONDecodeError as exc:
            _fail(exc)

    rebased = packager.rebase_lockfile(package_root, lockfile)
    output = rebased if isinstance(rebased, str) else json.dumps(rebased, indent=2) + "\n"

    if write:
        lockfile_path.write_text(output, encoding="utf-8")
        typer.secho(f"✓ Rebased {lockfile_path}", fg=typer.colors.GREEN)
    else:
        typer.echo(output, nl=False)


if __name__ == "__main__":
    app()
