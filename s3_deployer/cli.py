# -*- coding: utf-8 -*-

"""
Command line interface::

    s3_deployer install <application> <version> [--scripts=<list>] [--groupwritable] [--removeother]
    s3_deployer listbucket [--bucket=<name>] [--matching=<pattern>]
"""

import typing as T

import logging

import typer

from . import __version__
from . import constants
from . import exc
from .config import Config
from .storage import Storage
from .installer import Installer, InstallRequest, InstallStatus
from .lister import list_bucket

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Install versioned application artifacts from S3.",
    add_completion=False,
)

EXIT_ERROR = 1
EXIT_USAGE = 2


def _config_option():
    return typer.Option(
        constants.DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        envvar=constants.ENV_VAR_CONFIG_PATH,
        help="YAML file with AWS credentials and deployer settings.",
    )


def _fail(message: str, code: int = EXIT_ERROR):
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code)


def _version_callback(value: bool):
    if value:
        typer.echo(f"s3_deployer {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_config(config_path: str) -> Config:
    try:
        return Config.load(config_path)
    except exc.ConfigError as e:
        _fail(str(e))


@app.command()
def install(
    application: str = typer.Argument(..., help="Application name."),
    version: str = typer.Argument(..., help="Version to install."),
    scripts: T.Optional[str] = typer.Option(
        None,
        "--scripts",
        help="Comma separated script paths, relative to the release, to make executable.",
    ),
    group_writable: bool = typer.Option(
        False, "--groupwritable", help="Make the release group writable."
    ),
    remove_other: bool = typer.Option(
        False, "--removeother", help="Remove all permissions for others."
    ),
    deployment_root: T.Optional[str] = typer.Option(
        None, "--deployment-root", help="Override the configured deployment root."
    ),
    config_path: str = _config_option(),
) -> None:
    """
    Download an artifact from S3 and install it as a release.
    """
    try:
        request = InstallRequest(
            application=application,
            version=version,
            scripts=scripts,
            group_writable=group_writable,
            remove_other_permissions=remove_other,
        )
    except exc.UsageError as e:
        _fail(str(e), EXIT_USAGE)

    config = _load_config(config_path)
    if deployment_root:
        config.deployment_root = deployment_root

    installer = Installer.new(config)
    try:
        result = installer.install(request)
    except exc.ArtifactNotFoundError:
        _fail(
            f"The artifact for application {application!r} "
            f"version {version!r} does not exist in bucket {config.bucket!r}!"
        )
    except exc.StorageError as e:
        _fail(f"S3 error {e.code}: {e.message}")
    except exc.LocalIOError as e:
        _fail(str(e))

    if result.status is InstallStatus.ALREADY_INSTALLED:
        typer.echo(f"{application} {version} already installed at {result.release_dir}")
    else:
        typer.echo(f"{application} {version} installed at {result.release_dir}")
    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)


@app.command()
def listbucket(
    bucket: T.Optional[str] = typer.Option(
        None, "--bucket", help="Bucket to list, defaults to the configured one."
    ),
    matching: T.Optional[str] = typer.Option(
        None, "--matching", help="Only show keys matching this regular expression."
    ),
    config_path: str = _config_option(),
) -> None:
    """
    List the keys in the artifact bucket.
    """
    config = _load_config(config_path)
    bucket = bucket or config.bucket
    try:
        keys = list_bucket(Storage(bsm=config.bsm), bucket, matching=matching)
    except exc.UsageError as e:
        _fail(str(e), EXIT_USAGE)

    try:
        for key in keys:
            typer.echo(key)
    except exc.BucketNotFoundError:
        _fail(f"The bucket {bucket!r} does not exist!")
    except exc.AccessDeniedError as e:
        _fail(f"Access denied listing bucket {bucket!r}: {e.message}")
    except exc.StorageError as e:
        _fail(f"S3 error {e.code}: {e.message}")


def run():  # pragma: no cover
    app()
