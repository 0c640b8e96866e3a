import sys
import asyncio
import logging
import click
import yaml
from blobmanager.auth import Authenticator, API_VERSION
from blobmanager.blob import BlobManager
from blobmanager.errors import BlobManagerError, RemoteRejection
from blobmanager.printer import FORMATS, format_output
from config import load_config, resolve_settings

REQUIRED = ('account_name', 'account_key', 'container')


def _fail(e: BlobManagerError):
    if isinstance(e, RemoteRejection):
        click.echo(f"Status code: {e.status_code}", err=True)
        click.echo(f"Response: {e.body}", err=True)
    else:
        click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _manager(ctx) -> (BlobManager, dict):
    obj = ctx.obj
    try:
        settings = resolve_settings(obj['conf'], required=REQUIRED, **obj['overrides'])
    except BlobManagerError as e:
        _fail(e)
    auth = Authenticator(
        account_name=settings['account_name'],
        account_key=settings['account_key'],
        api_version=settings.get('api_version') or API_VERSION
    )
    return BlobManager(auth, transport=obj.get('transport')), settings


@click.group(context_settings=dict(help_option_names=['--help']))
@click.option('--profile', default=None, help='Profile name from .config.yaml')
@click.option('--config', 'config_path', default='.config.yaml',
              help='Path to configuration file')
@click.option('--account-name', envvar='ACCOUNT_NAME', help='Storage account name')
@click.option('--account-key', envvar='ACCOUNT_KEY', help='Storage account key (base64)')
@click.option('--container', envvar='CONTAINER_NAME', help='Container name')
@click.option('--api-version', envvar='API_VERSION', help=f'x-ms-version (default {API_VERSION})')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, profile, config_path, account_name, account_key, container, api_version, verbose):
    """CLI tool for Azure Blob Storage with Shared Key authorization."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    conf = {}
    if profile:
        try:
            conf = load_config(profile, config_path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            click.echo(f"Error loading config: {e}", err=True)
            sys.exit(1)

    ctx.ensure_object(dict)
    ctx.obj.update({
        'profile': profile,
        'conf': conf,
        'overrides': {
            'account_name': account_name,
            'account_key': account_key,
            'container': container,
            'api_version': api_version,
        },
    })


@cli.command('download')
@click.argument('blob_name', envvar='BLOB_NAME')
@click.argument('destination', envvar='DOWNLOAD_PATH', type=click.Path(dir_okay=False))
@click.pass_context
def download_cmd(ctx, blob_name, destination):
    """Download a blob to a local file."""
    bm, settings = _manager(ctx)
    try:
        asyncio.run(bm.download_blob(settings['container'], blob_name, destination))
    except BlobManagerError as e:
        _fail(e)
    click.echo("File downloaded successfully.")


@cli.command('list')
@click.option('--prefix', envvar='PREFIX', default='', help='Filter prefix')
@click.option('--format', 'outfmt', default='plain', type=click.Choice(FORMATS))
@click.pass_context
def list_cmd(ctx, prefix, outfmt):
    """List blob names in the container (first page only)."""
    bm, settings = _manager(ctx)
    try:
        names = asyncio.run(bm.list_blobs(settings['container'], prefix=prefix))
        if outfmt == 'plain':
            for name in names:
                click.echo(name)
        else:
            format_output([{'name': name} for name in names], outfmt)
    except BlobManagerError as e:
        _fail(e)


@cli.command('upload')
@click.argument('blob_name', envvar='BLOB_NAME')
@click.argument('source', envvar='FILE_PATH', type=click.Path(dir_okay=False))
@click.option('--reject-empty/--allow-empty', default=False,
              help='Refuse to upload a zero-byte file')
@click.pass_context
def upload_cmd(ctx, blob_name, source, reject_empty):
    """Upload a local file as a block blob."""
    bm, settings = _manager(ctx)
    try:
        res = asyncio.run(bm.upload_blob(settings['container'], blob_name, source,
                                         reject_empty=reject_empty))
    except BlobManagerError as e:
        _fail(e)
    if not res['success']:
        click.echo("Failed to upload file.", err=True)
        click.echo(f"Status code: {res['status_code']}", err=True)
        click.echo(f"Response: {res['message']}", err=True)
        sys.exit(1)
    click.echo(f"File uploaded successfully to {res['url']}")


if __name__ == '__main__':
    cli()
