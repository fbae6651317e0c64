import click

from acrhooks.azure_resources import RegistryManager
from acrhooks.config import DEFAULT_REGION, DEFAULT_SKU, SUPPORTED_SKUS, WEBHOOK_SERVICE_URI, SampleConfig, ServicePrincipal
from acrhooks.workflow import run_sample


def run_from_env(config: SampleConfig | None = None):
    """Authenticate with the service principal from the environment and run the sample."""
    try:
        principal = ServicePrincipal.from_env()
        manager = RegistryManager.from_service_principal(principal)
        run = run_sample(manager, config)
    except Exception as e:
        click.echo(f"❌ {type(e).__name__}: {e}")
        return None

    click.echo(f"✅ Sample completed, pushed {run.pushed_image}")
    return run


@click.group()
def cli():
    """acrhooks - container registry with webhooks sample."""
    pass


@cli.command()
@click.option('--region', default=DEFAULT_REGION, help=f'Azure region (default: {DEFAULT_REGION})')
@click.option('--sku', type=click.Choice(SUPPORTED_SKUS), default=DEFAULT_SKU,
              help=f'Registry SKU (default: {DEFAULT_SKU})')
@click.option('--webhook-uri', default=WEBHOOK_SERVICE_URI, help='Target URI for webhook deliveries')
@click.option('--remote-engine', default=None, envvar='DOCKER_REMOTE_HOST',
              help='Remote docker engine used when no local engine answers (e.g. tcp://host:2375)')
@click.option('--no-verify-push', is_flag=True, help='Skip checking the pushed tag through the registry API')
def run(region: str, sku: str, webhook_uri: str, remote_engine: str | None, no_verify_push: bool):
    """Create a registry with webhooks, push an image to it and list webhook events."""
    config = SampleConfig(
        region=region,
        sku=sku,
        webhook_uri=webhook_uri,
        remote_engine_url=remote_engine,
        verify_push=not no_verify_push,
    )
    run_from_env(config)


if __name__ == "__main__":
    cli()
