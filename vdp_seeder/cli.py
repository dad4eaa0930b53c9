"""
CLI for the VDP seeder.
Selects the dataset, fetch mode, logging level and inter-site delay.
"""

import sys
import asyncio
from pathlib import Path
from typing import Optional
import click
import yaml
from pydantic import ValidationError

from . import __version__
from .errors import CapabilityInitError
from .models import FetchEngine, SeederConfig


DATASETS = {
    'normal': {
        'input': './input/stellantis.txt',
        'output': './output/stellantis-vdp-playwright.txt',
    },
    'test': {
        'input': './input/test-site.txt',
        'output': './output/test-vdp-playwright.txt',
    },
}


@click.command()
@click.option(
    '--test',
    is_flag=True,
    help='Use the test dataset instead of the normal one'
)
@click.option(
    '--headed', '--no-headless',
    'headed',
    is_flag=True,
    help='Run browser in headed mode (show browser window)'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Enable detailed diagnostic logging'
)
@click.option(
    '--delay',
    type=click.FloatRange(min=0),
    help='Seconds to wait between sites (default: 3)'
)
@click.option(
    '--engine',
    type=click.Choice([e.value for e in FetchEngine]),
    help='Fetch backend: Playwright browser or plain HTTP (default: browser)'
)
@click.option(
    '--config',
    type=click.Path(),
    default='config.yaml',
    help='Path to configuration file (default: config.yaml)'
)
@click.option(
    '--input-file',
    type=click.Path(exists=True, dir_okay=False),
    help='Override the dataset site list'
)
@click.option(
    '--output-file',
    help='Override the dataset output file'
)
@click.option(
    '--browser-path',
    type=click.Path(exists=True, dir_okay=False),
    help='Chromium executable to launch instead of the bundled one'
)
@click.version_option(version=__version__, prog_name='VDP Seeder')
def main(
    test: bool,
    headed: bool,
    verbose: bool,
    delay: Optional[float],
    engine: Optional[str],
    config: str,
    input_file: Optional[str],
    output_file: Optional[str],
    browser_path: Optional[str]
):
    """
    Find one vehicle detail page URL per dealer site.

    Reads `<url>|<label>` lines, discovers each site's inventory sitemap and
    writes `<vdp_url>|<label>` lines for the sites that yielded one.

    Examples:

      # Normal dataset
      vdp-seeder

      # Test dataset, visible browser, detailed logs
      vdp-seeder --test --headed --verbose

      # Custom files, five seconds between sites
      vdp-seeder --input-file sites.txt --output-file seeds.txt --delay 5
    """
    config_data = load_config(config)

    try:
        seeder_config = build_seeder_config(
            config_data=config_data,
            test=test,
            headed=headed,
            verbose=verbose,
            delay=delay,
            engine=engine,
            input_file=input_file,
            output_file=output_file,
            browser_path=browser_path
        )
    except ValidationError as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(1)

    from .orchestrator import run_seeder

    try:
        asyncio.run(run_seeder(seeder_config))

    except CapabilityInitError as e:
        click.echo(f"\nError: {e}", err=True)
        click.echo("\nCannot proceed without a fetch backend. For the browser engine run:", err=True)
        click.echo("  playwright install chromium", err=True)
        sys.exit(1)
    except FileNotFoundError as e:
        click.echo(f"\nError: {e}", err=True)
        sys.exit(1)


def load_config(config_path: str) -> dict:
    """Load configuration from YAML file."""
    path = Path(config_path)

    if not path.exists():
        click.echo(f"Warning: Config file not found: {config_path}", err=True)
        click.echo("Using default configuration", err=True)
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        click.echo(f"Error loading config file: {e}", err=True)
        sys.exit(1)


def build_seeder_config(
    config_data: dict,
    test: bool = False,
    headed: bool = False,
    verbose: bool = False,
    delay: Optional[float] = None,
    engine: Optional[str] = None,
    input_file: Optional[str] = None,
    output_file: Optional[str] = None,
    browser_path: Optional[str] = None
) -> SeederConfig:
    """Build SeederConfig from config file values and CLI overrides."""

    dataset_name = 'test' if test else 'normal'
    dataset = {
        **DATASETS[dataset_name],
        **((config_data.get('datasets') or {}).get(dataset_name) or {}),
    }

    seeder_section = config_data.get('seeder') or {}
    browser_section = config_data.get('browser') or {}
    debug_section = config_data.get('debug') or {}

    values = dict(
        input_file=input_file or dataset['input'],
        output_file=output_file or dataset['output'],
        engine=engine or seeder_section.get('engine', FetchEngine.BROWSER.value),
        headless=False if headed else browser_section.get('headless', True),
        user_agent=browser_section.get('user_agent'),
        browser_path=browser_path or browser_section.get('executable_path'),
        locale=browser_section.get('locale', 'en-US'),
        timezone=browser_section.get('timezone', 'America/New_York'),
        homepage_timeout_ms=seeder_section.get('homepage_timeout_ms', 30000),
        robots_timeout_ms=seeder_section.get('robots_timeout_ms', 15000),
        primary_timeout_ms=seeder_section.get('primary_timeout_ms', 30000),
        fallback_timeout_ms=seeder_section.get('fallback_timeout_ms', 15000),
        delay_seconds=delay if delay is not None else seeder_section.get('delay_seconds', 3),
        verbose=verbose or debug_section.get('verbose', False),
        debug_log_file=debug_section.get('log_file'),
    )

    return SeederConfig(**values)


if __name__ == '__main__':
    main()
